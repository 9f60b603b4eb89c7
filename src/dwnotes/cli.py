"""Root CLI group for dwnotes with global flags and command registration."""

from __future__ import annotations

from pathlib import Path

import click

from dwnotes import __version__
from dwnotes.commands import register_commands
from dwnotes.commands._context import AppContext
from dwnotes.config.settings import AppSettings


@click.group(invoke_without_command=True)
@click.version_option(version=__version__, prog_name="dwnotes")
@click.option("--json", "json_output", is_flag=True, help="Structured JSON output.")
@click.option("-q", "--quiet", is_flag=True, help="Minimal output.")
@click.option("-v", "--verbose", is_flag=True, help="Detailed output with debug info.")
@click.option("--log-json", is_flag=True, help="Structured JSON log output to stderr.")
@click.option(
    "--vault",
    "vault_root",
    type=click.Path(file_okay=False, path_type=Path),
    default=None,
    help="Vault directory (default: discovered from the current directory).",
)
@click.pass_context
def cli(
    ctx: click.Context,
    json_output: bool,
    quiet: bool,
    verbose: bool,
    log_json: bool,
    vault_root: Path | None,
) -> None:
    """dwnotes — daily and weekly notes for a Markdown vault."""
    ctx.ensure_object(dict)
    settings = AppSettings.from_cli(
        vault_root=vault_root.resolve() if vault_root else None,
        json_output=json_output,
        quiet=quiet,
        verbose=verbose,
        log_json=log_json,
    )
    ctx.obj = AppContext(settings)
    if ctx.invoked_subcommand is None:
        click.echo(ctx.get_help())


register_commands(cli)
