"""Click base classes with ``--examples`` and a date-format reference.

``--examples`` prints usage examples and exits, keeping ``--help`` short.
Commands that take a format pattern (``create``, ``settings``) pass
``format_reference=True`` to append the pattern cheat sheet: each sample
pattern rendered against a fixed date, followed by the long date formats.
"""

from __future__ import annotations

from datetime import datetime
from typing import Any

import click

from dwnotes.domain.dates import LONG_DATE_FORMATS, format_date
from dwnotes.services.settings import FORMAT_EXAMPLES

# Rendered samples are stable across runs.
SAMPLE_DATE = datetime(2026, 1, 6, 9, 30)


def format_reference() -> str:
    """Cheat sheet of format patterns, rendered against :data:`SAMPLE_DATE`."""
    lines = [f"Format patterns (rendered for {SAMPLE_DATE:%Y-%m-%d %H:%M}):"]
    for pattern, use in FORMAT_EXAMPLES:
        sample = format_date(SAMPLE_DATE, pattern)
        lines.append(f"  {pattern:<18} {sample:<22} {use}")
    lines.append("")
    lines.append("Long date formats:")
    for token, pattern in LONG_DATE_FORMATS.items():
        lines.append(f"  {token:<18} {format_date(SAMPLE_DATE, token)}")
    return "\n".join(lines)


def _add_examples_option(cmd: click.Command, examples: str, *, with_formats: bool) -> None:
    """Attach an eager ``--examples`` flag to a Click command or group."""

    def show_examples(ctx: click.Context, _param: click.Parameter, value: bool) -> None:
        if not value or ctx.resilient_parsing:
            return
        click.echo(f"Examples for '{ctx.command_path}':\n")
        click.echo(examples)
        if with_formats:
            click.echo()
            click.echo(format_reference())
        ctx.exit(0)

    cmd.params.append(
        click.Option(
            ["--examples"],
            is_flag=True,
            expose_value=False,
            is_eager=True,
            callback=show_examples,
            help="Show usage examples"
            + (" and the date-format reference." if with_formats else "."),
        )
    )


class DwCommand(click.Command):
    """Command with ``--examples``; ``format_reference`` adds the pattern sheet."""

    def __init__(
        self,
        *args: Any,
        examples: str | None = None,
        format_reference: bool = False,
        **kwargs: Any,
    ) -> None:
        super().__init__(*args, **kwargs)
        self.examples = examples
        if examples:
            _add_examples_option(self, examples, with_formats=format_reference)


class DwGroup(click.Group):
    """Group with ``--examples``.

    Subcommands are :class:`DwCommand` by default, so ``examples=`` and
    ``format_reference=`` work on ``@group.command`` without ``cls=``.
    """

    command_class = DwCommand

    def __init__(
        self,
        *args: Any,
        examples: str | None = None,
        format_reference: bool = False,
        **kwargs: Any,
    ) -> None:
        super().__init__(*args, **kwargs)
        self.examples = examples
        if examples:
            _add_examples_option(self, examples, with_formats=format_reference)
