"""Command: vault initialization (named init_cmd to avoid shadowing builtins)."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from dwnotes.commands._base import DwCommand

if TYPE_CHECKING:
    from dwnotes.commands._context import AppContext

_INIT_EXAMPLES = """\
  dwnotes init
  dwnotes --vault ~/Notes init
  dwnotes --json init"""


@click.command("init", cls=DwCommand, examples=_INIT_EXAMPLES)
@click.pass_obj
def init_cmd(app: AppContext) -> None:
    """Mark the vault directory with .dwnotes/settings.json."""
    app.emit(app.settings_service().initialize())
