"""Command group: note settings (show, set, reset)."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from dwnotes.commands._base import DwGroup
from dwnotes.config.validation import setting_keys

if TYPE_CHECKING:
    from dwnotes.commands._context import AppContext

_SETTINGS_EXAMPLES = """\
  dwnotes settings show
  dwnotes settings set dailyNotesFolder Journal/Daily
  dwnotes settings set weekly-note-format "GGGG-[W]W"
  dwnotes settings reset"""


@click.group(cls=DwGroup, examples=_SETTINGS_EXAMPLES, format_reference=True)
@click.pass_obj
def settings(app: AppContext) -> None:
    """Show and edit the vault's note settings."""


@settings.command(
    examples="""\
  dwnotes settings show
  dwnotes --json settings show""",
    format_reference=True,
)
@click.pass_obj
def show(app: AppContext) -> None:
    """Show every setting with a live preview."""
    app.emit(app.settings_service().show())


@settings.command(
    "set",
    examples=f"""\
  dwnotes settings set dailyNotesFolder Journal/Daily
  dwnotes settings set daily_note_format YYYY.MM.DD
  dwnotes settings set weeklyDateRangeFormat "MMM D"

Settings: {", ".join(setting_keys())}""",
    format_reference=True,
)
@click.argument("key")
@click.argument("value")
@click.pass_obj
def set_cmd(app: AppContext, key: str, value: str) -> None:
    """Validate and save one setting.

    KEY accepts camelCase, snake_case, or kebab-case names.
    """
    app.emit(app.settings_service().set(key, value))


@settings.command(
    examples="""\
  dwnotes settings reset
  dwnotes --json settings reset"""
)
@click.pass_obj
def reset(app: AppContext) -> None:
    """Restore every setting to its default."""
    app.emit(app.settings_service().reset())
