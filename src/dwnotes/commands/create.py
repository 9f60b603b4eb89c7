"""Command group: note creation (daily, weekly)."""

from __future__ import annotations

from datetime import datetime
from typing import TYPE_CHECKING

import click

from dwnotes.commands._base import DwGroup

if TYPE_CHECKING:
    from dwnotes.commands._context import AppContext

_CREATE_EXAMPLES = """\
  dwnotes create daily
  dwnotes create weekly
  dwnotes create daily --date 2026-01-06 --no-open
  dwnotes --json create weekly --date 2026-01-30"""

_DATE_OPTION = click.option(
    "--date",
    "reference",
    type=click.DateTime(formats=["%Y-%m-%d"]),
    default=None,
    help="Create the note for this date instead of today (YYYY-MM-DD).",
)
_NO_OPEN_OPTION = click.option(
    "--no-open", is_flag=True, help="Write the note without opening it."
)


@click.group(cls=DwGroup, examples=_CREATE_EXAMPLES)
@click.pass_obj
def create(app: AppContext) -> None:
    """Create daily and weekly notes."""


@create.command(
    examples="""\
  dwnotes create daily
  dwnotes create daily --date 2026-01-06
  dwnotes -q create daily --no-open"""
)
@_DATE_OPTION
@_NO_OPEN_OPTION
@click.pass_obj
def daily(app: AppContext, reference: datetime | None, no_open: bool) -> None:
    """Create today's daily note, or prepend to it if it exists."""
    result = app.note_service(no_open=no_open).create_daily_note(reference)
    app.emit(result)


@create.command(
    examples="""\
  dwnotes create weekly
  dwnotes create weekly --date 2026-01-30
  dwnotes --json create weekly --no-open"""
)
@_DATE_OPTION
@_NO_OPEN_OPTION
@click.pass_obj
def weekly(app: AppContext, reference: datetime | None, no_open: bool) -> None:
    """Create this week's weekly note, or prepend to it if it exists."""
    result = app.note_service(no_open=no_open).create_weekly_note(reference)
    app.emit(result)
