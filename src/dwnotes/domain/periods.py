"""Derived dates and cross-links for daily and weekly notes.

Pure functions of ``(reference, settings)``. The reference date is captured
once per command and threaded through here; nothing in this module reads
the clock.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import TYPE_CHECKING

from dwnotes.domain.dates import add_days, add_weeks, format_date, iso_weekday
from dwnotes.domain.paths import build_link_path

if TYPE_CHECKING:
    from dwnotes.config.models import NoteSettings

# Heading pattern for daily notes. Not user-configurable.
DAILY_HEADING_FORMAT = "dddd MMMM Do, YYYY"

# ISO order, Monday first.
WEEKDAY_NAMES = ("Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday", "Sunday")


@dataclass(frozen=True)
class DayLink:
    """One ``<Weekday> - [[link]]`` line of a weekly note."""

    name: str
    link: str


@dataclass(frozen=True)
class DailyLinks:
    heading: str
    week: str
    yesterday: str
    tomorrow: str


@dataclass(frozen=True)
class WeeklyLinks:
    date_range: str
    last_week: str
    days: tuple[DayLink, ...]
    next_week: str


def week_bounds(reference: datetime) -> tuple[datetime, datetime]:
    """Monday and Sunday of the ISO week containing *reference*."""
    week_start = iso_weekday(reference, 1)
    return week_start, add_days(week_start, 6)


def range_end_pattern(pattern: str) -> str:
    """Pattern used for the end of a same-month range.

    The last whitespace-delimited token of *pattern* (``"MMMM Do"`` gives
    ``"Do"``), or the whole pattern when it has no whitespace.
    """
    tokens = pattern.split()
    return tokens[-1] if tokens else pattern


def format_date_range(week_start: datetime, week_end: datetime, pattern: str) -> str:
    """``"January 5th - 11th"`` within a month, ``"January 30th - February 5th"`` across."""
    if week_start.month == week_end.month:
        end_pattern = range_end_pattern(pattern)
    else:
        end_pattern = pattern
    return f"{format_date(week_start, pattern)} - {format_date(week_end, end_pattern)}"


def _daily_link(moment: datetime, settings: NoteSettings) -> str:
    file_name = format_date(moment, settings.daily_note_format)
    return build_link_path(settings.daily_notes_folder, file_name)


def _weekly_link(moment: datetime, settings: NoteSettings) -> str:
    return build_link_path(
        settings.weekly_notes_folder, format_date(moment, settings.weekly_note_format)
    )


def daily_links(reference: datetime, settings: NoteSettings) -> DailyLinks:
    """Heading and links for the daily note of *reference*.

    The week link renders *reference* itself with the weekly format, so it
    names the same weekly note ``create weekly`` would produce today.
    """
    return DailyLinks(
        heading=format_date(reference, DAILY_HEADING_FORMAT),
        week=_weekly_link(reference, settings),
        yesterday=_daily_link(add_days(reference, -1), settings),
        tomorrow=_daily_link(add_days(reference, 1), settings),
    )


def weekly_links(reference: datetime, settings: NoteSettings) -> WeeklyLinks:
    """Date range, day links, and neighbour-week links for *reference*.

    Last/next week offset *reference* by one week rather than the week start.
    """
    week_start, week_end = week_bounds(reference)
    days = tuple(
        DayLink(name=name, link=_daily_link(add_days(week_start, index), settings))
        for index, name in enumerate(WEEKDAY_NAMES)
    )
    return WeeklyLinks(
        date_range=format_date_range(week_start, week_end, settings.weekly_date_range_format),
        last_week=_weekly_link(add_weeks(reference, -1), settings),
        days=days,
        next_week=_weekly_link(add_weeks(reference, 1), settings),
    )
