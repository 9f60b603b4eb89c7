"""Tests for derived dates and cross-links of daily and weekly notes."""

from __future__ import annotations

from datetime import datetime

import pytest

from dwnotes.config.models import NoteSettings
from dwnotes.domain.periods import (
    WEEKDAY_NAMES,
    daily_links,
    format_date_range,
    range_end_pattern,
    week_bounds,
    weekly_links,
)
from dwnotes.errors import FormatError

TUESDAY = datetime(2026, 1, 6, 9, 30)


class TestWeekBounds:
    def test_midweek(self) -> None:
        start, end = week_bounds(TUESDAY)
        assert start == datetime(2026, 1, 5, 9, 30)
        assert end == datetime(2026, 1, 11, 9, 30)

    def test_sunday_belongs_to_preceding_monday(self) -> None:
        start, _ = week_bounds(datetime(2026, 1, 11))
        assert start == datetime(2026, 1, 5)


class TestDateRange:
    @pytest.mark.parametrize(
        ("pattern", "expected"),
        [
            ("MMMM Do", "Do"),
            ("MMM D", "D"),
            ("YYYY-MM-DD", "YYYY-MM-DD"),
            ("MMMM [the] Do", "Do"),
            ("", ""),
        ],
    )
    def test_end_pattern(self, pattern: str, expected: str) -> None:
        assert range_end_pattern(pattern) == expected

    def test_same_month(self) -> None:
        start, end = week_bounds(TUESDAY)
        assert format_date_range(start, end, "MMMM Do") == "January 5th - 11th"

    def test_cross_month_uses_full_pattern(self) -> None:
        start, end = datetime(2023, 1, 30), datetime(2023, 2, 5)
        assert format_date_range(start, end, "MMMM Do") == "January 30th - February 5th"

    def test_cross_year(self) -> None:
        start, end = week_bounds(datetime(2026, 1, 1))
        assert format_date_range(start, end, "MMM D") == "Dec 29 - Jan 4"

    def test_pattern_without_whitespace_repeats(self) -> None:
        start, end = week_bounds(TUESDAY)
        assert format_date_range(start, end, "YYYY-MM-DD") == "2026-01-05 - 2026-01-11"


class TestDailyLinks:
    def test_worked_example(self) -> None:
        links = daily_links(TUESDAY, NoteSettings())
        assert links.heading == "Tuesday January 6th, 2026"
        assert links.week == "2026 - Week 2"
        assert links.yesterday == "2026-01-05"
        assert links.tomorrow == "2026-01-07"

    def test_links_carry_folders(self) -> None:
        settings = NoteSettings(daily_notes_folder="Daily", weekly_notes_folder="Weekly")
        links = daily_links(TUESDAY, settings)
        assert links.week == "Weekly/2026 - Week 2"
        assert links.yesterday == "Daily/2026-01-05"

    def test_year_boundary(self) -> None:
        links = daily_links(datetime(2026, 1, 1), NoteSettings())
        assert links.yesterday == "2025-12-31"
        assert links.week == "2026 - Week 1"

    def test_invalid_format_raises(self) -> None:
        with pytest.raises(FormatError):
            daily_links(TUESDAY, NoteSettings(daily_note_format="[broken"))


class TestWeeklyLinks:
    def test_worked_example(self) -> None:
        links = weekly_links(TUESDAY, NoteSettings())
        assert links.date_range == "January 5th - 11th"
        assert links.last_week == "2026 - Week 1"
        assert links.next_week == "2026 - Week 3"
        assert [day.link for day in links.days] == [
            "2026-01-05",
            "2026-01-06",
            "2026-01-07",
            "2026-01-08",
            "2026-01-09",
            "2026-01-10",
            "2026-01-11",
        ]

    @pytest.mark.parametrize("day", range(5, 12))
    def test_monday_first_for_every_weekday(self, day: int) -> None:
        links = weekly_links(datetime(2026, 1, day), NoteSettings())
        assert tuple(d.name for d in links.days) == WEEKDAY_NAMES
        assert links.days[0].link == "2026-01-05"
        assert links.days[-1].link == "2026-01-11"

    def test_deterministic(self) -> None:
        settings = NoteSettings(weekly_notes_folder="W")
        assert weekly_links(TUESDAY, settings) == weekly_links(TUESDAY, settings)
