"""Tests for settings sanitization and key resolution."""

from __future__ import annotations

from typing import Any

import pytest

from dwnotes.config.models import (
    DEFAULT_DAILY_NOTE_FORMAT,
    DEFAULT_WEEKLY_DATE_RANGE_FORMAT,
    DEFAULT_WEEKLY_NOTE_FORMAT,
    NoteSettings,
)
from dwnotes.config.validation import resolve_setting_key, setting_keys, validate_settings


class TestValidateSettings:
    def test_empty_input_gives_defaults(self) -> None:
        assert validate_settings({}) == NoteSettings()
        assert validate_settings(None) == NoteSettings()

    @pytest.mark.parametrize("raw", [[], "settings", 42])
    def test_non_mapping_gives_defaults(self, raw: Any) -> None:
        assert validate_settings(raw) == NoteSettings()

    def test_camel_case_keys(self) -> None:
        result = validate_settings(
            {"dailyNotesFolder": "Daily", "weeklyNoteFormat": "GGGG-[W]W"}
        )
        assert result.daily_notes_folder == "Daily"
        assert result.weekly_note_format == "GGGG-[W]W"
        assert result.daily_note_format == DEFAULT_DAILY_NOTE_FORMAT

    def test_snake_and_kebab_keys(self) -> None:
        result = validate_settings({"daily_notes_folder": "A", "weekly-notes-folder": "B"})
        assert result.daily_notes_folder == "A"
        assert result.weekly_notes_folder == "B"

    def test_unknown_keys_ignored(self) -> None:
        assert validate_settings({"theme": "dark", 3: "x"}) == NoteSettings()

    def test_folder_sanitized(self) -> None:
        assert validate_settings({"dailyNotesFolder": "/Notes/"}).daily_notes_folder == "Notes"

    @pytest.mark.parametrize("value", ["", "   ", None, 5])
    def test_blank_or_invalid_folder_is_root(self, value: Any) -> None:
        assert validate_settings({"weeklyNotesFolder": value}).weekly_notes_folder == ""

    @pytest.mark.parametrize("value", ["", "   ", None, 7, ["YYYY"]])
    def test_blank_or_invalid_format_falls_back(self, value: Any) -> None:
        result = validate_settings(
            {
                "dailyNoteFormat": value,
                "weeklyNoteFormat": value,
                "weeklyDateRangeFormat": value,
            }
        )
        assert result.daily_note_format == DEFAULT_DAILY_NOTE_FORMAT
        assert result.weekly_note_format == DEFAULT_WEEKLY_NOTE_FORMAT
        assert result.weekly_date_range_format == DEFAULT_WEEKLY_DATE_RANGE_FORMAT

    def test_format_kept_verbatim(self) -> None:
        result = validate_settings({"dailyNoteFormat": " YYYY "})
        assert result.daily_note_format == " YYYY "

    def test_blank_format_falls_back_to_given_defaults(self) -> None:
        current = NoteSettings(daily_note_format="YYYYMMDD", daily_notes_folder="Daily")
        result = validate_settings({"dailyNoteFormat": ""}, defaults=current)
        assert result.daily_note_format == "YYYYMMDD"
        assert result.daily_notes_folder == "Daily"

    def test_idempotent(self) -> None:
        raw = {
            "dailyNotesFolder": " /Journal/Daily/ ",
            "weeklyNotesFolder": "",
            "dailyNoteFormat": "YYYY.MM.DD",
            "weeklyNoteFormat": "",
            "weeklyDateRangeFormat": "MMM D",
        }
        once = validate_settings(raw)
        assert validate_settings(once.to_persisted()) == once

    def test_valid_record_unchanged(self) -> None:
        settings = NoteSettings(
            daily_notes_folder="Daily",
            weekly_notes_folder="Weekly",
            daily_note_format="YYYY/MM/DD",
        )
        assert validate_settings(settings.to_persisted()) == settings


class TestKeys:
    @pytest.mark.parametrize(
        ("key", "expected"),
        [
            ("dailyNoteFormat", "daily_note_format"),
            ("daily_note_format", "daily_note_format"),
            ("weekly-date-range-format", "weekly_date_range_format"),
            ("weeklyNotesFolder", "weekly_notes_folder"),
            ("theme", None),
            ("DailyNoteFormat", None),
        ],
    )
    def test_resolve(self, key: str, expected: str | None) -> None:
        assert resolve_setting_key(key) == expected

    def test_setting_keys_are_persisted_names(self) -> None:
        assert setting_keys() == [
            "dailyNotesFolder",
            "weeklyNotesFolder",
            "dailyNoteFormat",
            "weeklyNoteFormat",
            "weeklyDateRangeFormat",
        ]


class TestNoteSettings:
    def test_persisted_form_is_camel_case(self) -> None:
        assert NoteSettings().to_persisted() == {
            "dailyNotesFolder": "",
            "weeklyNotesFolder": "",
            "dailyNoteFormat": "YYYY-MM-DD",
            "weeklyNoteFormat": "GGGG - [Week] W",
            "weeklyDateRangeFormat": "MMMM Do",
        }

    def test_frozen(self) -> None:
        settings = NoteSettings()
        with pytest.raises(Exception):
            settings.daily_notes_folder = "x"  # type: ignore[misc]
