"""SettingsService — show, edit, reset, and initialize note settings.

Every edit is validated into a fresh :class:`NoteSettings` and persisted
immediately. Each format comes with a live preview rendered against the
current date; an invalid pattern previews as ``Invalid format`` instead of
failing the command.
"""

from __future__ import annotations

from datetime import datetime

from dwnotes.config.models import FOLDER_FIELDS, NoteSettings
from dwnotes.config.validation import resolve_setting_key, setting_keys, validate_settings
from dwnotes.domain.dates import try_format
from dwnotes.domain.periods import week_bounds
from dwnotes.services.base import BaseService
from dwnotes.services.result import ErrorCode, Op, ServiceResult, SettingsData
from dwnotes.services.telemetry import traced

INVALID_FORMAT = "Invalid format"

# Reference list shown next to the settings.
FORMAT_EXAMPLES: tuple[tuple[str, str], ...] = (
    ("YYYY-MM-DD", "daily notes"),
    ("YYYY/MM/DD", "daily notes"),
    ("YYYY.MM.DD", "daily notes"),
    ("YYYYMMDD", "daily notes"),
    ("GGGG-[W]W", "weekly notes"),
    ("GGGG - [Week] W", "weekly notes"),
    ("MMMM Do", "date ranges"),
    ("MMM D", "date ranges"),
)


def _save_failed(op: Op, exc: OSError) -> ServiceResult:
    return ServiceResult.failure(
        op, ErrorCode.SAVE_FAILED, f"Could not save settings: {exc}", exc
    )


# ---------------------------------------------------------------------------
# Previews
# ---------------------------------------------------------------------------


def preview_format(now: datetime, pattern: str) -> str:
    """``Preview: <rendered>`` or ``Preview: Invalid format``."""
    return f"Preview: {try_format(now, pattern).text_or(INVALID_FORMAT)}"


def preview_date_range(now: datetime, pattern: str) -> str:
    """Full pattern on both ends of the current ISO week."""
    week_start, week_end = week_bounds(now)
    start = try_format(week_start, pattern)
    end = try_format(week_end, pattern)
    if not (start.ok and end.ok):
        return f"Preview: {INVALID_FORMAT}"
    return f"Preview: {start.text} - {end.text}"


def preview_folder(now: datetime, folder: str, pattern: str) -> str:
    """``Example path: <folder>/<file name>.md`` for today's note."""
    file_name = try_format(now, pattern).text_or(INVALID_FORMAT)
    path = f"{folder}/{file_name}.md" if folder else f"{file_name}.md"
    return f"Example path: {path}"


def _persisted_key(name: str) -> str:
    field = NoteSettings.model_fields[name]
    return field.alias or name


def build_previews(settings: NoteSettings, now: datetime) -> dict[str, str]:
    """Preview line for every setting, keyed by persisted name."""
    return {
        "dailyNotesFolder": preview_folder(
            now, settings.daily_notes_folder, settings.daily_note_format
        ),
        "weeklyNotesFolder": preview_folder(
            now, settings.weekly_notes_folder, settings.weekly_note_format
        ),
        "dailyNoteFormat": preview_format(now, settings.daily_note_format),
        "weeklyNoteFormat": preview_format(now, settings.weekly_note_format),
        "weeklyDateRangeFormat": preview_date_range(now, settings.weekly_date_range_format),
    }


# ---------------------------------------------------------------------------
# Service
# ---------------------------------------------------------------------------


class SettingsService(BaseService):
    """Reads and writes the vault's note settings."""

    def current(self) -> NoteSettings:
        """Settings as persisted in the vault, validated."""
        return validate_settings(self._vault.load_settings())

    @traced
    def show(self) -> ServiceResult:
        settings = self.current()
        return self._respond(Op.SHOW_SETTINGS, settings)

    @traced
    def set(self, key: str, value: str) -> ServiceResult:
        """Validate and persist one setting.

        A blank format falls back to its default and a folder is sanitized;
        either adjustment is reported as a warning.
        """
        op = Op.SET_SETTING
        name = resolve_setting_key(key)
        if name is None:
            return ServiceResult.failure(
                op,
                ErrorCode.UNKNOWN_SETTING,
                f"Unknown setting {key!r}. Valid settings: {', '.join(setting_keys())}",
            )

        current = self.current()
        updated = validate_settings({name: value}, defaults=current)
        stored = getattr(updated, name)

        warnings: list[str] = []
        if stored != value:
            if name in FOLDER_FIELDS:
                warnings.append(f"Folder sanitized to {stored!r}")
            else:
                warnings.append(f"Blank format replaced with {stored!r}")

        try:
            self._vault.save_settings(updated)
        except OSError as exc:
            return _save_failed(op, exc)

        return self._respond(op, updated, warnings=warnings, key=_persisted_key(name))

    @traced
    def reset(self) -> ServiceResult:
        """Restore every setting to its default."""
        op = Op.RESET_SETTINGS
        defaults = NoteSettings()
        try:
            self._vault.save_settings(defaults)
        except OSError as exc:
            return _save_failed(op, exc)
        return self._respond(op, defaults)

    @traced
    def initialize(self) -> ServiceResult:
        """Write the settings file so the directory is recognised as a vault.

        Existing settings are validated and kept.
        """
        op = Op.INIT
        raw = self._vault.load_settings()
        settings = validate_settings(raw)
        warnings = ["Vault already initialized; existing settings kept"] if raw else []
        try:
            self._vault.save_settings(settings)
        except OSError as exc:
            return _save_failed(op, exc)
        return self._respond(op, settings, warnings=warnings)

    def _respond(
        self,
        op: Op,
        settings: NoteSettings,
        *,
        warnings: list[str] | None = None,
        key: str | None = None,
    ) -> ServiceResult:
        data: SettingsData = {
            "settings": settings.to_persisted(),
            "previews": build_previews(settings, self._vault.now()),
        }
        if key is not None:
            data["key"] = key
        return ServiceResult.success(op, data, warnings=warnings)
