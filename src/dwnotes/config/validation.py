"""Settings sanitization — raw persisted mapping in, usable settings out.

INVARIANT: ``validate_settings`` never raises. Whatever is on disk, the
caller gets settings it can generate notes with.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from dwnotes.config.models import FOLDER_FIELDS, FORMAT_FIELDS, NoteSettings
from dwnotes.domain.paths import sanitize_folder


def _build_key_index() -> dict[str, str]:
    index: dict[str, str] = {}
    for name, field in NoteSettings.model_fields.items():
        index[name] = name
        index[name.replace("_", "-")] = name
        if field.alias:
            index[field.alias] = name
    return index


_KEY_INDEX = _build_key_index()


def resolve_setting_key(key: str) -> str | None:
    """Map a persisted, snake_case, or kebab-case key to its field name.

    Examples:
        >>> resolve_setting_key("dailyNoteFormat")
        'daily_note_format'
        >>> resolve_setting_key("weekly-notes-folder")
        'weekly_notes_folder'
        >>> resolve_setting_key("theme") is None
        True
    """
    return _KEY_INDEX.get(key)


def setting_keys() -> list[str]:
    """Persisted (camelCase) names of every setting, in declaration order."""
    return [field.alias or name for name, field in NoteSettings.model_fields.items()]


def validate_settings(
    raw: Mapping[str, Any] | None,
    defaults: NoteSettings | None = None,
) -> NoteSettings:
    """Merge *raw* over *defaults* and sanitize the result.

    - Unknown keys are ignored; known keys may use either naming style.
    - A format that is missing, not a string, empty, or whitespace-only
      falls back to the default.
    - Folders lose surrounding whitespace and leading/trailing separators;
      a non-string folder becomes the vault root (``""``).
    """
    base = defaults or NoteSettings()
    merged: dict[str, Any] = base.model_dump()

    if isinstance(raw, Mapping):
        for key, value in raw.items():
            name = _KEY_INDEX.get(key) if isinstance(key, str) else None
            if name is not None:
                merged[name] = value

    for name in FORMAT_FIELDS:
        value = merged[name]
        if not isinstance(value, str) or not value.strip():
            merged[name] = getattr(base, name)

    for name in FOLDER_FIELDS:
        value = merged[name]
        merged[name] = sanitize_folder(value) if isinstance(value, str) else ""

    return NoteSettings.model_validate(merged)
