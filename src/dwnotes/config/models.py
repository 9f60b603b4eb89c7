"""Pydantic configuration models with code-baked defaults.

Sparse contract: defaults are baked here, ``.dwnotes/settings.json`` only
holds overrides. Persisted keys are camelCase (``dailyNoteFormat``) so an
existing plugin ``data.json`` can be dropped in unchanged; python code uses
the snake_case field names.
"""

from __future__ import annotations

from pydantic import BaseModel
from pydantic.alias_generators import to_camel

DEFAULT_DAILY_NOTE_FORMAT = "YYYY-MM-DD"
DEFAULT_WEEKLY_NOTE_FORMAT = "GGGG - [Week] W"
DEFAULT_WEEKLY_DATE_RANGE_FORMAT = "MMMM Do"

FORMAT_FIELDS = ("daily_note_format", "weekly_note_format", "weekly_date_range_format")
FOLDER_FIELDS = ("daily_notes_folder", "weekly_notes_folder")


class NoteSettings(BaseModel):
    """Folders and format patterns for daily and weekly notes.

    Build instances through :func:`dwnotes.config.validation.validate_settings`
    when the input comes from users or disk; the model itself does not
    sanitize.
    """

    model_config = {
        "frozen": True,
        "alias_generator": to_camel,
        "populate_by_name": True,
    }

    daily_notes_folder: str = ""
    weekly_notes_folder: str = ""
    daily_note_format: str = DEFAULT_DAILY_NOTE_FORMAT
    weekly_note_format: str = DEFAULT_WEEKLY_NOTE_FORMAT
    weekly_date_range_format: str = DEFAULT_WEEKLY_DATE_RANGE_FORMAT

    def to_persisted(self) -> dict[str, str]:
        """Flat camelCase mapping as stored in ``settings.json``."""
        return self.model_dump(by_alias=True)
