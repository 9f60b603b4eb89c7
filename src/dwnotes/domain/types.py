"""Note kinds and the generated-note record."""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum


class NoteKind(StrEnum):
    """The two periodic note types."""

    DAILY = "daily"
    WEEKLY = "weekly"

    @property
    def label(self) -> str:
        """Capitalized name for user-facing messages (``Daily``, ``Weekly``)."""
        return self.value.capitalize()


@dataclass(frozen=True)
class GeneratedNote:
    """A rendered note, ready to be written. Transient, never persisted."""

    kind: NoteKind
    file_name: str  # rendered with the daily/weekly note format
    folder: str  # sanitized folder, "" for the vault root
    file_path: str  # normalized storage path including .md
    link_path: str  # wikilink target, no extension
    body: str
