"""NoteGenerator — renders daily and weekly notes for a reference date.

Pipeline: FILE NAME → LINKS → TEMPLATE → GeneratedNote

Generation is a pure function of ``(reference, settings)`` and the template
set: no clock reads, no file I/O beyond loading templates.
"""

from __future__ import annotations

import logging
from datetime import datetime
from pathlib import Path
from typing import TYPE_CHECKING

from jinja2 import TemplateError

from dwnotes.domain.dates import format_date
from dwnotes.domain.paths import build_file_path, build_link_path
from dwnotes.domain.periods import daily_links, weekly_links
from dwnotes.domain.types import GeneratedNote, NoteKind
from dwnotes.errors import ContentGenerationError, FormatError
from dwnotes.infrastructure.templates import build_template_environment

if TYPE_CHECKING:
    from jinja2 import Environment

    from dwnotes.config.models import NoteSettings

logger = logging.getLogger(__name__)

TEMPLATE_NAMES: dict[NoteKind, str] = {
    NoteKind.DAILY: "daily.md.j2",
    NoteKind.WEEKLY: "weekly.md.j2",
}


class NoteGenerator:
    """Builds :class:`GeneratedNote` records from settings and templates.

    Args:
        settings: Validated note settings.
        vault_root: When given, templates in ``.dwnotes/templates`` override
            the packaged ones.
    """

    def __init__(self, settings: NoteSettings, *, vault_root: Path | None = None) -> None:
        self._settings = settings
        self._env: Environment = build_template_environment("notes", vault_root=vault_root)

    @property
    def settings(self) -> NoteSettings:
        return self._settings

    def generate(self, kind: NoteKind, reference: datetime) -> GeneratedNote:
        """Dispatch to :meth:`daily` or :meth:`weekly`."""
        if kind is NoteKind.DAILY:
            return self.daily(reference)
        return self.weekly(reference)

    def daily(self, reference: datetime) -> GeneratedNote:
        """The daily note for *reference*.

        Raises:
            ContentGenerationError: If a format pattern fails to render.
        """
        try:
            links = daily_links(reference, self._settings)
            context = {
                "heading": links.heading,
                "week": links.week,
                "yesterday": links.yesterday,
                "tomorrow": links.tomorrow,
            }
        except FormatError as exc:
            raise ContentGenerationError(f"Cannot build daily note: {exc}") from exc
        return self._build(NoteKind.DAILY, reference, context)

    def weekly(self, reference: datetime) -> GeneratedNote:
        """The weekly note for the week containing *reference*.

        Raises:
            ContentGenerationError: If a format pattern fails to render.
        """
        try:
            links = weekly_links(reference, self._settings)
            context = {
                "date_range": links.date_range,
                "last_week": links.last_week,
                "days": links.days,
                "next_week": links.next_week,
            }
        except FormatError as exc:
            raise ContentGenerationError(f"Cannot build weekly note: {exc}") from exc
        return self._build(NoteKind.WEEKLY, reference, context)

    def _build(
        self, kind: NoteKind, reference: datetime, context: dict[str, object]
    ) -> GeneratedNote:
        if kind is NoteKind.DAILY:
            folder, pattern = self._settings.daily_notes_folder, self._settings.daily_note_format
        else:
            folder, pattern = self._settings.weekly_notes_folder, self._settings.weekly_note_format

        try:
            file_name = format_date(reference, pattern)
        except FormatError as exc:
            raise ContentGenerationError(f"Cannot build {kind} note file name: {exc}") from exc

        try:
            body = self._env.get_template(TEMPLATE_NAMES[kind]).render(**context)
        except TemplateError as exc:
            raise ContentGenerationError(f"Cannot render {kind} note template: {exc}") from exc

        note = GeneratedNote(
            kind=kind,
            file_name=file_name,
            folder=folder,
            file_path=build_file_path(folder, file_name),
            link_path=build_link_path(folder, file_name),
            body=body,
        )
        logger.debug("Generated %s note %s", kind, note.file_path)
        return note
