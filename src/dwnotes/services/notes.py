"""NoteService — the ``create daily`` / ``create weekly`` commands.

Pipeline: CAPTURE NOW → GENERATE → ENSURE FOLDER → WRITE → OPEN → RESPOND

This is the command boundary: every :class:`NoteError` raised below is
logged here and returned as a failed :class:`ServiceResult`.
"""

from __future__ import annotations

from datetime import datetime
from pathlib import Path
from typing import TYPE_CHECKING

import structlog

from dwnotes.domain.paths import normalize_path
from dwnotes.domain.types import NoteKind
from dwnotes.errors import ContentGenerationError, FolderCreationError, WriteError
from dwnotes.services.base import BaseService
from dwnotes.services.generate import NoteGenerator
from dwnotes.services.result import ErrorCode, NoteData, Op, ServiceResult
from dwnotes.services.telemetry import get_current_span, trace_span, traced
from dwnotes.services.writer import NoteWriter

if TYPE_CHECKING:
    from dwnotes.config.models import NoteSettings
    from dwnotes.infrastructure.vault import NoteHost

log = structlog.get_logger(__name__)


def failure_message(kind: NoteKind) -> str:
    """User-facing message for a failed note command."""
    return (
        f"Failed to create {kind} note. "
        "The file may be open elsewhere or the format may be invalid."
    )


def _failed(op: Op, kind: NoteKind, code: ErrorCode, exc: Exception) -> ServiceResult:
    return ServiceResult.failure(op, code, failure_message(kind), exc)


class NoteService(BaseService):
    """Creates daily and weekly notes in a vault.

    Args:
        vault: Host capabilities (clock, files, opener).
        settings: Validated note settings.
        open_note: Open the note after writing it.
        vault_root: Enables per-vault template overrides.
    """

    def __init__(
        self,
        vault: NoteHost,
        settings: NoteSettings,
        *,
        open_note: bool = True,
        vault_root: Path | None = None,
    ) -> None:
        super().__init__(vault)
        self._generator = NoteGenerator(settings, vault_root=vault_root)
        self._writer = NoteWriter(vault, open_note=open_note)

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    @traced
    def create_daily_note(self, reference: datetime | None = None) -> ServiceResult:
        """Create (or prepend to) today's daily note.

        *reference* overrides the vault clock; it is captured once and used
        for every derived date.
        """
        return self._create(NoteKind.DAILY, reference)

    @traced
    def create_weekly_note(self, reference: datetime | None = None) -> ServiceResult:
        """Create (or prepend to) this week's weekly note."""
        return self._create(NoteKind.WEEKLY, reference)

    # ------------------------------------------------------------------
    # Pipeline
    # ------------------------------------------------------------------

    def _create(self, kind: NoteKind, reference: datetime | None) -> ServiceResult:
        op = Op.CREATE_DAILY_NOTE if kind is NoteKind.DAILY else Op.CREATE_WEEKLY_NOTE
        moment = reference if reference is not None else self._vault.now()

        span = get_current_span()
        if span is not None:
            span.annotate("reference", moment.isoformat())

        try:
            with trace_span("generate"):
                note = self._generator.generate(kind, moment)
            with trace_span("ensure_folder"):
                self._ensure_folder(note.folder)
            with trace_span("write"):
                written = self._writer.write_note(note.file_path, note.body, kind)
        except ContentGenerationError as exc:
            log.error("note.generation_failed", kind=str(kind), error=str(exc), exc_info=exc)
            return _failed(op, kind, ErrorCode.CONTENT_GENERATION_FAILED, exc)
        except FolderCreationError as exc:
            log.error("note.folder_failed", kind=str(kind), folder=exc.folder, exc_info=exc)
            return _failed(op, kind, ErrorCode.FOLDER_CREATION_FAILED, exc)
        except WriteError as exc:
            log.error("note.write_failed", kind=str(kind), path=exc.path, exc_info=exc)
            return _failed(op, kind, ErrorCode.WRITE_FAILED, exc)

        log.info("note.written", kind=str(kind), path=note.file_path, action=written.data["action"])
        data: NoteData = {
            **written.data,  # type: ignore[typeddict-item]
            "reference": moment.isoformat(),
            "link": note.link_path,
        }
        return ServiceResult.success(op, data, warnings=written.warnings)

    def _ensure_folder(self, folder: str) -> None:
        """Create *folder* unless it is the vault root or already exists."""
        if not folder:
            return
        path = normalize_path(folder)
        try:
            if not self._vault.exists(path):
                self._vault.create_folder(path)
        except (OSError, ValueError) as exc:
            raise FolderCreationError(
                f"Could not create folder {path}: {exc}", folder=path
            ) from exc
