"""NoteWriter — create a note or prepend to the existing one, then open it.

Merge policy: new content goes above whatever the file already holds,
separated by a single newline. The prepend runs through the vault's atomic
``process`` primitive so no other writer can interleave between the read
and the write.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from dwnotes.errors import WriteError
from dwnotes.services.base import BaseService
from dwnotes.services.result import NoteData, Op, ServiceResult
from dwnotes.services.telemetry import trace_span

if TYPE_CHECKING:
    from dwnotes.domain.types import NoteKind
    from dwnotes.infrastructure.vault import NoteHost

logger = logging.getLogger(__name__)


def prepend(body: str, existing: str) -> str:
    """Merge *body* above *existing* content."""
    return f"{body}\n{existing}"


class NoteWriter(BaseService):
    """Writes generated notes into the vault.

    Args:
        vault: Host capabilities.
        open_note: Open the note after writing it.
    """

    def __init__(self, vault: NoteHost, *, open_note: bool = True) -> None:
        super().__init__(vault)
        self._open_note = open_note

    def write_note(self, file_path: str, body: str, kind: NoteKind) -> ServiceResult:
        """Create *file_path* with *body*, or prepend *body* to it.

        Opening the note afterwards is best-effort: a failure becomes a
        warning on the result.

        Raises:
            WriteError: If the file could not be created or updated. The file
                is left exactly as it was.
        """
        warnings: list[str] = []
        try:
            if self._vault.exists(file_path):
                with trace_span("prepend"):
                    self._vault.process(file_path, lambda existing: prepend(body, existing))
                action = "prepended"
                message = f"{kind.label} note template added to existing file"
            else:
                with trace_span("create"):
                    self._vault.create_file(file_path, body)
                action = "created"
                message = f"{kind.label} note created"
        except (OSError, ValueError) as exc:
            raise WriteError(f"Could not write {file_path}: {exc}", path=file_path) from exc

        if self._open_note:
            with trace_span("open"):
                try:
                    self._vault.open_file(file_path)
                except Exception as exc:
                    logger.warning("Could not open %s: %s", file_path, exc)
                    warnings.append(f"Note written but could not be opened: {exc}")

        data: NoteData = {
            "path": file_path,
            "kind": str(kind),
            "action": action,
            "message": message,
        }
        return ServiceResult.success(Op.WRITE_NOTE, data, warnings=warnings)
