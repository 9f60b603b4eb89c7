"""BaseService — shared foundation for dwnotes services.

Every service receives a :class:`NoteHost` at construction time and reaches
the clock, the files, and the settings store only through it.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from dwnotes.infrastructure.vault import NoteHost


class BaseService:
    """Base for all service-layer classes.

    Usage::

        class NoteService(BaseService):
            def create_daily_note(self) -> ServiceResult:
                reference = self._vault.now()
                ...
    """

    def __init__(self, vault: NoteHost) -> None:
        self._vault = vault
