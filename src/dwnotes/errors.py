"""Exception taxonomy for note generation.

Domain and infrastructure code raise these; the service layer catches them
at the command boundary and converts them into a failed ``ServiceResult``.
"""

from __future__ import annotations


class NoteError(Exception):
    """Base class for every error raised while producing a note."""


class FormatError(NoteError):
    """A format pattern is malformed or a date could not be rendered."""

    def __init__(self, message: str, *, pattern: object = None) -> None:
        super().__init__(message)
        self.pattern = pattern


class ContentGenerationError(NoteError):
    """Building a note (file name, links, or body) failed."""


class FolderCreationError(NoteError):
    """The target folder for a note could not be created."""

    def __init__(self, message: str, *, folder: str) -> None:
        super().__init__(message)
        self.folder = folder


class WriteError(NoteError):
    """Creating, updating, or replacing a note file failed."""

    def __init__(self, message: str, *, path: str) -> None:
        super().__init__(message)
        self.path = path
