"""ServiceResult and ServiceError — what every note and settings operation returns.

INVARIANT: All public service methods return ServiceResult. A
:class:`~dwnotes.errors.NoteError` raised below the service layer becomes a
failed result carrying one of the :class:`ErrorCode` values, never a
traceback on the CLI.
"""

from __future__ import annotations

from enum import StrEnum
from typing import Any, Literal, TypedDict

from pydantic import BaseModel, Field


class Op(StrEnum):
    """Operation names, used for rendering dispatch and in JSON output."""

    CREATE_DAILY_NOTE = "create_daily_note"
    CREATE_WEEKLY_NOTE = "create_weekly_note"
    WRITE_NOTE = "write_note"
    SHOW_SETTINGS = "show_settings"
    SET_SETTING = "set_setting"
    RESET_SETTINGS = "reset_settings"
    INIT = "init"


class ErrorCode(StrEnum):
    CONTENT_GENERATION_FAILED = "CONTENT_GENERATION_FAILED"
    FOLDER_CREATION_FAILED = "FOLDER_CREATION_FAILED"
    WRITE_FAILED = "WRITE_FAILED"
    UNKNOWN_SETTING = "UNKNOWN_SETTING"
    SAVE_FAILED = "SAVE_FAILED"


class NoteData(TypedDict, total=False):
    """Payload of a successful note write."""

    path: str  # vault-relative, normalized
    kind: str  # "daily" | "weekly"
    action: Literal["created", "prepended"]
    message: str
    link: str  # wikilink target, set by NoteService
    reference: str  # ISO timestamp of the reference date


class SettingsData(TypedDict, total=False):
    """Payload of the settings operations."""

    key: str  # persisted name of the edited setting
    settings: dict[str, str]
    previews: dict[str, str]


def error_detail(exc: BaseException | None) -> dict[str, str]:
    """``cause`` and, for chained errors, ``reason`` of a failure."""
    detail: dict[str, str] = {}
    if exc is not None:
        detail["cause"] = str(exc)
        if exc.__cause__ is not None:
            detail["reason"] = str(exc.__cause__)
    return detail


class ServiceError(BaseModel):
    """Structured error payload within a ServiceResult."""

    model_config = {"frozen": True}

    code: str
    message: str
    detail: dict[str, Any] = Field(default_factory=dict)


class ServiceResult(BaseModel):
    """Universal return type for all service operations.

    Attributes:
        ok: Whether the operation succeeded.
        op: Name of the operation, one of :class:`Op` for dwnotes services.
        data: :class:`NoteData` or :class:`SettingsData` on success.
        warnings: Non-fatal issues, such as a note that could not be opened.
        error: Structured error if ``ok`` is False.
        meta: Optional metadata (telemetry, timing).
    """

    model_config = {"frozen": True}

    ok: bool
    op: str
    data: dict[str, Any] = Field(default_factory=dict)
    warnings: list[str] = Field(default_factory=list)
    error: ServiceError | None = None
    meta: dict[str, Any] | None = None

    @classmethod
    def success(
        cls,
        op: str,
        data: NoteData | SettingsData,
        *,
        warnings: list[str] | None = None,
    ) -> ServiceResult:
        return cls(ok=True, op=op, data=dict(data), warnings=warnings or [])

    @classmethod
    def failure(
        cls,
        op: str,
        code: str,
        message: str,
        exc: BaseException | None = None,
    ) -> ServiceResult:
        """Failed result; the cause chain of *exc* goes into ``detail``."""
        return cls(
            ok=False,
            op=op,
            error=ServiceError(code=code, message=message, detail=error_detail(exc)),
        )

    @property
    def note_path(self) -> str | None:
        """Vault-relative path of the note a successful write touched."""
        path = self.data.get("path") if self.ok else None
        return str(path) if path else None
