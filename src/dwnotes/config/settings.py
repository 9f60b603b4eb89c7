"""Unified settings — CLI flags, env vars, and the vault settings file in one object.

Priority chain (highest to lowest):
  1. Init kwargs  — CLI flags passed by Click
  2. Env vars     — ``DWNOTES_*`` prefix (``DWNOTES_NOTES__DAILY_NOTE_FORMAT``)
  3. JSON file    — ``.dwnotes/settings.json`` in the discovered vault
  4. Code defaults — baked into :class:`NoteSettings`

Uses Pydantic Settings v2 with a custom :class:`JsonSettingsSource` that
reuses the walk-up discovery from :mod:`dwnotes.config.discovery`. Whatever
the source, note settings pass through :func:`validate_settings`.
"""

from __future__ import annotations

import threading
from pathlib import Path
from typing import Any

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, PydanticBaseSettingsSource

from dwnotes.config.discovery import find_vault_root, load_raw_settings, settings_file
from dwnotes.config.models import NoteSettings
from dwnotes.config.validation import validate_settings


class JsonSettingsSource(PydanticBaseSettingsSource):
    """Read note settings from the vault's ``settings.json``.

    The file is a flat mapping; it is nested under ``notes`` so it lines up
    with :attr:`AppSettings.notes`.
    """

    def __init__(self, settings_cls: type[BaseSettings], json_path: Path | None) -> None:
        super().__init__(settings_cls)
        self._data: dict[str, Any] = {}
        if json_path is not None:
            raw = load_raw_settings(json_path)
            if raw:
                self._data = {"notes": raw}

    def get_field_value(self, field: Any, field_name: str) -> tuple[Any, str, bool]:
        """Return ``(value, field_name, value_is_complex)``."""
        val = self._data.get(field_name)
        return val, field_name, field_name in self._data

    def __call__(self) -> dict[str, Any]:
        return self._data


# Thread-local storage for the settings file path during construction.
_tls = threading.local()


class AppSettings(BaseSettings):
    """Runtime settings for the dwnotes CLI.

    Merges CLI flags, environment variables, the vault settings file, and
    code defaults into a single frozen object stored on the CLI context.

    Attributes:
        vault_root: Resolved vault directory (the one holding ``.dwnotes/``,
            or CWD if none was found).
        settings_path: The ``settings.json`` consulted, if it exists.
    """

    model_config = {
        "frozen": True,
        "env_prefix": "DWNOTES_",
        "env_nested_delimiter": "__",
    }

    vault_root: Path = Field(default_factory=Path.cwd)
    settings_path: Path | None = None

    # --- CLI flags ---
    json_output: bool = False
    quiet: bool = False
    verbose: bool = False
    log_json: bool = False
    no_open: bool = False

    notes: NoteSettings = Field(default_factory=NoteSettings)

    @field_validator("notes", mode="before")
    @classmethod
    def _sanitize_notes(cls, value: Any) -> NoteSettings:
        if isinstance(value, NoteSettings):
            value = value.model_dump()
        return validate_settings(value if isinstance(value, dict) else None)

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        """Insert the JSON source between env vars and defaults."""
        json_path = getattr(_tls, "json_path", None)
        return (
            init_settings,
            env_settings,
            JsonSettingsSource(settings_cls, json_path),
        )

    @classmethod
    def from_cli(
        cls,
        *,
        vault_root: Path | None = None,
        **cli_flags: Any,
    ) -> AppSettings:
        """Construct settings from a CLI invocation.

        Uses *vault_root* when given, otherwise discovers the vault via
        walk-up, falling back to the current directory.
        """
        resolved_root = vault_root or find_vault_root() or Path.cwd()
        json_path = settings_file(resolved_root)

        _tls.json_path = json_path
        try:
            return cls(
                vault_root=resolved_root,
                settings_path=json_path if json_path.is_file() else None,
                **cli_flags,
            )
        finally:
            _tls.json_path = None
