"""Shared pytest fixtures and test helpers for dwnotes tests."""

from __future__ import annotations

import os
from collections.abc import Callable
from datetime import datetime
from pathlib import Path
from typing import Any

import pytest
from click.testing import CliRunner

from dwnotes.config.discovery import DATA_DIRNAME, VAULT_ENV_VAR
from dwnotes.config.models import NoteSettings
from dwnotes.infrastructure.vault import FileVault
from dwnotes.services.telemetry import disable_telemetry

# Tuesday of ISO week 2, 2026.
FIXED_NOW = datetime(2026, 1, 6, 9, 30)


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep the developer's environment out of vault discovery and settings."""
    monkeypatch.delenv(VAULT_ENV_VAR, raising=False)
    for name in list(os.environ):
        if name.startswith("DWNOTES_"):
            monkeypatch.delenv(name, raising=False)
    disable_telemetry()


@pytest.fixture
def cli_runner() -> CliRunner:
    """Provide a Click CLI test runner."""
    return CliRunner()


@pytest.fixture
def vault_root(tmp_path: Path) -> Path:
    """Temporary vault directory marked with ``.dwnotes/``."""
    (tmp_path / DATA_DIRNAME).mkdir()
    return tmp_path


@pytest.fixture
def opened() -> list[str]:
    """Paths handed to the fake opener, in call order."""
    return []


@pytest.fixture
def file_vault(vault_root: Path, opened: list[str]) -> FileVault:
    """FileVault with a fixed clock and an opener that records instead of launching."""

    def opener(path: str) -> int:
        opened.append(path)
        return 0

    return FileVault(vault_root, clock=lambda: FIXED_NOW, opener=opener)


@pytest.fixture
def _isolated_vault(vault_root: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    """Change CWD to a temp vault root so the CLI discovers it."""
    monkeypatch.chdir(vault_root)


@pytest.fixture
def settings() -> NoteSettings:
    return NoteSettings()


@pytest.fixture
def folder_settings() -> NoteSettings:
    return NoteSettings(daily_notes_folder="Daily", weekly_notes_folder="Weekly")


# ---------------------------------------------------------------------------
# In-memory vault
# ---------------------------------------------------------------------------


class MemoryVault:
    """In-memory NoteHost with switches to simulate host failures."""

    def __init__(self, now: datetime = FIXED_NOW) -> None:
        self.clock = now
        self.files: dict[str, str] = {}
        self.folders: set[str] = set()
        self.opened: list[str] = []
        self.saved: dict[str, Any] | None = None
        self.raw_settings: dict[str, Any] = {}
        self.fail_create = False
        self.fail_process = False
        self.fail_folder = False
        self.fail_open = False
        self.fail_save = False

    def now(self) -> datetime:
        return self.clock

    def exists(self, path: str) -> bool:
        return path in self.files or path in self.folders

    def create_file(self, path: str, content: str) -> None:
        if self.fail_create:
            raise PermissionError(f"read-only: {path}")
        if path in self.files:
            raise FileExistsError(path)
        self.files[path] = content

    def process(self, path: str, fn: Callable[[str], str]) -> str:
        if self.fail_process:
            raise OSError(f"locked: {path}")
        updated = fn(self.files[path])
        self.files[path] = updated
        return updated

    def create_folder(self, path: str) -> None:
        if self.fail_folder:
            raise PermissionError(f"cannot create {path}")
        self.folders.add(path)

    def open_file(self, path: str) -> None:
        if self.fail_open:
            raise OSError("no editor")
        self.opened.append(path)

    def load_settings(self) -> dict[str, Any]:
        return dict(self.raw_settings)

    def save_settings(self, settings: NoteSettings) -> None:
        if self.fail_save:
            raise OSError("disk full")
        self.saved = settings.to_persisted()
        self.raw_settings = dict(self.saved)


@pytest.fixture
def memory_vault() -> MemoryVault:
    return MemoryVault()
