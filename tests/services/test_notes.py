"""Tests for NoteService — the create daily / create weekly pipeline."""

from __future__ import annotations

from datetime import datetime
from pathlib import Path

import pytest

from dwnotes.config.models import NoteSettings
from dwnotes.domain.types import NoteKind
from dwnotes.infrastructure.vault import FileVault
from dwnotes.services.notes import NoteService, failure_message
from dwnotes.services.telemetry import disable_telemetry, enable_telemetry
from tests.conftest import MemoryVault


class TestCreateDailyNote:
    def test_creates_note(self, memory_vault: MemoryVault, settings: NoteSettings) -> None:
        result = NoteService(memory_vault, settings).create_daily_note()
        assert result.ok
        assert result.op == "create_daily_note"
        assert result.data["path"] == "2026-01-06.md"
        assert result.data["link"] == "2026-01-06"
        assert result.data["reference"] == "2026-01-06T09:30:00"
        assert result.data["message"] == "Daily note created"
        assert memory_vault.files["2026-01-06.md"].startswith("*Tuesday January 6th, 2026*")
        assert memory_vault.opened == ["2026-01-06.md"]

    def test_explicit_reference(self, memory_vault: MemoryVault, settings: NoteSettings) -> None:
        result = NoteService(memory_vault, settings).create_daily_note(datetime(2026, 3, 1))
        assert result.data["path"] == "2026-03-01.md"

    def test_prepends_existing(self, memory_vault: MemoryVault, settings: NoteSettings) -> None:
        memory_vault.files["2026-01-06.md"] = "OLD"
        result = NoteService(memory_vault, settings).create_daily_note()
        assert result.data["action"] == "prepended"
        content = memory_vault.files["2026-01-06.md"]
        assert content.endswith("---\n\n\nOLD")
        assert content.count("Yesterday") == 1

    def test_creates_folder(self, memory_vault: MemoryVault, folder_settings: NoteSettings) -> None:
        result = NoteService(memory_vault, folder_settings).create_daily_note()
        assert result.data["path"] == "Daily/2026-01-06.md"
        assert "Daily" in memory_vault.folders

    def test_existing_folder_not_recreated(
        self, memory_vault: MemoryVault, folder_settings: NoteSettings
    ) -> None:
        memory_vault.folders.add("Daily")
        memory_vault.fail_folder = True
        assert NoteService(memory_vault, folder_settings).create_daily_note().ok

    def test_no_open(self, memory_vault: MemoryVault, settings: NoteSettings) -> None:
        NoteService(memory_vault, settings, open_note=False).create_daily_note()
        assert memory_vault.opened == []

    def test_open_failure_is_warning(
        self, memory_vault: MemoryVault, settings: NoteSettings
    ) -> None:
        memory_vault.fail_open = True
        result = NoteService(memory_vault, settings).create_daily_note()
        assert result.ok
        assert len(result.warnings) == 1


class TestCreateWeeklyNote:
    def test_creates_note(self, memory_vault: MemoryVault, settings: NoteSettings) -> None:
        result = NoteService(memory_vault, settings).create_weekly_note()
        assert result.ok
        assert result.op == "create_weekly_note"
        assert result.data["path"] == "2026 - Week 2.md"
        assert result.data["kind"] == "weekly"
        assert memory_vault.files["2026 - Week 2.md"].startswith("*January 5th - 11th*")

    def test_weekly_folder(self, memory_vault: MemoryVault, folder_settings: NoteSettings) -> None:
        result = NoteService(memory_vault, folder_settings).create_weekly_note()
        assert result.data["path"] == "Weekly/2026 - Week 2.md"
        assert result.data["link"] == "Weekly/2026 - Week 2"


class TestFailures:
    def test_generation_failure(self, memory_vault: MemoryVault) -> None:
        settings = NoteSettings(daily_note_format="[broken")
        result = NoteService(memory_vault, settings).create_daily_note()
        assert not result.ok
        assert result.error is not None
        assert result.error.code == "CONTENT_GENERATION_FAILED"
        assert result.error.message == failure_message(NoteKind.DAILY)
        assert "Unterminated" in result.error.detail["reason"]
        assert memory_vault.files == {}
        assert memory_vault.folders == set()

    def test_folder_failure(self, memory_vault: MemoryVault, folder_settings: NoteSettings) -> None:
        memory_vault.fail_folder = True
        result = NoteService(memory_vault, folder_settings).create_weekly_note()
        assert not result.ok
        assert result.error is not None
        assert result.error.code == "FOLDER_CREATION_FAILED"
        assert memory_vault.files == {}

    def test_write_failure(self, memory_vault: MemoryVault, settings: NoteSettings) -> None:
        memory_vault.fail_create = True
        result = NoteService(memory_vault, settings).create_weekly_note()
        assert not result.ok
        assert result.error is not None
        assert result.error.code == "WRITE_FAILED"
        assert result.error.message == (
            "Failed to create weekly note. "
            "The file may be open elsewhere or the format may be invalid."
        )
        assert "read-only" in result.error.detail["reason"]


class TestTelemetry:
    def test_spans_attached_when_enabled(
        self, memory_vault: MemoryVault, settings: NoteSettings
    ) -> None:
        enable_telemetry()
        try:
            result = NoteService(memory_vault, settings).create_daily_note()
        finally:
            disable_telemetry()
        assert result.meta is not None
        telemetry = result.meta["telemetry"]
        assert telemetry["name"] == "NoteService.create_daily_note"
        assert [c["name"] for c in telemetry["children"]] == ["generate", "ensure_folder", "write"]
        assert telemetry["annotations"]["reference"] == "2026-01-06T09:30:00"

    def test_no_meta_when_disabled(self, memory_vault: MemoryVault, settings: NoteSettings) -> None:
        assert NoteService(memory_vault, settings).create_daily_note().meta is None


class TestFileVaultIntegration:
    def test_create_then_prepend(
        self, file_vault: FileVault, vault_root: Path, folder_settings: NoteSettings
    ) -> None:
        service = NoteService(file_vault, folder_settings, open_note=False)
        first = service.create_daily_note()
        assert first.data["action"] == "created"
        note = vault_root / "Daily" / "2026-01-06.md"
        body = note.read_text()

        second = service.create_daily_note()
        assert second.data["action"] == "prepended"
        assert note.read_text() == f"{body}\n{body}"

    def test_opens_written_note(
        self, file_vault: FileVault, vault_root: Path, settings: NoteSettings, opened: list[str]
    ) -> None:
        NoteService(file_vault, settings).create_weekly_note()
        assert opened == [str(vault_root / "2026 - Week 2.md")]

    @pytest.mark.parametrize("folder", ["Journal/Daily", "Notes"])
    def test_nested_folders(self, file_vault: FileVault, vault_root: Path, folder: str) -> None:
        settings = NoteSettings(daily_notes_folder=folder)
        NoteService(file_vault, settings, open_note=False).create_daily_note()
        assert (vault_root / folder / "2026-01-06.md").is_file()
