"""Tests for the root dwnotes CLI."""

from __future__ import annotations

from pathlib import Path

import pytest
from click.testing import CliRunner

from dwnotes import __version__
from dwnotes.cli import cli


def test_cli_help(cli_runner: CliRunner) -> None:
    result = cli_runner.invoke(cli, ["--help"])
    assert result.exit_code == 0
    assert "dwnotes" in result.output
    for command in ("create", "settings", "init"):
        assert command in result.output


def test_cli_version(cli_runner: CliRunner) -> None:
    result = cli_runner.invoke(cli, ["--version"])
    assert result.exit_code == 0
    assert __version__ in result.output


def test_cli_no_args(cli_runner: CliRunner) -> None:
    result = cli_runner.invoke(cli, [])
    assert result.exit_code == 0
    assert "Usage" in result.output


@pytest.mark.parametrize("flag", ["--json", "-q", "-v", "--log-json"])
def test_global_flags_accepted(cli_runner: CliRunner, flag: str) -> None:
    result = cli_runner.invoke(cli, [flag, "--version"])
    assert result.exit_code == 0


@pytest.mark.usefixtures("_isolated_vault")
def test_verbose_shows_telemetry(cli_runner: CliRunner) -> None:
    result = cli_runner.invoke(
        cli, ["-v", "create", "daily", "--date", "2026-01-06", "--no-open"]
    )
    assert result.exit_code == 0
    assert "NoteService.create_daily_note" in result.output
    assert "reference: 2026-01-06T00:00:00" in result.output


def test_vault_env_var(
    cli_runner: CliRunner, vault_root: Path, monkeypatch: pytest.MonkeyPatch
) -> None:
    monkeypatch.setenv("DWNOTES_VAULT", str(vault_root))
    result = cli_runner.invoke(cli, ["create", "daily", "--date", "2026-01-06", "--no-open"])
    assert result.exit_code == 0
    assert (vault_root / "2026-01-06.md").is_file()
