"""AppContext — shared Click context for all commands.

Created once by the root CLI group and flows to all subcommands via
``@click.pass_obj``. Provides lazy vault initialization, service
construction, and centralized result emission (stdout/stderr routing +
exit codes).
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from dwnotes.output.formatters import OutputSettings, format_result

if TYPE_CHECKING:
    from dwnotes.config.settings import AppSettings
    from dwnotes.infrastructure.vault import FileVault
    from dwnotes.services.notes import NoteService
    from dwnotes.services.result import ServiceResult
    from dwnotes.services.settings import SettingsService


class AppContext:
    """Shared context flowing through Click's command hierarchy.

    Subcommands access it via ``@click.pass_obj``. The vault is lazily
    initialized on first use so ``--help`` and ``--version`` never touch
    the filesystem.
    """

    def __init__(self, settings: AppSettings) -> None:
        self.settings = settings
        self._vault: FileVault | None = None

        # Configure structured logging
        from dwnotes.config.logging import configure_logging

        configure_logging(
            verbose=settings.verbose,
            log_json=settings.log_json,
            vault_root=settings.vault_root,
        )

        # Enable telemetry context var when verbose
        if settings.verbose:
            from dwnotes.services.telemetry import enable_telemetry

            enable_telemetry()

    @property
    def vault(self) -> FileVault:
        """The vault instance (created lazily on first access)."""
        if self._vault is None:
            from dwnotes.infrastructure.vault import FileVault

            self._vault = FileVault(self.settings.vault_root)
        return self._vault

    def note_service(self, *, no_open: bool = False) -> NoteService:
        """A NoteService bound to the vault and its current note settings."""
        from dwnotes.services.notes import NoteService

        return NoteService(
            self.vault,
            self.settings.notes,
            open_note=not (no_open or self.settings.no_open),
            vault_root=self.settings.vault_root,
        )

    def settings_service(self) -> SettingsService:
        from dwnotes.services.settings import SettingsService

        return SettingsService(self.vault)

    def emit(self, result: ServiceResult) -> None:
        """Format and output a ServiceResult with correct exit semantics.

        * Success (``result.ok``): writes to stdout, returns normally.
          Warnings are emitted to stderr so they don't pollute piped output.
        * Failure: writes to stderr, exits with code 1.
        """
        settings = OutputSettings(
            json_output=self.settings.json_output,
            quiet=self.settings.quiet,
            verbose=self.settings.verbose,
        )
        output = format_result(result, settings=settings)
        if result.ok:
            click.echo(output)
            # In JSON mode, warnings are already in the serialized payload.
            if not settings.json_output:
                for warning in result.warnings:
                    click.echo(f"WARNING: {warning}", err=True)
        else:
            click.echo(output, err=True)
            raise SystemExit(1)
