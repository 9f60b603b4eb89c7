"""Subcommand modules for dwnotes.

Provides register_commands() which uses deferred imports to keep
``dwnotes --help`` fast.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    import click


def register_commands(cli: click.Group) -> None:
    """Register all command groups and standalone commands on the root CLI group."""
    # --- Groups ---
    from dwnotes.commands.create import create
    from dwnotes.commands.settings_cmd import settings

    cli.add_command(create)
    cli.add_command(settings)

    # --- Standalone commands ---
    from dwnotes.commands.init_cmd import init_cmd

    cli.add_command(init_cmd)
