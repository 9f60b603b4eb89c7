"""Jinja2 template loading with per-vault override support."""

from __future__ import annotations

from pathlib import Path

from jinja2 import BaseLoader, ChoiceLoader, Environment, FileSystemLoader, PackageLoader

from dwnotes.config.discovery import DATA_DIRNAME


def build_template_environment(group: str, *, vault_root: Path | None = None) -> Environment:
    """Build a Jinja2 environment with vault overrides before packaged defaults.

    Overrides are loaded from ``.dwnotes/templates/`` inside the vault, either
    namespaced (``.dwnotes/templates/notes/daily.md.j2``) or flat
    (``.dwnotes/templates/daily.md.j2``).
    """

    loaders: list[BaseLoader] = []
    if vault_root is not None:
        template_root = vault_root / DATA_DIRNAME / "templates"
        loaders.append(FileSystemLoader([str(template_root / group), str(template_root)]))

    loaders.append(PackageLoader("dwnotes", f"templates/{group}"))
    return Environment(loader=ChoiceLoader(loaders), keep_trailing_newline=True)
