"""Vault discovery and persisted-settings loading.

Walk-up finder locates the vault by its ``.dwnotes/`` data directory,
similar to how git finds ``.git/``. Supports the ``DWNOTES_VAULT`` env var
and the ``--vault`` CLI flag as overrides.
"""

from __future__ import annotations

import json
import os
from pathlib import Path
from typing import Any

import click

DATA_DIRNAME = ".dwnotes"
SETTINGS_FILENAME = "settings.json"
VAULT_ENV_VAR = "DWNOTES_VAULT"


def find_vault_root(start: Path | None = None) -> Path | None:
    """Walk up from *start* (default: cwd) looking for a ``.dwnotes/`` directory.

    Returns the vault root (the directory containing ``.dwnotes/``), or None
    if not found. Checks the DWNOTES_VAULT env var first.
    """
    env_path = os.environ.get(VAULT_ENV_VAR)
    if env_path:
        p = Path(env_path)
        if p.is_dir():
            return p
        return None

    current = (start or Path.cwd()).resolve()
    while True:
        if (current / DATA_DIRNAME).is_dir():
            return current
        parent = current.parent
        if parent == current:
            break
        current = parent
    return None


def settings_file(vault_root: Path) -> Path:
    """Location of the persisted note settings for *vault_root*."""
    return vault_root / DATA_DIRNAME / SETTINGS_FILENAME


def load_raw_settings(path: Path) -> dict[str, Any]:
    """Read the flat settings mapping stored at *path*.

    A missing file, or a file whose top level is not an object, yields an
    empty mapping. Invalid JSON is reported to the user.
    """
    if not path.is_file():
        return {}
    raw = path.read_text(encoding="utf-8")
    if not raw.strip():
        return {}
    try:
        data = json.loads(raw)
    except json.JSONDecodeError as exc:
        msg = f"Invalid JSON in {path}: {exc}"
        raise click.ClickException(msg) from exc
    return data if isinstance(data, dict) else {}
