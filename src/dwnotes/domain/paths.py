"""Vault-relative path building for note files and wikilinks.

Pure string functions, no filesystem access. Storage paths are normalized
to the vault's canonical form; link paths are kept exactly as they will
appear between ``[[`` and ``]]``.
"""

from __future__ import annotations

import re
import unicodedata

NOTE_EXTENSION = ".md"
VAULT_ROOT_PATH = "/"

_SEPARATOR_RUNS = re.compile(r"[\\/]+")
_EDGE_SEPARATORS = re.compile(r"^[\s\\/]+|[\s\\/]+$")


def normalize_path(path: str) -> str:
    """Return *path* in canonical vault form.

    Backslashes and repeated slashes collapse to a single ``/``, leading and
    trailing separators are removed, non-breaking spaces become plain spaces,
    and the result is NFC-normalized. An empty result means the vault root.

    Examples:
        >>> normalize_path("Daily//2026-01-06.md")
        'Daily/2026-01-06.md'
        >>> normalize_path("/")
        '/'
    """
    text = _SEPARATOR_RUNS.sub("/", path).strip("/")
    text = text.replace("\u00a0", " ").replace("\u202f", " ")
    text = unicodedata.normalize("NFC", text)
    return text or VAULT_ROOT_PATH


def sanitize_folder(value: str) -> str:
    """Strip whitespace and any leading/trailing separators from a folder name.

    Examples:
        >>> sanitize_folder(" /Notes/ ")
        'Notes'
        >>> sanitize_folder("   ")
        ''
    """
    return _EDGE_SEPARATORS.sub("", value)


def build_file_path(folder: str, file_name: str) -> str:
    """Storage path for a note: ``[folder/]file_name.md``, normalized."""
    name = f"{file_name}{NOTE_EXTENSION}"
    full_path = f"{folder}/{name}" if folder else name
    return normalize_path(full_path)


def build_link_path(folder: str, file_name: str) -> str:
    """Wikilink target for a note: ``[folder/]file_name``, verbatim."""
    return f"{folder}/{file_name}" if folder else file_name
