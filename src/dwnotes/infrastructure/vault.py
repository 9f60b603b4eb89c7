"""Vault — the host capabilities note generation runs against.

:class:`NoteHost` is the narrow interface the services depend on: a clock,
file existence, create, atomic read-modify-write, folder creation, opening
a note, and settings persistence. :class:`FileVault` implements it on a
local directory; tests substitute an in-memory fake.

All paths are vault-relative strings using ``/`` separators.

INVARIANT: A file is either fully rewritten or left untouched. Writes go
to a temporary sibling and are moved into place with ``os.replace`` while
an exclusive advisory lock for the path is held, so concurrent ``process``
calls on one path never interleave their read and write, whether they come
from threads or from separate ``dwnotes`` processes.

Locks are ``fcntl.flock`` locks on files under ``.dwnotes/locks/``, which
keeps the note folders free of lock files. POSIX only.
"""

from __future__ import annotations

import fcntl
import hashlib
import json
import logging
import os
import tempfile
from collections.abc import Callable, Iterator
from contextlib import contextmanager
from datetime import datetime
from pathlib import Path
from typing import TYPE_CHECKING, Any, Protocol

import click

from dwnotes.config.discovery import DATA_DIRNAME, load_raw_settings, settings_file

if TYPE_CHECKING:
    from dwnotes.config.models import NoteSettings

logger = logging.getLogger(__name__)


class NoteHost(Protocol):
    """Capabilities consumed by the note services."""

    def now(self) -> datetime: ...

    def exists(self, path: str) -> bool: ...

    def create_file(self, path: str, content: str) -> None: ...

    def process(self, path: str, fn: Callable[[str], str]) -> str: ...

    def create_folder(self, path: str) -> None: ...

    def open_file(self, path: str) -> None: ...

    def load_settings(self) -> dict[str, Any]: ...

    def save_settings(self, settings: NoteSettings) -> None: ...


# ---------------------------------------------------------------------------
# Path locks
# ---------------------------------------------------------------------------

LOCKS_DIRNAME = "locks"


@contextmanager
def path_lock(lock_dir: Path, target: Path) -> Iterator[None]:
    """Hold an exclusive advisory lock on *target* for the duration of the block.

    The lock lives on a stable file in *lock_dir* named after the resolved
    target, not on the target itself: ``os.replace`` swaps the target's inode,
    which would silently drop a lock held on it. Each entry opens its own
    handle, so threads of one process exclude each other just like separate
    processes do.
    """
    lock_dir.mkdir(parents=True, exist_ok=True)
    digest = hashlib.sha256(str(target.resolve()).encode("utf-8")).hexdigest()[:32]
    with (lock_dir / f"{digest}.lock").open("a+", encoding="utf-8") as handle:
        fcntl.flock(handle.fileno(), fcntl.LOCK_EX)
        try:
            yield
        finally:
            fcntl.flock(handle.fileno(), fcntl.LOCK_UN)


def atomic_write(path: Path, content: str) -> None:
    """Write *content* to *path* via a temporary sibling and ``os.replace``."""
    fd, tmp_name = tempfile.mkstemp(prefix=f".{path.name}.", suffix=".tmp", dir=path.parent)
    try:
        os.chmod(tmp_name, path.stat().st_mode & 0o777 if path.exists() else 0o644)
        with os.fdopen(fd, "w", encoding="utf-8", newline="") as handle:
            handle.write(content)
            handle.flush()
            os.fsync(handle.fileno())
        os.replace(tmp_name, path)
    finally:
        if os.path.exists(tmp_name):
            os.unlink(tmp_name)


# ---------------------------------------------------------------------------
# FileVault
# ---------------------------------------------------------------------------


class FileVault:
    """A vault backed by a directory on the local filesystem.

    Constructed once per CLI invocation by the command context; services
    receive it through their constructor.

    Args:
        root: The vault directory.
        clock: Source of the reference date. Defaults to local ``datetime.now``.
        opener: Opens a file in the user's editor and returns an exit code.
            Defaults to :func:`click.launch`.
    """

    def __init__(
        self,
        root: Path,
        *,
        clock: Callable[[], datetime] | None = None,
        opener: Callable[[str], int] | None = None,
    ) -> None:
        self._root = root
        self._clock = clock or datetime.now
        self._opener = opener or click.launch

    @property
    def root(self) -> Path:
        """The vault root directory."""
        return self._root

    @property
    def settings_path(self) -> Path:
        return settings_file(self._root)

    @property
    def lock_dir(self) -> Path:
        return self._root / DATA_DIRNAME / LOCKS_DIRNAME

    def resolve(self, path: str) -> Path:
        """Absolute location of vault-relative *path*.

        Raises:
            ValueError: If *path* escapes the vault root.
        """
        result = self._root / path.lstrip("/")
        if not result.resolve().is_relative_to(self._root.resolve()):
            msg = f"Path escapes vault root: {path}"
            raise ValueError(msg)
        return result

    # -- NoteHost ----------------------------------------------------------

    def now(self) -> datetime:
        return self._clock()

    def exists(self, path: str) -> bool:
        return self.resolve(path).exists()

    def create_file(self, path: str, content: str) -> None:
        """Create a new file, and any folders a nested file name implies.

        Fails with ``FileExistsError`` if the file appeared meanwhile.
        """
        target = self.resolve(path)
        with path_lock(self.lock_dir, target):
            if target.exists():
                raise FileExistsError(f"File already exists: {path}")
            target.parent.mkdir(parents=True, exist_ok=True)
            atomic_write(target, content)
        logger.debug("Created %s", path)

    def process(self, path: str, fn: Callable[[str], str]) -> str:
        """Atomically replace the content of *path* with ``fn(old_content)``.

        Returns the new content. If *fn* or the write fails, the file is
        left unchanged.
        """
        target = self.resolve(path)
        with path_lock(self.lock_dir, target):
            with target.open(encoding="utf-8", newline="") as handle:
                current = handle.read()
            updated = fn(current)
            atomic_write(target, updated)
        logger.debug("Rewrote %s (%d -> %d chars)", path, len(current), len(updated))
        return updated

    def create_folder(self, path: str) -> None:
        self.resolve(path).mkdir(parents=True, exist_ok=True)
        logger.debug("Created folder %s", path)

    def open_file(self, path: str) -> None:
        """Open *path* with the system's default application.

        Raises:
            OSError: If the launcher reports a non-zero exit code.
        """
        code = self._opener(str(self.resolve(path)))
        if code:
            msg = f"Launcher exited with status {code} for {path}"
            raise OSError(msg)

    def load_settings(self) -> dict[str, Any]:
        return load_raw_settings(self.settings_path)

    def save_settings(self, settings: NoteSettings) -> None:
        target = self.settings_path
        target.parent.mkdir(parents=True, exist_ok=True)
        payload = json.dumps(settings.to_persisted(), indent=2, ensure_ascii=False) + "\n"
        with path_lock(self.lock_dir, target):
            atomic_write(target, payload)
        logger.debug("Saved settings to %s", target)
