"""
Filesystem base — the contract between the engine and storage.

The scaffolding engine, the manifest tracker and the drift detector
never touch ``os`` or ``pathlib`` directly. They talk to a
``Filesystem``, which lets the real disk and an in-memory tree be
swapped freely: tests run against memory, and drift detection renders
its "expected" state into memory without touching the user's project.

Paths are always relative, forward-slash strings. Implementations
raise the builtin ``OSError`` family (``FileNotFoundError``,
``PermissionError``, ``NotADirectoryError``) exactly like ``os`` does;
translating them into domain errors is the caller's job.
"""

from __future__ import annotations

import errno
import posixpath
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import TYPE_CHECKING, BinaryIO, Iterator

if TYPE_CHECKING:
    from webkit.adapters.filesystem.readonly import ReadOnlyFilesystem

DEFAULT_FILE_MODE = 0o644
DEFAULT_DIR_MODE = 0o755


@dataclass(frozen=True)
class FileInfo:
    """Result of ``Filesystem.stat``."""

    name: str
    size: int = 0
    is_dir: bool = False
    mode: int = DEFAULT_FILE_MODE


def escapes_root(path: str) -> bool:
    """True when ``path`` climbs above the root once normalised."""
    cleaned = posixpath.normpath(path.replace("\\", "/")) if path else "."
    return cleaned == ".." or cleaned.startswith("../")


def clean_path(path: str) -> str:
    """Normalise a path to the relative, forward-slash form.

    ``./apps/cms/`` → ``apps/cms``, ``/a//b`` → ``a/b``, ``""`` → ``.``

    Raises:
        PermissionError: The path leads outside the root (``../x``).
    """
    if escapes_root(path):
        raise PermissionError(errno.EACCES, "path escapes filesystem root", path)
    path = path.replace("\\", "/")
    cleaned = posixpath.normpath(path) if path else "."
    cleaned = cleaned.lstrip("/")
    return cleaned or "."


class Filesystem(ABC):
    """Abstract base class for all filesystem implementations.

    To create a new filesystem:
        1. Subclass Filesystem
        2. Implement name, open, create, stat, mkdir_all, remove, list_dir
        3. Override read_file / write_file / walk only for speed
    """

    @property
    @abstractmethod
    def name(self) -> str:
        """Identifier used in log lines (e.g. 'local', 'memory')."""

    @abstractmethod
    def open(self, path: str) -> BinaryIO:
        """Open a file for binary reading."""

    @abstractmethod
    def create(self, path: str, mode: int = DEFAULT_FILE_MODE) -> BinaryIO:
        """Open a file for binary writing, truncating any existing content."""

    @abstractmethod
    def stat(self, path: str) -> FileInfo:
        """Describe a file or directory. Raises FileNotFoundError if absent."""

    @abstractmethod
    def mkdir_all(self, path: str, mode: int = DEFAULT_DIR_MODE) -> None:
        """Create a directory and all missing parents. No-op if it exists."""

    @abstractmethod
    def remove(self, path: str) -> None:
        """Remove a file or an empty directory."""

    @abstractmethod
    def list_dir(self, path: str) -> list[str]:
        """Names of the direct children of a directory, sorted."""

    # ── Derived operations ──────────────────────────────────────

    def read_file(self, path: str) -> bytes:
        with self.open(path) as fh:
            return fh.read()

    def write_file(self, path: str, data: bytes, mode: int = DEFAULT_FILE_MODE) -> None:
        with self.create(path, mode) as fh:
            fh.write(data)

    def exists(self, path: str) -> bool:
        try:
            self.stat(path)
        except (FileNotFoundError, NotADirectoryError):
            return False
        return True

    def is_dir(self, path: str) -> bool:
        try:
            return self.stat(path).is_dir
        except (FileNotFoundError, NotADirectoryError):
            return False

    def walk(self, root: str = ".") -> Iterator[str]:
        """Yield every file path below ``root`` in sorted order."""
        root = clean_path(root)
        for entry in self.list_dir(root):
            child = entry if root == "." else f"{root}/{entry}"
            if self.stat(child).is_dir:
                yield from self.walk(child)
            else:
                yield child

    def read_only(self) -> ReadOnlyFilesystem:
        """Wrap this filesystem so every mutating call fails."""
        from webkit.adapters.filesystem.readonly import ReadOnlyFilesystem

        return ReadOnlyFilesystem(self)

    def __repr__(self) -> str:
        return f"<{self.__class__.__name__} name={self.name!r}>"
