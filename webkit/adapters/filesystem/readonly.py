"""Read-only view over another filesystem."""

from __future__ import annotations

import errno
from typing import BinaryIO, Iterator

from webkit.adapters.base import (
    DEFAULT_DIR_MODE,
    DEFAULT_FILE_MODE,
    FileInfo,
    Filesystem,
    clean_path,
)


def _denied(path: str) -> PermissionError:
    return PermissionError(errno.EPERM, "operation not permitted", clean_path(path))


class ReadOnlyFilesystem(Filesystem):
    """Delegates reads to ``inner``; every mutation raises PermissionError."""

    def __init__(self, inner: Filesystem):
        self._inner = inner

    @property
    def name(self) -> str:
        return f"readonly:{self._inner.name}"

    @property
    def inner(self) -> Filesystem:
        return self._inner

    def open(self, path: str) -> BinaryIO:
        return self._inner.open(path)

    def read_file(self, path: str) -> bytes:
        return self._inner.read_file(path)

    def stat(self, path: str) -> FileInfo:
        return self._inner.stat(path)

    def list_dir(self, path: str) -> list[str]:
        return self._inner.list_dir(path)

    def walk(self, root: str = ".") -> Iterator[str]:
        return self._inner.walk(root)

    def create(self, path: str, mode: int = DEFAULT_FILE_MODE) -> BinaryIO:
        raise _denied(path)

    def write_file(self, path: str, data: bytes, mode: int = DEFAULT_FILE_MODE) -> None:
        raise _denied(path)

    def mkdir_all(self, path: str, mode: int = DEFAULT_DIR_MODE) -> None:
        raise _denied(path)

    def remove(self, path: str) -> None:
        raise _denied(path)

    def read_only(self) -> ReadOnlyFilesystem:
        return self
