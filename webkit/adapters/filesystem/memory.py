"""
In-memory filesystem.

Drift detection renders the "expected" project into one of these, and
most tests use it instead of the disk. Parent directories are created
implicitly on file creation, the same way afero's MemMapFs behaves;
a path component that is a file still raises ``NotADirectoryError``.
"""

from __future__ import annotations

import errno
import io
import threading
from dataclasses import dataclass
from typing import BinaryIO

from webkit.adapters.base import (
    DEFAULT_DIR_MODE,
    DEFAULT_FILE_MODE,
    FileInfo,
    Filesystem,
    clean_path,
)


@dataclass
class _MemFile:
    data: bytes
    mode: int


class _MemWriter(io.BytesIO):
    """Buffer that commits to its filesystem on close."""

    def __init__(self, fs: MemoryFilesystem, path: str, mode: int):
        super().__init__()
        self._fs = fs
        self._path = path
        self._mode = mode

    def close(self) -> None:
        if not self.closed:
            self._fs._commit(self._path, self.getvalue(), self._mode)
        super().close()


def _parent(path: str) -> str:
    head, _, _ = path.rpartition("/")
    return head or "."


def _basename(path: str) -> str:
    return path.rpartition("/")[2] or path


class MemoryFilesystem(Filesystem):
    """Dictionary-backed filesystem, safe to share between threads."""

    def __init__(self, files: dict[str, bytes | str] | None = None):
        self._lock = threading.RLock()
        self._files: dict[str, _MemFile] = {}
        self._dirs: dict[str, int] = {".": DEFAULT_DIR_MODE}
        for path, data in (files or {}).items():
            if isinstance(data, str):
                data = data.encode("utf-8")
            self.write_file(path, data)

    @property
    def name(self) -> str:
        return "memory"

    # ── Internals ───────────────────────────────────────────────

    def _ensure_parents(self, path: str, mode: int) -> None:
        parts = path.split("/")
        for i in range(1, len(parts) + 1):
            prefix = "/".join(parts[:i])
            if prefix in self._files:
                raise NotADirectoryError(errno.ENOTDIR, "not a directory", prefix)
            self._dirs.setdefault(prefix, mode)

    def _commit(self, path: str, data: bytes, mode: int) -> None:
        with self._lock:
            parent = _parent(path)
            if parent != ".":
                self._ensure_parents(parent, DEFAULT_DIR_MODE)
            self._files[path] = _MemFile(data=data, mode=mode)

    # ── Filesystem ──────────────────────────────────────────────

    def open(self, path: str) -> BinaryIO:
        path = clean_path(path)
        with self._lock:
            if path in self._dirs:
                raise IsADirectoryError(errno.EISDIR, "is a directory", path)
            entry = self._files.get(path)
            if entry is None:
                raise FileNotFoundError(errno.ENOENT, "file does not exist", path)
            return io.BytesIO(entry.data)

    def create(self, path: str, mode: int = DEFAULT_FILE_MODE) -> BinaryIO:
        path = clean_path(path)
        with self._lock:
            if path in self._dirs:
                raise IsADirectoryError(errno.EISDIR, "is a directory", path)
            parent = _parent(path)
            if parent != ".":
                self._ensure_parents(parent, DEFAULT_DIR_MODE)
        return _MemWriter(self, path, mode)

    def write_file(self, path: str, data: bytes, mode: int = DEFAULT_FILE_MODE) -> None:
        path = clean_path(path)
        with self._lock:
            if path in self._dirs:
                raise IsADirectoryError(errno.EISDIR, "is a directory", path)
            self._commit(path, bytes(data), mode)

    def stat(self, path: str) -> FileInfo:
        path = clean_path(path)
        with self._lock:
            if path in self._dirs:
                return FileInfo(name=_basename(path), is_dir=True, mode=self._dirs[path])
            entry = self._files.get(path)
            if entry is None:
                raise FileNotFoundError(errno.ENOENT, "file does not exist", path)
            return FileInfo(name=_basename(path), size=len(entry.data), mode=entry.mode)

    def mkdir_all(self, path: str, mode: int = DEFAULT_DIR_MODE) -> None:
        path = clean_path(path)
        if path == ".":
            return
        with self._lock:
            self._ensure_parents(path, mode)

    def remove(self, path: str) -> None:
        path = clean_path(path)
        with self._lock:
            if path in self._files:
                del self._files[path]
                return
            if path in self._dirs and path != ".":
                if self.list_dir(path):
                    raise OSError(errno.ENOTEMPTY, "directory not empty", path)
                del self._dirs[path]
                return
            raise FileNotFoundError(errno.ENOENT, "file does not exist", path)

    def list_dir(self, path: str) -> list[str]:
        path = clean_path(path)
        with self._lock:
            if path in self._files:
                raise NotADirectoryError(errno.ENOTDIR, "not a directory", path)
            if path not in self._dirs:
                raise FileNotFoundError(errno.ENOENT, "file does not exist", path)
            children = set()
            for candidate in (*self._files, *self._dirs):
                if candidate != "." and _parent(candidate) == path:
                    children.add(_basename(candidate))
            return sorted(children)

    def __len__(self) -> int:
        with self._lock:
            return len(self._files)
