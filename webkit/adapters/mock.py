"""
Mock filesystem — test double for failure paths.

Behaves like ``MemoryFilesystem`` until told otherwise. Individual
operations can be configured to fail, globally or for one path, and
every call is recorded so tests can assert on what the engine did.
"""

from __future__ import annotations

import errno
from typing import BinaryIO

from webkit.adapters.base import DEFAULT_DIR_MODE, DEFAULT_FILE_MODE, FileInfo, clean_path
from webkit.adapters.filesystem.memory import MemoryFilesystem


class MockFilesystem(MemoryFilesystem):
    """Memory filesystem with injectable failures and a call log.

    Usage::

        fs = MockFilesystem()
        fs.set_failure("mkdir_all")                      # every mkdir fails
        fs.set_failure("write_file", path="a/b.txt")     # only this path
    """

    def __init__(self, files: dict[str, bytes | str] | None = None):
        self._failures: dict[tuple[str, str | None], OSError] = {}
        self._call_log: list[tuple[str, str]] = []
        super().__init__(files)
        # Seeding files is not part of the interaction under test.
        self._call_log.clear()

    @property
    def name(self) -> str:
        return "mock"

    @property
    def call_log(self) -> list[tuple[str, str]]:
        """All (operation, path) pairs this mock has received."""
        return self._call_log

    def calls(self, operation: str) -> list[str]:
        """Paths passed to one operation, in call order."""
        return [path for op, path in self._call_log if op == operation]

    def set_failure(
        self,
        operation: str,
        error: OSError | None = None,
        *,
        path: str | None = None,
    ) -> None:
        """Configure an operation to raise ``error`` (EIO by default)."""
        if error is None:
            error = OSError(errno.EIO, "mock failure", path or operation)
        key = (operation, clean_path(path) if path is not None else None)
        self._failures[key] = error

    def clear_failures(self) -> None:
        self._failures.clear()

    def _record(self, operation: str, path: str) -> None:
        path = clean_path(path)
        self._call_log.append((operation, path))
        error = self._failures.get((operation, path)) or self._failures.get((operation, None))
        if error is not None:
            raise error

    # ── Recorded operations ─────────────────────────────────────

    def open(self, path: str) -> BinaryIO:
        self._record("open", path)
        return super().open(path)

    def read_file(self, path: str) -> bytes:
        self._record("read_file", path)
        return super().read_file(path)

    def create(self, path: str, mode: int = DEFAULT_FILE_MODE) -> BinaryIO:
        self._record("create", path)
        return super().create(path, mode)

    def write_file(self, path: str, data: bytes, mode: int = DEFAULT_FILE_MODE) -> None:
        self._record("write_file", path)
        super().write_file(path, data, mode)

    def stat(self, path: str) -> FileInfo:
        self._record("stat", path)
        return super().stat(path)

    def mkdir_all(self, path: str, mode: int = DEFAULT_DIR_MODE) -> None:
        self._record("mkdir_all", path)
        super().mkdir_all(path, mode)

    def remove(self, path: str) -> None:
        self._record("remove", path)
        super().remove(path)
