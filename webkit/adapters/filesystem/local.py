"""
Local filesystem — real disk, rooted at a base directory.

Every path is resolved below ``base_path`` so producers can only ever
write inside the project they were pointed at.
"""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import BinaryIO, Iterator

from webkit.adapters.base import (
    DEFAULT_DIR_MODE,
    DEFAULT_FILE_MODE,
    FileInfo,
    Filesystem,
    clean_path,
)

logger = logging.getLogger(__name__)


class LocalFilesystem(Filesystem):
    """Disk-backed filesystem scoped to ``base_path``."""

    def __init__(self, base_path: Path | str = "."):
        self._base = Path(base_path).resolve()

    @property
    def name(self) -> str:
        return "local"

    @property
    def base_path(self) -> Path:
        return self._base

    def _resolve(self, path: str) -> Path:
        rel = clean_path(path)
        return self._base if rel == "." else self._base / rel

    def open(self, path: str) -> BinaryIO:
        return open(self._resolve(path), "rb")

    def create(self, path: str, mode: int = DEFAULT_FILE_MODE) -> BinaryIO:
        target = self._resolve(path)
        fd = os.open(target, os.O_WRONLY | os.O_CREAT | os.O_TRUNC, mode)
        return os.fdopen(fd, "wb")

    def stat(self, path: str) -> FileInfo:
        target = self._resolve(path)
        st = target.stat()
        return FileInfo(
            name=target.name,
            size=st.st_size,
            is_dir=target.is_dir(),
            mode=st.st_mode & 0o777,
        )

    def mkdir_all(self, path: str, mode: int = DEFAULT_DIR_MODE) -> None:
        os.makedirs(self._resolve(path), mode=mode, exist_ok=True)

    def remove(self, path: str) -> None:
        target = self._resolve(path)
        if target.is_dir():
            target.rmdir()
        else:
            target.unlink()

    def list_dir(self, path: str) -> list[str]:
        return sorted(os.listdir(self._resolve(path)))

    def walk(self, root: str = ".") -> Iterator[str]:
        start = self._resolve(root)
        for dirpath, dirnames, filenames in os.walk(start):
            dirnames.sort()
            for filename in sorted(filenames):
                full = Path(dirpath) / filename
                yield full.relative_to(self._base).as_posix()

    def __repr__(self) -> str:
        return f"<LocalFilesystem base={str(self._base)!r}>"
