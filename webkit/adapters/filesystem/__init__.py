"""Filesystem implementations: real disk, in-memory, read-only wrapper."""

from webkit.adapters.filesystem.local import LocalFilesystem
from webkit.adapters.filesystem.memory import MemoryFilesystem
from webkit.adapters.filesystem.readonly import ReadOnlyFilesystem

__all__ = ["LocalFilesystem", "MemoryFilesystem", "ReadOnlyFilesystem"]
