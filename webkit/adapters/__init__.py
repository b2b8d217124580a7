"""Adapters — storage backends the engine writes through.

Public re-exports for convenient access.
"""

from webkit.adapters.base import FileInfo, Filesystem, clean_path, escapes_root
from webkit.adapters.filesystem import LocalFilesystem, MemoryFilesystem, ReadOnlyFilesystem
from webkit.adapters.mock import MockFilesystem

__all__ = [
    "FileInfo",
    "Filesystem",
    "LocalFilesystem",
    "MemoryFilesystem",
    "MockFilesystem",
    "ReadOnlyFilesystem",
    "clean_path",
    "escapes_root",
]
