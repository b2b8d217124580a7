"""
Manifest models — the persisted record of generated files.

Serialized to .webkit/manifest.json. Keyed by canonical path; one
flat table, no per-app nesting.
"""

from __future__ import annotations

from datetime import UTC, datetime

from pydantic import BaseModel, Field


def _now() -> datetime:
    return datetime.now(UTC)


class FileEntry(BaseModel):
    """One generated file and its provenance.

    Attributes:
        path:          Canonical path relative to the project root.
        generator:     Label of the producer that emitted it.
        source:        ``project``, ``app:<name>`` or ``resource:<name>``.
        hash:          SHA-256 hex of the exact bytes written.
        scaffold_mode: User-owned after creation; ignored by drift.
        generated_at:  When the entry was (re)recorded.
    """

    path: str
    generator: str = ""
    source: str = ""
    hash: str = ""
    scaffold_mode: bool = False
    generated_at: datetime = Field(default_factory=_now)


class Manifest(BaseModel):
    """Root manifest document."""

    version: str = ""
    generated_at: datetime = Field(default_factory=_now)
    files: dict[str, FileEntry] = Field(default_factory=dict)

    def get(self, path: str) -> FileEntry | None:
        return self.files.get(path)
