"""
Drift detection — three-way diff between the previous manifest, the
files on disk and a freshly regenerated expected tree.

    previous manifest ─┐
    actual filesystem ─┼──▶ detect_drift ──▶ [DriftEntry, ...]
    expected fs + mf  ─┘

Classification per expected, non-scaffold path:

    missing on disk                      → NEW
    same bytes as expected               → (no drift)
    differs, disk hash == previous hash  → OUTDATED  (definition changed)
    differs otherwise                    → MODIFIED  (user edited)

Paths known to the previous manifest but no longer expected, and still
present on disk, are DELETED (orphans). Scaffold-mode entries on either
side never drift.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Iterable

from webkit.adapters.base import Filesystem
from webkit.core.errors import ReadError
from webkit.core.manifest.hashing import hash_content
from webkit.core.manifest.tracker import load_manifest

logger = logging.getLogger(__name__)


class DriftReason(str, Enum):
    MODIFIED = "modified"
    OUTDATED = "outdated"
    NEW = "new"
    DELETED = "deleted"

    def __str__(self) -> str:
        return self.value

    def filter(self, entries: Iterable[DriftEntry]) -> list[DriftEntry]:
        """The subset of ``entries`` with this reason, order preserved."""
        return [e for e in entries if e.reason is self]


@dataclass(frozen=True)
class DriftEntry:
    path: str
    reason: DriftReason
    source: str = ""
    generator: str = ""

    def to_dict(self) -> dict:
        return {
            "path": self.path,
            "reason": self.reason.value,
            "source": self.source,
            "generator": self.generator,
        }


def detect_drift(actual_fs: Filesystem, expected_fs: Filesystem) -> list[DriftEntry]:
    """Compare ``actual_fs`` against the regenerated ``expected_fs``.

    Both filesystems must hold a manifest; a missing one raises
    ``ManifestNotFoundError`` rather than reporting a clean tree.
    Results are ordered by path within each pass.
    """
    previous = load_manifest(actual_fs)
    expected = load_manifest(expected_fs)

    drift: list[DriftEntry] = []
    seen: set[str] = set()

    for path in sorted(expected.files):
        entry = expected.files[path]
        seen.add(path)
        if entry.scaffold_mode:
            continue

        try:
            expected_bytes = expected_fs.read_file(path)
        except OSError:
            logger.debug("Expected file %s unreadable, skipping", path)
            continue

        try:
            actual_bytes = actual_fs.read_file(path)
        except FileNotFoundError:
            drift.append(DriftEntry(path, DriftReason.NEW, entry.source, entry.generator))
            continue
        except OSError as e:
            raise ReadError(f"reading {path}: {e}", path=path) from e

        actual_hash = hash_content(actual_bytes)
        if hash_content(expected_bytes) == actual_hash:
            continue

        prev = previous.files.get(path)
        if prev is not None and prev.hash == actual_hash:
            reason = DriftReason.OUTDATED
        else:
            reason = DriftReason.MODIFIED
        drift.append(DriftEntry(path, reason, entry.source, entry.generator))

    for path in sorted(previous.files):
        prev = previous.files[path]
        if path in seen or prev.scaffold_mode:
            continue
        if actual_fs.exists(path):
            drift.append(DriftEntry(path, DriftReason.DELETED, prev.source, prev.generator))

    logger.info("Drift detection found %d entr%s", len(drift), "y" if len(drift) == 1 else "ies")
    return drift
