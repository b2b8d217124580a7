"""
Drift use case — what would ``webkit update`` change right now?

Runs the update pipeline against an in-memory filesystem using the
same definition, then diffs that expected tree against the project on
disk and its last manifest. Nothing on disk is touched.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field

from webkit.adapters.filesystem.memory import MemoryFilesystem
from webkit.core.manifest.drift import DriftEntry, DriftReason, detect_drift
from webkit.core.pipeline import CommandInput, Pipeline
from webkit.core.services.generators import update_pipeline

logger = logging.getLogger(__name__)


@dataclass
class DriftResult:
    """Outcome of a drift check."""

    entries: list[DriftEntry] = field(default_factory=list)

    @property
    def has_drift(self) -> bool:
        return bool(self.entries)

    def by_reason(self, reason: DriftReason) -> list[DriftEntry]:
        return reason.filter(self.entries)

    def to_dict(self) -> dict:
        return {
            "drift": self.has_drift,
            "count": len(self.entries),
            "entries": [e.to_dict() for e in self.entries],
        }


def render_expected(input: CommandInput, pipeline: Pipeline | None = None) -> MemoryFilesystem:
    """Regenerate the project into memory and return that filesystem."""
    expected = MemoryFilesystem()
    dry_run = CommandInput(expected, definition=input.definition(), silent=True)
    (pipeline or update_pipeline()).run(dry_run)
    return expected


def check_drift(input: CommandInput, pipeline: Pipeline | None = None) -> DriftResult:
    """Three-way comparison of disk, previous manifest and regenerated state.

    Raises:
        ManifestNotFoundError: The project has no manifest yet.
    """
    expected = render_expected(input, pipeline)
    entries = detect_drift(input.fs, expected)
    logger.info("Drift check: %d entr%s", len(entries), "y" if len(entries) == 1 else "ies")
    return DriftResult(entries=entries)
