"""
Update / scaffold use case — run a pipeline against the project.

After the producers succeed, and before the manifest is saved, files that the
previous manifest tracked but this run no longer produced are reported
as orphans. They are left on disk and stay in the manifest; deleting
them is up to the user, or to ``webkit update --prune``.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field

from webkit.core.errors import RemoveError
from webkit.core.pipeline import CommandInput, Pipeline

logger = logging.getLogger(__name__)


@dataclass
class UpdateResult:
    """Outcome of a generating command."""

    pipeline: str = ""
    tracked: list[str] = field(default_factory=list)
    orphans: list[str] = field(default_factory=list)
    pruned: list[str] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {
            "pipeline": self.pipeline,
            "tracked": self.tracked,
            "orphans": self.orphans,
            "pruned": self.pruned,
        }


FULL_PIPELINES = ("update", "scaffold")


def retain_on_disk(input: CommandInput) -> None:
    """Carry every previous entry whose file still exists into the new manifest.

    Entries the run re-emits replace the retained ones; whatever is still
    retained afterwards was left alone by this run.
    """
    previous = input.tracker.previous
    if previous is None:
        return
    for path in previous.files:
        if input.fs.exists(path):
            input.tracker.retain(path)


def find_orphans(input: CommandInput) -> list[str]:
    """Previously generated, still on disk, no longer produced."""
    previous = input.tracker.previous
    if previous is None:
        return []
    return [
        path
        for path in input.tracker.retained()
        if path in previous.files and not previous.files[path].scaffold_mode
    ]


def prune_orphans(input: CommandInput, orphans: list[str]) -> list[str]:
    """Delete orphaned files from disk and drop them from the manifest.

    Raises:
        RemoveError: A file could not be deleted; nothing after it is touched.
    """
    removed = []
    for path in orphans:
        try:
            input.fs.remove(path)
        except FileNotFoundError:
            logger.debug("Orphan %s already gone", path)
        except OSError as e:
            raise RemoveError(f"removing {path}: {e}", path=path) from e
        input.tracker.remove(path)
        removed.append(path)
        logger.info("Removed orphan %s", path)
    return removed


def run_pipeline(input: CommandInput, pipeline: Pipeline, *, prune: bool = False) -> UpdateResult:
    """Run ``pipeline`` to completion and finalise the manifest.

    Orphans stay tracked so ``drift`` keeps reporting them as deleted
    until they are removed from disk, unless ``prune`` deletes them
    first. Any failure propagates; the manifest is then not saved.
    """
    retain_on_disk(input)

    pipeline.run(input, finalize=False)
    result = UpdateResult(pipeline=pipeline.name)
    if pipeline.name in FULL_PIPELINES:
        result.orphans = find_orphans(input)
    if prune and result.orphans:
        result.pruned = prune_orphans(input, result.orphans)
        result.orphans = []
    input.engine.finalize()

    result.tracked = [e.path for e in input.tracker.entries()]
    if result.orphans:
        logger.info("%d orphaned file(s) left on disk", len(result.orphans))
    return result
