"""
Payload CMS producers — public folder placeholder and dependency check.
"""

from __future__ import annotations

import logging
import posixpath

from webkit.adapters.base import Filesystem
from webkit.core.errors import ReadError
from webkit.core.manifest.source import source_app
from webkit.core.pipeline import CommandInput
from webkit.core.scaffold.options import with_scaffold_mode, with_tracking, without_notice
from webkit.core.templates import embed_fs

logger = logging.getLogger(__name__)

CHECK_DEPS_SOURCE = "scripts/check-deps.cjs"


def folder_has_files(fs: Filesystem, path: str) -> bool:
    """True when ``path`` holds anything other than a .gitkeep."""
    if not fs.is_dir(path):
        return False
    try:
        entries = fs.list_dir(path)
    except OSError as e:
        raise ReadError(f"listing {path}: {e}", path=path) from e
    return any(name != ".gitkeep" for name in entries)


def public_folder(input: CommandInput) -> None:
    """Keep ``public/`` in git for Payload apps that have nothing in it yet.

    The .gitkeep is untracked: it is a placeholder, not generated content.
    """
    for app in input.definition().apps:
        if app.type != "payload":
            continue
        public = posixpath.join(app.path, "public")
        if folder_has_files(input.fs, public):
            logger.debug("Public folder for %s has files, skipping", app.name)
            continue
        input.engine.write_bytes(
            posixpath.join(public, ".gitkeep"), b"", with_scaffold_mode(), without_notice()
        )


def migration_check(input: CommandInput) -> None:
    """Drop the dependency sync script into each Payload app, once."""
    for app in input.definition().apps:
        if app.type != "payload":
            continue
        input.engine.copy_from_embed(
            embed_fs(),
            CHECK_DEPS_SOURCE,
            posixpath.join(app.path, "scripts", "check-deps.cjs"),
            with_tracking(source_app(app.name)),
            with_scaffold_mode(),
        )
