"""
Manifest tracker — in-memory aggregate of generated files.

The tracker collects one ``FileEntry`` per tracked write during a
command and persists them exactly once, at finalisation, to
``.webkit/manifest.json``. It is the only writer of that file.

All map access goes through a single lock so producers may be run
concurrently in the future without corrupting the table.
"""

from __future__ import annotations

import json
import logging
import posixpath
import threading
from datetime import UTC, datetime

from pydantic import ValidationError

from webkit import __version__
from webkit.adapters.base import Filesystem
from webkit.core.errors import (
    ManifestNotFoundError,
    ManifestParseError,
    MkdirError,
    ReadError,
    WriteError,
)
from webkit.core.models.manifest import FileEntry, Manifest

logger = logging.getLogger(__name__)

MANIFEST_DIR = ".webkit"
MANIFEST_PATH = f"{MANIFEST_DIR}/manifest.json"


def canonical_path(path: str) -> str:
    """Normalise a path for use as a manifest key.

    Forward slashes, no leading ``./``, no trailing slash, never
    absolute. ``./apps//cms/.dockerignore`` → ``apps/cms/.dockerignore``
    """
    path = path.replace("\\", "/").strip()
    if not path:
        return ""
    cleaned = posixpath.normpath(path).lstrip("/")
    return "" if cleaned == "." else cleaned


def encode_manifest(manifest: Manifest) -> bytes:
    """Tab-indented JSON with files sorted by path."""
    data = manifest.model_dump(mode="json")
    data["files"] = {k: data["files"][k] for k in sorted(data["files"])}
    return (json.dumps(data, indent="\t", ensure_ascii=False) + "\n").encode("utf-8")


class Tracker:
    """Thread-safe path → FileEntry table for one command run."""

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._files: dict[str, FileEntry] = {}
        self._previous: Manifest | None = None
        self._retained: set[str] = set()

    def with_previous_manifest(self, manifest: Manifest | None) -> Tracker:
        """Remember the last persisted manifest, for ``retain`` and orphan checks."""
        with self._lock:
            self._previous = manifest
        return self

    @property
    def previous(self) -> Manifest | None:
        return self._previous

    def add(self, entry: FileEntry) -> None:
        """Insert or overwrite by canonical path, stamping ``generated_at`` now."""
        path = canonical_path(entry.path)
        entry = entry.model_copy(update={"path": path, "generated_at": datetime.now(UTC)})
        with self._lock:
            self._files[path] = entry
            self._retained.discard(path)
        logger.debug("Tracked %s (%s, %s)", path, entry.generator, entry.source)

    def retain(self, path: str) -> bool:
        """Carry the previous manifest's entry for ``path`` forward.

        Used for files a run leaves alone: skipped scaffold-mode writes,
        the untouched rest of a single-target run, and orphans. A later
        ``add`` for the same path replaces the retained entry. Returns
        whether there was anything to retain.
        """
        path = canonical_path(path)
        with self._lock:
            prev = self._previous.files.get(path) if self._previous else None
            if prev is None:
                return False
            if path not in self._files:
                self._files[path] = prev
                self._retained.add(path)
            return True

    def retained(self) -> list[str]:
        """Paths still holding their previous entry, sorted."""
        with self._lock:
            return sorted(self._retained)

    def remove(self, path: str) -> None:
        with self._lock:
            path = canonical_path(path)
            self._files.pop(path, None)
            self._retained.discard(path)

    def get(self, path: str) -> FileEntry | None:
        with self._lock:
            return self._files.get(canonical_path(path))

    def entries(self) -> list[FileEntry]:
        """Snapshot of all entries, sorted by path."""
        with self._lock:
            return [self._files[k] for k in sorted(self._files)]

    def __len__(self) -> int:
        with self._lock:
            return len(self._files)

    def __contains__(self, path: object) -> bool:
        if not isinstance(path, str):
            return False
        with self._lock:
            return canonical_path(path) in self._files

    def manifest(self) -> Manifest:
        """Build the manifest document from the current table."""
        with self._lock:
            files = {k: self._files[k] for k in sorted(self._files)}
        return Manifest(
            version=__version__,
            generated_at=datetime.now(UTC),
            files=files,
        )

    def save(self, fs: Filesystem) -> Manifest:
        """Persist to ``.webkit/manifest.json``. Refreshes ``generated_at``."""
        manifest = self.manifest()
        data = encode_manifest(manifest)

        try:
            fs.mkdir_all(MANIFEST_DIR, 0o755)
        except OSError as e:
            raise MkdirError(f"creating manifest directory: {e}", path=MANIFEST_DIR) from e

        try:
            fs.write_file(MANIFEST_PATH, data, 0o644)
        except OSError as e:
            raise WriteError(f"writing manifest: {e}", path=MANIFEST_PATH) from e

        logger.info("Saved manifest with %d file(s)", len(manifest.files))
        return manifest


def load_manifest(fs: Filesystem) -> Manifest:
    """Read ``.webkit/manifest.json`` from ``fs``.

    Raises:
        ManifestNotFoundError: The file does not exist (usually a first run).
        ManifestParseError: The file is not a valid manifest document.
        ReadError: Any other filesystem failure.
    """
    try:
        raw = fs.read_file(MANIFEST_PATH)
    except FileNotFoundError as e:
        raise ManifestNotFoundError("no manifest found", path=MANIFEST_PATH) from e
    except OSError as e:
        raise ReadError(f"reading manifest: {e}", path=MANIFEST_PATH) from e

    try:
        data = json.loads(raw)
    except (json.JSONDecodeError, UnicodeDecodeError) as e:
        raise ManifestParseError(f"invalid manifest JSON: {e}", path=MANIFEST_PATH) from e

    try:
        manifest = Manifest.model_validate(data)
    except ValidationError as e:
        raise ManifestParseError(f"invalid manifest: {e}", path=MANIFEST_PATH) from e

    logger.debug("Loaded manifest with %d file(s)", len(manifest.files))
    return manifest
