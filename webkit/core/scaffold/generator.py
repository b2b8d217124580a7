"""
Scaffolding engine — the single choke point for every file emission.

Each write goes through the same steps:

    canonicalise path ─▶ scaffold skip? ─▶ banner ─▶ mkdir parents
        ─▶ record manifest entry ─▶ write bytes ─▶ notify

The entry is recorded before the bytes hit the filesystem so that a
crash between the two surfaces as drift on the next run instead of
going unnoticed. The manifest itself is persisted once, by
``finalize()``, at the end of a command.

The engine holds no state between calls beyond its filesystem, its
tracker and the label of the producer currently running.
"""

from __future__ import annotations

import json
import logging
import posixpath
from abc import ABC, abstractmethod
from contextlib import contextmanager
from typing import Any, Iterator

import jinja2
import yaml
from pydantic import BaseModel

from webkit.adapters.base import DEFAULT_DIR_MODE, DEFAULT_FILE_MODE, Filesystem, escapes_root
from webkit.core.errors import (
    EncodingError,
    MkdirError,
    ReadError,
    TemplateRenderError,
    WebkitError,
    WriteError,
)
from webkit.core.manifest.hashing import hash_content
from webkit.core.manifest.tracker import Tracker, canonical_path
from webkit.core.models.manifest import FileEntry
from webkit.core.scaffold.notice import notice_for_file
from webkit.core.scaffold.options import Option, apply_options, without_notice

logger = logging.getLogger(__name__)

UNKNOWN_GENERATOR = "unknown"


# ── Notifier ────────────────────────────────────────────────────


class Notifier(ABC):
    """Receives one event per file the engine touches."""

    @abstractmethod
    def created(self, path: str) -> None: ...

    @abstractmethod
    def updated(self, path: str) -> None: ...

    @abstractmethod
    def skipped(self, path: str) -> None: ...


class NullNotifier(Notifier):
    def created(self, path: str) -> None:
        pass

    def updated(self, path: str) -> None:
        pass

    def skipped(self, path: str) -> None:
        pass


class RecordingNotifier(Notifier):
    """Keeps (event, path) pairs in order. Handy in tests."""

    def __init__(self) -> None:
        self.events: list[tuple[str, str]] = []

    def created(self, path: str) -> None:
        self.events.append(("created", path))

    def updated(self, path: str) -> None:
        self.events.append(("updated", path))

    def skipped(self, path: str) -> None:
        self.events.append(("skipped", path))


# ── Encoding helpers ────────────────────────────────────────────


def _plain(value: Any) -> Any:
    if isinstance(value, BaseModel):
        return value.model_dump(mode="json", by_alias=True, exclude_none=True)
    return value


def encode_json(value: Any) -> bytes:
    """Tab-indented JSON with a trailing newline. HTML is not escaped."""
    return (json.dumps(_plain(value), indent="\t", ensure_ascii=False) + "\n").encode("utf-8")


def encode_yaml(value: Any) -> bytes:
    text = yaml.safe_dump(
        _plain(value),
        indent=2,
        sort_keys=False,
        allow_unicode=True,
        default_flow_style=False,
    )
    return text.encode("utf-8")


# ── Engine ──────────────────────────────────────────────────────


class Generator:
    """Writes files to a filesystem and records them in a tracker."""

    def __init__(
        self,
        fs: Filesystem,
        tracker: Tracker | None = None,
        notifier: Notifier | None = None,
    ):
        self._fs = fs
        self._tracker = tracker if tracker is not None else Tracker()
        self._notifier = notifier or NullNotifier()
        self._label = UNKNOWN_GENERATOR
        self._finalized = False

    @property
    def fs(self) -> Filesystem:
        return self._fs

    @property
    def tracker(self) -> Tracker:
        return self._tracker

    @property
    def label(self) -> str:
        return self._label

    @contextmanager
    def labelled(self, label: str) -> Iterator[Generator]:
        """Attribute tracked writes inside the block to ``label``."""
        previous = self._label
        self._label = label
        try:
            yield self
        finally:
            self._label = previous

    # ── Writes ───────────────────────────────────────────────────

    def _exists(self, path: str) -> bool:
        try:
            return self._fs.exists(path)
        except OSError as e:
            raise ReadError(f"checking {path}: {e}", path=path) from e

    def write_bytes(self, path: str, data: bytes, *opts: Option) -> bool:
        """Write ``data`` to ``path``.

        Returns False when a scaffold-mode write was skipped because
        the file already exists, True otherwise.
        """
        options = apply_options(*opts)
        raw, path = path, canonical_path(path)
        if not path:
            raise WriteError("empty path", path=raw)
        if escapes_root(path):
            raise WriteError(f"{path} is outside the project root", path=path)

        exists = self._exists(path)

        if options.scaffold_mode and exists:
            logger.debug("Skipping %s, already exists", path)
            if options.tracking is not None:
                self._tracker.retain(path)
            self._notifier.skipped(path)
            return False

        content = data
        if options.notice:
            content = notice_for_file(path).encode("utf-8") + data

        parent = posixpath.dirname(path)
        if parent:
            try:
                self._fs.mkdir_all(parent, DEFAULT_DIR_MODE)
            except OSError as e:
                raise MkdirError(f"creating directories for {path}: {e}", path=parent) from e

        if options.tracking is not None:
            self._tracker.add(
                FileEntry(
                    path=path,
                    generator=options.tracking.generator or self._label,
                    source=options.tracking.source,
                    hash=hash_content(content),
                    scaffold_mode=options.scaffold_mode,
                )
            )

        try:
            self._fs.write_file(path, content, DEFAULT_FILE_MODE)
        except OSError as e:
            raise WriteError(f"writing {path}: {e}", path=path) from e

        if exists:
            self._notifier.updated(path)
        else:
            self._notifier.created(path)
        logger.debug("Wrote %s (%d bytes, %s)", path, len(content), options.mode.value)
        return True

    def write_template(
        self,
        path: str,
        template: jinja2.Template,
        data: dict[str, Any] | None = None,
        *opts: Option,
    ) -> bool:
        """Render ``template`` and write it, banner first unless disabled."""
        options = apply_options(*opts)
        target = canonical_path(path)
        if options.scaffold_mode and target and not escapes_root(target) and self._exists(target):
            return self.write_bytes(path, b"", *opts)

        banner = notice_for_file(path) if options.notice else ""
        try:
            rendered = template.render(**(data or {}))
        except jinja2.TemplateError as e:
            raise TemplateRenderError(
                f"rendering template {template.name}: {e}", name=template.name
            ) from e

        return self.write_bytes(path, (banner + rendered).encode("utf-8"), *opts, without_notice())

    def write_json(self, path: str, value: Any, *opts: Option) -> bool:
        """Tab-indented JSON. Never bannered."""
        try:
            data = encode_json(value)
        except (TypeError, ValueError) as e:
            raise EncodingError(f"encoding JSON for {path}: {e}", path=path) from e
        return self.write_bytes(path, data, *opts, without_notice())

    def write_yaml(self, path: str, value: Any, *opts: Option) -> bool:
        """Two-space indented YAML, bannered by default."""
        try:
            data = encode_yaml(value)
        except yaml.YAMLError as e:
            raise EncodingError(f"encoding YAML for {path}: {e}", path=path) from e
        return self.write_bytes(path, data, *opts)

    def copy_from_embed(self, embed: Filesystem, src: str, dst: str, *opts: Option) -> bool:
        """Byte-identical copy out of the template bundle."""
        try:
            data = embed.read_file(src)
        except OSError as e:
            raise ReadError(f"reading embedded file {src}: {e}", path=src) from e
        return self.write_bytes(dst, data, *opts, without_notice())

    # ── Finalisation ─────────────────────────────────────────────

    def finalize(self) -> None:
        """Persist the manifest. Must be called exactly once per run."""
        if self._finalized:
            raise WebkitError("engine already finalized")
        self._tracker.save(self._fs)
        self._finalized = True
