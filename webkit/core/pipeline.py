"""
Command pipeline — runs a command's producers against one input.

A command is an ordered list of producers. Each producer receives the
same ``CommandInput`` (filesystem, cached definition, tracker, engine,
printer), emits files through the engine, and either returns or
raises. The first failure aborts the run and the manifest is left
untouched; when every producer succeeds the engine is finalised once.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Callable, Sequence

from webkit.adapters.base import Filesystem
from webkit.adapters.filesystem.local import LocalFilesystem
from webkit.core.config.loader import read_definition
from webkit.core.errors import ManifestNotFoundError
from webkit.core.manifest.tracker import Tracker, load_manifest
from webkit.core.models.definition import Definition
from webkit.core.printer import Console
from webkit.core.scaffold.generator import Generator, Notifier

logger = logging.getLogger(__name__)

# ── Exit codes ──────────────────────────────────────────────────

EXIT_OK = 0
EXIT_DRIFT = 1  # also: validation failed
EXIT_ERROR = 2


class PrinterNotifier(Notifier):
    """Reports engine events on the console."""

    def __init__(self, printer: Console):
        self._printer = printer

    def created(self, path: str) -> None:
        self._printer.println(f"   ✨ created {path}")

    def updated(self, path: str) -> None:
        self._printer.println(f"   🔄 updated {path}")

    def skipped(self, path: str) -> None:
        self._printer.println(f"   • skipped {path} (already exists)")


class CommandInput:
    """Everything a producer may touch during one command.

    The definition is read from ``fs`` on first access and cached, so
    a drift run can hand the very same object to its dry-run pipeline.

    Args:
        fs:         Filesystem producers write to.
        definition: Pre-loaded definition; read from ``fs`` if omitted.
        tracker:    Manifest tracker; a fresh one if omitted.
        printer:    Console; built lazily (silent when ``silent``).
        silent:     Discard all console output.
    """

    def __init__(
        self,
        fs: Filesystem,
        *,
        definition: Definition | None = None,
        tracker: Tracker | None = None,
        printer: Console | None = None,
        silent: bool = False,
    ):
        self.fs = fs
        self.silent = silent
        self.tracker = tracker if tracker is not None else Tracker()
        self._definition = definition
        self._printer = printer
        self._engine: Generator | None = None

    @classmethod
    def for_directory(cls, base_dir: Path | str, *, silent: bool = False) -> CommandInput:
        """Input over a real project directory, aware of its last manifest."""
        fs = LocalFilesystem(base_dir)
        tracker = Tracker()
        try:
            tracker.with_previous_manifest(load_manifest(fs))
        except ManifestNotFoundError:
            logger.debug("No previous manifest in %s", base_dir)
        return cls(fs, tracker=tracker, silent=silent)

    def definition(self) -> Definition:
        if self._definition is None:
            self._definition = read_definition(self.fs)
        return self._definition

    def printer(self) -> Console:
        if self._printer is None:
            self._printer = Console(silent=self.silent)
        return self._printer

    @property
    def engine(self) -> Generator:
        if self._engine is None:
            notifier: Notifier = PrinterNotifier(self.printer())
            self._engine = Generator(self.fs, self.tracker, notifier)
        return self._engine


ProducerFunc = Callable[[CommandInput], None]


@dataclass(frozen=True)
class Producer:
    """A named unit of work that emits files through the engine.

    ``label`` becomes the ``generator`` field of every manifest entry
    the producer records, e.g. ``files.package_json``.
    """

    label: str
    run: ProducerFunc

    def __call__(self, input: CommandInput) -> None:
        with input.engine.labelled(self.label):
            self.run(input)


class Pipeline:
    """Sequential producers followed by a single finalisation."""

    def __init__(self, name: str, producers: Sequence[Producer]):
        self.name = name
        self.producers = list(producers)

    def __add__(self, other: Pipeline) -> Pipeline:
        return Pipeline(f"{self.name}+{other.name}", self.producers + other.producers)

    def run(self, input: CommandInput, *, finalize: bool = True) -> None:
        logger.info("Running pipeline %s (%d producers)", self.name, len(self.producers))
        for producer in self.producers:
            logger.debug("→ %s", producer.label)
            producer(input)
        if finalize:
            input.engine.finalize()
        logger.info("Pipeline %s complete, %d file(s) tracked", self.name, len(input.tracker))
