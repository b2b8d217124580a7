"""
Console printer — user-facing output for commands.

Everything the user is meant to read goes through a ``Console``;
diagnostics go through ``logging``. Writes are serialised by a lock so
producers may print from worker threads.
"""

from __future__ import annotations

import sys
import threading
from typing import IO, Any, Iterable, Mapping, Sequence

import click


class _Discard:
    """Writer that drops everything (``--silent`` and drift's dry run)."""

    def write(self, _: str) -> int:
        return 0

    def flush(self) -> None:
        pass


class Console:
    """Styled terminal output.

    Args:
        writer: Stream to write to (default: stdout).
        silent: Discard all output.
        color:  Force colour on/off; None lets click decide from the stream.
    """

    def __init__(self, writer: IO[str] | None = None, *, silent: bool = False, color: bool | None = None):
        self._lock = threading.Lock()
        self._writer: Any = _Discard() if silent else (writer or sys.stdout)
        self._color = color

    def set_writer(self, writer: IO[str]) -> None:
        with self._lock:
            self._writer = writer

    def _emit(self, text: str, nl: bool = True) -> None:
        with self._lock:
            click.echo(text, file=self._writer, nl=nl, color=self._color)

    # ── Status lines ─────────────────────────────────────────────

    def info(self, message: str) -> None:
        self._emit(click.style(f"ℹ️  {message}", fg="cyan"))

    def success(self, message: str) -> None:
        self._emit(click.style(f"✅ {message}", fg="green"))

    def warn(self, message: str) -> None:
        self._emit(click.style(f"⚠️  {message}", fg="yellow"))

    def error(self, message: str) -> None:
        self._emit(click.style(f"❌ {message}", fg="red"))

    # ── Plain output ─────────────────────────────────────────────

    def print(self, text: str) -> None:
        self._emit(text, nl=False)

    def println(self, text: str = "") -> None:
        self._emit(text)

    def printf(self, fmt: str, *args: Any) -> None:
        self._emit(fmt % args if args else fmt, nl=False)

    def line_break(self) -> None:
        self._emit("")

    # ── Structured output ────────────────────────────────────────

    def list(self, items: Iterable[str], bullet: str = "•") -> None:
        for item in items:
            self._emit(f"   {bullet} {item}")

    def table(self, headers: Sequence[str], rows: Sequence[Sequence[Any]]) -> None:
        cells = [[str(c) for c in row] for row in rows]
        widths = [len(h) for h in headers]
        for row in cells:
            for i, cell in enumerate(row[: len(widths)]):
                widths[i] = max(widths[i], len(cell))

        def fmt(row: Sequence[str]) -> str:
            return "  ".join(cell.ljust(widths[i]) for i, cell in enumerate(row[: len(widths)])).rstrip()

        self._emit(click.style(fmt(list(headers)), bold=True))
        self._emit("  ".join("─" * w for w in widths))
        for row in cells:
            self._emit(fmt(row))

    def tree(self, root: str, children: Mapping[str, Any] | Iterable[str]) -> None:
        """Render a nested mapping (or flat list) as a box-drawing tree."""
        self._emit(root)
        self._tree_lines(children, "")

    def _tree_lines(self, node: Mapping[str, Any] | Iterable[str], prefix: str) -> None:
        items = list(node.items()) if isinstance(node, Mapping) else [(n, None) for n in node]
        for i, (name, sub) in enumerate(items):
            last = i == len(items) - 1
            self._emit(f"{prefix}{'└── ' if last else '├── '}{name}")
            if sub:
                self._tree_lines(sub, prefix + ("    " if last else "│   "))
