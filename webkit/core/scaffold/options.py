"""
Write options — per-call settings for the scaffolding engine.

Callers pass modifiers rather than building options directly::

    engine.write_bytes(path, data, with_scaffold_mode(), with_tracking(source_app("cms")))
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Callable


class WriteMode(str, Enum):
    GENERATE = "generate"  # always write
    SCAFFOLD = "scaffold"  # create if absent, user-owned afterwards


@dataclass
class Tracking:
    """Presence on WriteOptions means the write is recorded in the manifest."""

    source: str
    generator: str | None = None


@dataclass
class WriteOptions:
    mode: WriteMode = WriteMode.GENERATE
    notice: bool = True
    tracking: Tracking | None = None

    @property
    def scaffold_mode(self) -> bool:
        return self.mode is WriteMode.SCAFFOLD


Option = Callable[[WriteOptions], None]


def apply_options(*opts: Option, notice: bool = True) -> WriteOptions:
    options = WriteOptions(notice=notice)
    for opt in opts:
        opt(options)
    return options


def with_scaffold_mode() -> Option:
    def _apply(o: WriteOptions) -> None:
        o.mode = WriteMode.SCAFFOLD

    return _apply


def with_tracking(source: str, generator: str | None = None) -> Option:
    """Record the write under ``source``.

    ``generator`` overrides the label the engine would otherwise take
    from the running producer.
    """

    def _apply(o: WriteOptions) -> None:
        o.tracking = Tracking(source=source, generator=generator)

    return _apply


def without_notice() -> Option:
    def _apply(o: WriteOptions) -> None:
        o.notice = False

    return _apply


def with_notice(enabled: bool = True) -> Option:
    def _apply(o: WriteOptions) -> None:
        o.notice = enabled

    return _apply
