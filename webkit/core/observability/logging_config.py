"""
Logging configuration — diagnostics for the CLI.

The CLI group callback calls ``setup_from_environment`` once; every
other module just does ``logger = logging.getLogger(__name__)``.

Console level, highest precedence first:

    --debug  >  --verbose  >  --quiet  >  WEBKIT_LOG_LEVEL  >  WARNING

A log file is added when WEBKIT_LOG_FILE is set; its level comes from
WEBKIT_LOG_FILE_LEVEL and defaults to the console level. What the user
is meant to read goes through the console printer, not through here.
"""

from __future__ import annotations

import logging
import os
import sys

ENV_LEVEL = "WEBKIT_LOG_LEVEL"
ENV_FILE = "WEBKIT_LOG_FILE"
ENV_FILE_LEVEL = "WEBKIT_LOG_FILE_LEVEL"

# level threshold → (format, datefmt); first match wins
_CONSOLE_FORMATS: list[tuple[int, str, str | None]] = [
    (logging.DEBUG, "%(asctime)s %(levelname)-5s %(name)s:%(lineno)d  %(message)s", "%H:%M:%S"),
    (logging.INFO, "%(asctime)s [%(name)s] %(message)s", "%H:%M:%S"),
    (logging.CRITICAL, "%(levelname)s: %(message)s", None),
]

_FILE_FORMAT = ("%(asctime)s %(levelname)-5s %(name)s:%(lineno)d  %(message)s", "%Y-%m-%d %H:%M:%S")

# Template engine and YAML stay at WARNING unless debugging
_NOISY_LOGGERS = ("jinja2", "yaml")


def resolve_level(debug: bool = False, verbose: bool = False, quiet: bool = False) -> str:
    """Console level name from CLI flags, else the env var, else WARNING."""
    if debug:
        return "DEBUG"
    if verbose:
        return "INFO"
    if quiet:
        return "ERROR"
    return os.environ.get(ENV_LEVEL, "WARNING")


def _console_handler(level: int) -> logging.Handler:
    fmt, datefmt = next((f, d) for threshold, f, d in _CONSOLE_FORMATS if level <= threshold)
    handler = logging.StreamHandler(sys.stderr)
    handler.setLevel(level)
    handler.setFormatter(logging.Formatter(fmt, datefmt=datefmt))
    return handler


def _file_handler(path: str, level: int) -> logging.Handler:
    fmt, datefmt = _FILE_FORMAT
    handler = logging.FileHandler(path, encoding="utf-8")
    handler.setLevel(level)
    handler.setFormatter(logging.Formatter(fmt, datefmt=datefmt))
    return handler


def setup_logging(
    level: str = "WARNING",
    log_file: str | None = None,
    log_file_level: str | None = None,
    quiet_third_party: bool = True,
) -> None:
    """Replace the root logger's handlers.

    Args:
        level: Console level name.
        log_file: Optional log file path.
        log_file_level: Level for the file; defaults to ``level``.
        quiet_third_party: Pin ``_NOISY_LOGGERS`` to WARNING unless
            the console is at DEBUG.
    """
    console_level = _parse_level(level)
    handlers = [_console_handler(console_level)]

    if log_file:
        file_level = _parse_level(log_file_level) if log_file_level else console_level
        handlers.append(_file_handler(log_file, file_level))

    root = logging.getLogger()
    root.handlers.clear()
    for handler in handlers:
        root.addHandler(handler)
    # Root must let through whatever the most verbose handler wants.
    root.setLevel(min(h.level for h in handlers))

    if quiet_third_party and console_level > logging.DEBUG:
        for name in _NOISY_LOGGERS:
            logging.getLogger(name).setLevel(logging.WARNING)

    logging.raiseExceptions = False


def setup_from_environment(debug: bool = False, verbose: bool = False, quiet: bool = False) -> None:
    """``setup_logging`` driven by CLI flags and WEBKIT_LOG_* variables."""
    setup_logging(
        level=resolve_level(debug=debug, verbose=verbose, quiet=quiet),
        log_file=os.environ.get(ENV_FILE),
        log_file_level=os.environ.get(ENV_FILE_LEVEL),
        quiet_third_party=not debug,
    )


def _parse_level(level: str | None) -> int:
    """Level name → numeric level; unknown names fall back to WARNING."""
    if not level:
        return logging.WARNING
    numeric = getattr(logging, level.upper(), None)
    return numeric if isinstance(numeric, int) else logging.WARNING
