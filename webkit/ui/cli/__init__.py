"""
CLI helpers shared by the command modules.

Commands resolve the project directory, build a ``CommandInput`` and
route failures through ``handle_errors`` so every error ends as one red
line and a non-zero exit code.
"""

from __future__ import annotations

import functools
import logging
import sys
from pathlib import Path
from typing import Any, Callable, TypeVar

import click

from webkit.core.errors import WebkitError
from webkit.core.pipeline import EXIT_ERROR

logger = logging.getLogger(__name__)

F = TypeVar("F", bound=Callable[..., Any])


def resolve_base_dir(ctx: click.Context) -> Path:
    """Project root from ``--dir``, else the nearest app.json, else CWD."""
    base_dir: Path | None = ctx.obj.get("base_dir")
    if base_dir is not None:
        return base_dir.resolve()

    from webkit.core.config.loader import find_project_root

    return find_project_root() or Path.cwd()


def fail(message: str, code: int = EXIT_ERROR) -> None:
    click.secho(f"❌ {message}", fg="red")
    sys.exit(code)


def handle_errors(fn: F) -> F:
    """Turn core errors and interrupts into a red line and exit code 2."""

    @functools.wraps(fn)
    def wrapper(*args: Any, **kwargs: Any) -> Any:
        try:
            return fn(*args, **kwargs)
        except WebkitError as e:
            logger.debug("Command failed (%s)", e.kind, exc_info=True)
            fail(str(e))
        except KeyboardInterrupt:
            fail("Interrupted, manifest not saved")
        except (click.exceptions.Exit, click.ClickException, SystemExit):
            raise
        except Exception as e:
            logger.exception("Unexpected error")
            fail(f"Unexpected error: {e}")

    return wrapper  # type: ignore[return-value]
