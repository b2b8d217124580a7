"""
Definition loader — app.json in, validated ``Definition`` out.

JSON is decoded here and checked against the pydantic schema. Rules
that need the whole document or the filesystem (unique names, existing
paths) live in ``Definition.validation_errors``.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path

from pydantic import ValidationError

from webkit.adapters.base import Filesystem
from webkit.core.errors import DefinitionError
from webkit.core.models.definition import Definition

logger = logging.getLogger(__name__)

# Definition filename, at the project root
DEFINITION_FILE = "app.json"


_MAX_SEARCH_DEPTH = 20


def find_definition_file(start_dir: Path | None = None) -> Path | None:
    """Nearest app.json at or above ``start_dir`` (default: cwd).

    Lets commands run from inside ``apps/cms`` and still operate on the
    whole project. Gives up after ``_MAX_SEARCH_DEPTH`` levels.
    """
    start = (start_dir or Path.cwd()).resolve()
    for directory in [start, *start.parents][:_MAX_SEARCH_DEPTH]:
        candidate = directory / DEFINITION_FILE
        if candidate.is_file():
            return candidate
    return None


def find_project_root(start_dir: Path | None = None) -> Path | None:
    """Directory holding app.json, or None."""
    path = find_definition_file(start_dir)
    return path.parent if path else None


def parse_definition(raw: bytes | str, source: str = DEFINITION_FILE) -> Definition:
    """Decode and validate app.json content.

    Raises:
        DefinitionError: If the content is not valid JSON or does not
            match the schema.
    """
    try:
        data = json.loads(raw)
    except (json.JSONDecodeError, UnicodeDecodeError) as e:
        raise DefinitionError(f"Invalid JSON in {source}: {e}", path=source) from e

    if not isinstance(data, dict):
        raise DefinitionError(
            f"Expected a JSON object in {source}, got {type(data).__name__}", path=source
        )

    try:
        definition = Definition.model_validate(data)
    except ValidationError as e:
        errors = [
            f"{'.'.join(str(p) for p in err['loc']) or '<root>'}: {err['msg']}"
            for err in e.errors()
        ]
        raise DefinitionError(
            f"Invalid project definition in {source}", path=source, errors=errors
        ) from e

    logger.info(
        "Loaded definition '%s' with %d app(s), %d resource(s)",
        definition.project.name,
        len(definition.apps),
        len(definition.resources),
    )
    return definition


def read_definition(fs: Filesystem) -> Definition:
    """Load app.json from the root of ``fs``.

    Raises:
        DefinitionError: If the file is missing, unreadable or invalid.
    """
    try:
        raw = fs.read_file(DEFINITION_FILE)
    except FileNotFoundError as e:
        raise DefinitionError(
            f"Could not find {DEFINITION_FILE}. "
            "Run this command from a WebKit project, or pass --dir.",
            path=DEFINITION_FILE,
        ) from e
    except OSError as e:
        raise DefinitionError(f"Cannot read {DEFINITION_FILE}: {e}", path=DEFINITION_FILE) from e

    logger.debug("Loading definition from %s filesystem", fs.name)
    return parse_definition(raw)
