"""Starter README producer. Scaffold mode: written once, then user-owned."""

from __future__ import annotations

from webkit.core.manifest.source import source_project
from webkit.core.pipeline import CommandInput
from webkit.core.scaffold.options import with_scaffold_mode, with_tracking
from webkit.core.templates import must_load_template


def readme(input: CommandInput) -> None:
    input.engine.write_template(
        "README.md",
        must_load_template("README.md.j2"),
        {"definition": input.definition()},
        with_tracking(source_project()),
        with_scaffold_mode(),
    )
