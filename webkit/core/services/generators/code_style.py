"""
Code style producer — editor, formatter and linter configuration.

Emits .editorconfig, .prettierrc, .prettierignore and eslint.config.js
at the project root. Go projects additionally get .golangci.yaml,
copied byte-for-byte from the bundle.
"""

from __future__ import annotations

from webkit.core.manifest.source import source_project
from webkit.core.pipeline import CommandInput
from webkit.core.scaffold.options import with_tracking
from webkit.core.templates import embed_fs, must_load_template

# output path → bundle template
CODE_STYLE_TEMPLATES: dict[str, str] = {
    ".editorconfig": "editorconfig.j2",
    ".prettierrc": "prettierrc.j2",
    ".prettierignore": "prettierignore.j2",
    "eslint.config.js": "eslint.config.js.j2",
}

GOLANGCI_SOURCE = "golangci.yaml"
GOLANGCI_TARGET = ".golangci.yaml"


def code_style(input: CommandInput) -> None:
    definition = input.definition()
    data = {
        "definition": definition,
        "svelte_apps": [a for a in definition.apps if a.type == "svelte-kit"],
    }

    for path, name in CODE_STYLE_TEMPLATES.items():
        input.engine.write_template(
            path,
            must_load_template(name),
            data,
            with_tracking(source_project()),
        )

    if definition.contains_go():
        input.engine.copy_from_embed(
            embed_fs(),
            GOLANGCI_SOURCE,
            GOLANGCI_TARGET,
            with_tracking(source_project()),
        )
