"""
.dockerignore producer — one per app, inside the app directory.

Common exclusions plus language-specific ones (node_modules for JS,
vendor/ for Go).
"""

from __future__ import annotations

import posixpath

from webkit.core.manifest.source import source_app
from webkit.core.pipeline import CommandInput
from webkit.core.scaffold.options import with_tracking
from webkit.core.templates import must_load_template


def docker_ignore(input: CommandInput) -> None:
    template = must_load_template("dockerignore.j2")
    for app in input.definition().apps:
        input.engine.write_template(
            posixpath.join(app.path, ".dockerignore"),
            template,
            {"definition": input.definition(), "app": app},
            with_tracking(source_app(app.name)),
        )
