"""
Template registry — resolves names to parsed templates from the bundle.

Templates ship inside the package under ``templates/files/`` and are
loaded with Jinja2. Every template sees the helpers from
``webkit.core.templates.funcs`` both as globals (``gh_var("X")``) and,
where Jinja has no builtin of the same name, as filters (``x | snakecase``).

Usage::

    from webkit.core.templates import load_template

    tpl = load_template("dockerignore.j2")
    text = tpl.render(app=app)

Bundle files carry no leading dot (``gitignore.j2`` renders
``.gitignore``) because package-data globs skip dotfiles.
"""

from __future__ import annotations

import logging
from functools import cached_property
from pathlib import Path

import jinja2

from webkit.adapters.filesystem.local import LocalFilesystem
from webkit.adapters.filesystem.readonly import ReadOnlyFilesystem
from webkit.core.errors import TemplateNotFoundError
from webkit.core.templates.funcs import template_funcs

logger = logging.getLogger(__name__)

TEMPLATES_DIR = Path(__file__).parent / "files"

# Names the CLI checks for at startup.
REQUIRED_TEMPLATES = (
    "editorconfig.j2",
    "prettierrc.j2",
    "prettierignore.j2",
    "eslint.config.js.j2",
    "gitignore.j2",
    "dockerignore.j2",
    "README.md.j2",
    "github/dependabot.yaml.j2",
    "github/workflows/pr.yaml.j2",
    "github/workflows/backup.yaml.j2",
    "golangci.yaml",
    "scripts/check-deps.cjs",
)


class TemplateRegistry:
    """Owns the Jinja2 environment for one bundle directory.

    Jinja caches parsed templates per name, so repeated loads are cheap.
    """

    def __init__(self, root: Path = TEMPLATES_DIR):
        self._root = root

    @property
    def root(self) -> Path:
        return self._root

    @cached_property
    def env(self) -> jinja2.Environment:
        env = jinja2.Environment(
            loader=jinja2.FileSystemLoader(str(self._root)),
            keep_trailing_newline=True,
            trim_blocks=True,
            lstrip_blocks=True,
            undefined=jinja2.StrictUndefined,
            autoescape=False,
        )
        funcs = template_funcs()
        env.globals.update(funcs)
        for name, fn in funcs.items():
            env.filters.setdefault(name, fn)
        logger.debug("Template environment ready (%d helpers) at %s", len(funcs), self._root)
        return env

    @cached_property
    def embed(self) -> ReadOnlyFilesystem:
        """The bundle as a read-only filesystem, for byte-for-byte copies."""
        return LocalFilesystem(self._root).read_only()

    def load(self, name: str) -> jinja2.Template:
        """Parse a template by name.

        Raises:
            TemplateNotFoundError: ``name`` is not in the bundle.
        """
        try:
            return self.env.get_template(name)
        except jinja2.TemplateNotFound as e:
            raise TemplateNotFoundError("template not found", name=name) from e

    def must_load(self, name: str) -> jinja2.Template:
        """Like ``load``, for templates the tool cannot run without."""
        try:
            return self.load(name)
        except TemplateNotFoundError:
            logger.critical("Embedded template %s is missing from the bundle", name)
            raise

    def names(self) -> list[str]:
        return sorted(self.env.list_templates())

    def validate(self, required: tuple[str, ...] = REQUIRED_TEMPLATES) -> None:
        """Fail fast if any required template is absent."""
        available = set(self.names())
        for name in required:
            if name not in available:
                raise TemplateNotFoundError("embedded template missing", name=name)


# ── Module-level default ────────────────────────────────────────

_default = TemplateRegistry()


def load_template(name: str) -> jinja2.Template:
    return _default.load(name)


def must_load_template(name: str) -> jinja2.Template:
    return _default.must_load(name)


def validate_bundle() -> None:
    _default.validate()


def embed_fs() -> ReadOnlyFilesystem:
    return _default.embed
