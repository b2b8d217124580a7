"""
Error hierarchy — every failure the core surfaces to a command.

Each error carries a ``kind`` (``io/write``, ``template/render``, ...)
and the path or template name it originated from, so the CLI can print
a single line that points the user at the culprit.
"""

from __future__ import annotations


class WebkitError(Exception):
    """Base class for all core errors."""

    kind: str = "internal"

    def __init__(self, message: str, *, path: str | None = None, name: str | None = None):
        super().__init__(message)
        self.message = message
        self.path = path
        self.name = name

    def __str__(self) -> str:
        target = self.path or self.name
        if target and target not in self.message:
            return f"{self.message}: {target}"
        return self.message


# ── Filesystem ──────────────────────────────────────────────────


class FilesystemError(WebkitError):
    kind = "io"


class MkdirError(FilesystemError):
    kind = "io/mkdir"


class WriteError(FilesystemError):
    kind = "io/write"


class ReadError(FilesystemError):
    kind = "io/read"


class RemoveError(FilesystemError):
    kind = "io/remove"


# ── Encoding & templates ────────────────────────────────────────


class EncodingError(WebkitError):
    """JSON or YAML serialisation failed."""

    kind = "encoding"


class TemplateNotFoundError(WebkitError):
    """A template name is missing from the embedded bundle."""

    kind = "template/not-found"


class TemplateRenderError(WebkitError):
    kind = "template/render"


# ── Manifest ────────────────────────────────────────────────────


class ManifestNotFoundError(WebkitError):
    """No manifest on the filesystem. Usually means a first run."""

    kind = "manifest/absent"


class ManifestParseError(WebkitError):
    kind = "manifest/parse"


# ── Definition ──────────────────────────────────────────────────


class DefinitionError(WebkitError):
    """The project definition (app.json) is missing or invalid."""

    kind = "definition/invalid"

    def __init__(self, message: str, *, path: str | None = None, errors: list[str] | None = None):
        super().__init__(message, path=path)
        self.errors = errors or []
