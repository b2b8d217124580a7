"""
Notice banner — the comment header marking a file as tool-managed.

The comment syntax is picked from the file's extension, or from its
full name for extensionless dotfiles. JSON and unknown types get no
banner; injecting one would produce an invalid file.
"""

from __future__ import annotations

import posixpath

NOTICE = "This file is generated by WebKit. Do not edit manually, run 'webkit update' instead."

_HASH = ("# ", "")
_SLASH = ("// ", "")
_HTML = ("<!-- ", " -->")

_BY_EXTENSION: dict[str, tuple[str, str]] = {
    ".sh": _HASH,
    ".bash": _HASH,
    ".yaml": _HASH,
    ".yml": _HASH,
    ".toml": _HASH,
    ".py": _HASH,
    ".js": _SLASH,
    ".cjs": _SLASH,
    ".mjs": _SLASH,
    ".ts": _SLASH,
    ".go": _SLASH,
    ".html": _HTML,
    ".md": _HTML,
}

_BY_NAME: dict[str, tuple[str, str]] = {
    ".dockerignore": _HASH,
    ".gitignore": _HASH,
    ".prettierignore": _HASH,
    ".editorconfig": _HASH,
    "Dockerfile": _HASH,
}


def comment_style(path: str) -> tuple[str, str] | None:
    """(prefix, suffix) for the file at ``path``, or None if unknown."""
    name = posixpath.basename(path.replace("\\", "/"))
    if name in _BY_NAME:
        return _BY_NAME[name]
    _, ext = posixpath.splitext(name)
    return _BY_EXTENSION.get(ext.lower())


def notice_for_file(path: str) -> str:
    """The banner for ``path`` including its trailing blank line, or ""."""
    style = comment_style(path)
    if style is None:
        return ""
    prefix, suffix = style
    return f"{prefix}{NOTICE}{suffix}\n\n"
