"""
Source tags — where a generated file conceptually comes from.

Tags are opaque strings to the engine; they exist so drift output can
tell the user which part of app.json a file belongs to.
"""

from __future__ import annotations

SOURCE_PROJECT = "project"


def source_project() -> str:
    return SOURCE_PROJECT


def source_app(name: str) -> str:
    return f"app:{name}"


def source_resource(name: str) -> str:
    return f"resource:{name}"
