"""
Domain models — Pydantic types for WebKit.

All models are re-exported here for convenient access:

    from webkit.core.models import Definition, App, Resource, Manifest, FileEntry
"""

from webkit.core.models.definition import (
    App,
    Build,
    Definition,
    Domain,
    GitHubRepo,
    Project,
    Resource,
    ResourceBackup,
)
from webkit.core.models.manifest import FileEntry, Manifest

__all__ = [
    # definition.py
    "App",
    "Build",
    "Definition",
    "Domain",
    # manifest.py
    "FileEntry",
    "GitHubRepo",
    "Manifest",
    "Project",
    "Resource",
    "ResourceBackup",
]
