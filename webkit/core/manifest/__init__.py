"""Manifest — hashing, source tags, the tracker and drift detection."""

from webkit.core.manifest.drift import DriftEntry, DriftReason, detect_drift
from webkit.core.manifest.hashing import hash_content
from webkit.core.manifest.source import source_app, source_project, source_resource
from webkit.core.manifest.tracker import (
    MANIFEST_PATH,
    Tracker,
    canonical_path,
    load_manifest,
)

__all__ = [
    "MANIFEST_PATH",
    "DriftEntry",
    "DriftReason",
    "Tracker",
    "canonical_path",
    "detect_drift",
    "hash_content",
    "load_manifest",
    "source_app",
    "source_project",
    "source_resource",
]
