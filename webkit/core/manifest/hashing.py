"""Content fingerprinting for drift comparison."""

from __future__ import annotations

import hashlib


def hash_content(data: bytes) -> str:
    """SHA-256 of ``data`` as 64 lowercase hex characters."""
    return hashlib.sha256(data).hexdigest()
