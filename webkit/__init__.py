"""
WebKit — template-driven project scaffolding and drift detection.
"""

__version__ = "0.1.0"
