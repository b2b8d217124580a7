"""Use cases — one orchestration function per CLI command."""
