"""Configuration — app.json discovery and loading."""
