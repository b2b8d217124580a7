"""Services — the producers behind each command."""
