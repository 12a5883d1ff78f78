"""devlog.cli — Click-based command-line interface."""
