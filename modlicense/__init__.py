"""Module-root license checks and reports driven by an external scanner."""

__version__ = "0.1.0"
