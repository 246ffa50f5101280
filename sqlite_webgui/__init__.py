"""Local web browser/editor for a single SQLite database file."""
from __future__ import annotations

__version__ = "0.1.0"
