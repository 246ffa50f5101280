"""Repository layer: SQL helpers over a sqlite3 connection.

Keep functions thin and focused, so the browser service avoids SQL strings.
"""
from __future__ import annotations
