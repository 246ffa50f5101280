"""
Exception classes for table browsing operations.

Every error carries a short ``kind`` so API callers can tell a permission
failure from a malformed query without parsing message text.
"""
from __future__ import annotations


class BrowserError(Exception):
    """Base exception for database browser operations."""

    kind = "error"

    def __init__(self, message: str, kind: str | None = None):
        super().__init__(message)
        if kind is not None:
            self.kind = kind

    def to_dict(self) -> dict:
        return {"error": str(self), "kind": self.kind}


class DatabaseConnectionError(BrowserError):
    """Raised when the database file is missing or cannot be opened."""

    kind = "connection"


class ValidationError(BrowserError):
    """Raised for bad or missing request input."""

    kind = "validation"


class ReadOnlyError(BrowserError):
    """Raised when a write is attempted while the browser is read-only."""

    kind = "readonly"


class QueryError(BrowserError):
    """Raised when the engine rejects or fails a statement."""

    kind = "query"


class NotFoundError(QueryError):
    """Raised when a table or column is not present in the live schema."""

    kind = "not_found"
