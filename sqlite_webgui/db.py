from __future__ import annotations

# sqlite_webgui/db.py
import logging
import os
import sqlite3
from contextlib import contextmanager
from pathlib import Path
from typing import Iterator

from .errors import DatabaseConnectionError

logger = logging.getLogger(__name__)


def build_uri(db_path: str, readonly: bool) -> str:
    """
    SQLite URI for the file. ``mode=ro`` makes the engine refuse writes;
    ``mode=rw`` keeps a writable open from creating a missing file.
    """
    mode = "ro" if readonly else "rw"
    return f"{Path(db_path).resolve().as_uri()}?mode={mode}"


class Database:
    """
    Single shared connection to an existing SQLite file.

    The read-only flag is fixed at construction and never changes.
    """

    def __init__(self, db_path: str, readonly: bool = True, foreign_keys: bool = False):
        if not db_path or not os.path.isfile(db_path):
            raise DatabaseConnectionError(f"Database file does not exist: {db_path}")
        self.path = db_path
        self._readonly = bool(readonly)
        conn = None
        try:
            conn = sqlite3.connect(
                build_uri(db_path, self._readonly),
                uri=True,
                check_same_thread=False,
                isolation_level=None,
            )
            if foreign_keys:
                conn.execute("PRAGMA foreign_keys = ON;")
            # ping: fails here for files that are not SQLite databases
            conn.execute("SELECT 1 FROM sqlite_master LIMIT 1").fetchall()
        except sqlite3.Error as e:
            if conn is not None:
                conn.close()
            raise DatabaseConnectionError(f"failed to open database: {e}") from e
        self.conn = conn
        logger.info("opened %s (%s)", db_path, "read-only" if self._readonly else "read-write")

    @property
    def readonly(self) -> bool:
        return self._readonly

    def close(self) -> None:
        self.conn.close()

    def __enter__(self) -> "Database":
        return self

    def __exit__(self, *exc) -> None:
        self.close()


@contextmanager
def get_conn(db_path: str) -> Iterator[sqlite3.Connection]:
    """
    Short-lived writable connection, used for setting up fixtures and scripts.
    row_factory is sqlite3.Row.
    """
    conn = sqlite3.connect(db_path, check_same_thread=False, isolation_level=None)
    try:
        conn.row_factory = sqlite3.Row
        yield conn
    finally:
        conn.close()
