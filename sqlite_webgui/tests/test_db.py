import sqlite3

import pytest

from sqlite_webgui.db import Database, build_uri
from sqlite_webgui.errors import DatabaseConnectionError
from sqlite_webgui.repository.table_repo import quote_ident


def test_read_only_flag(ro_db, rw_db):
    assert ro_db.readonly is True
    assert rw_db.readonly is False


def test_build_uri_modes(tmp_path):
    p = str(tmp_path / "my db.sqlite")
    assert build_uri(p, True).endswith("my%20db.sqlite?mode=ro")
    assert build_uri(p, False).startswith("file://")
    assert build_uri(p, False).endswith("?mode=rw")


def test_missing_file_not_created(tmp_path):
    path = tmp_path / "missing.db"
    with pytest.raises(DatabaseConnectionError):
        Database(str(path), readonly=False)
    assert not path.exists()


def test_read_only_connection_refuses_writes(ro_db):
    with pytest.raises(sqlite3.OperationalError):
        ro_db.conn.execute("DELETE FROM users")


def test_context_manager_closes(db_path):
    with Database(db_path, readonly=True) as db:
        assert db.conn.execute("SELECT COUNT(*) FROM users").fetchone()[0] == 2
    with pytest.raises(sqlite3.ProgrammingError):
        db.conn.execute("SELECT 1")


def test_quote_ident():
    assert quote_ident("users") == '"users"'
    assert quote_ident('we"ird') == '"we""ird"'


def test_open_failure_kind(tmp_path):
    with pytest.raises(DatabaseConnectionError) as exc:
        Database(str(tmp_path / "missing.db"))
    assert exc.value.kind == "connection"
    assert exc.value.to_dict()["kind"] == "connection"
