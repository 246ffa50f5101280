import sys
import pytest
from pathlib import Path

# Ensure project root on sys.path
_THIS_DIR = Path(__file__).resolve().parent
_PROJECT_ROOT = _THIS_DIR.parent.parent
if str(_PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(_PROJECT_ROOT))

from sqlite_webgui.db import Database, get_conn

SCHEMA = """
CREATE TABLE users (
  id INTEGER PRIMARY KEY AUTOINCREMENT,
  name TEXT NOT NULL,
  email TEXT
);
CREATE TABLE files (
  id INTEGER PRIMARY KEY,
  label TEXT DEFAULT 'untitled',
  data BLOB
);
CREATE VIEW user_names AS SELECT name FROM users;
INSERT INTO users (name, email) VALUES ('Alice', 'alice@example.com'), ('Bob', 'bob@example.com');
"""


@pytest.fixture()
def db_path(tmp_path):
    """Fresh database file per test: users (2 rows), files (empty), a view."""
    path = tmp_path / "test.db"
    with get_conn(str(path)) as conn:
        conn.executescript(SCHEMA)
    return str(path)


def _open(db_path, readonly):
    db = Database(db_path, readonly=readonly)
    yield db
    db.close()


@pytest.fixture()
def ro_db(db_path):
    yield from _open(db_path, True)


@pytest.fixture()
def rw_db(db_path):
    yield from _open(db_path, False)


@pytest.fixture()
def ro_browser(ro_db):
    from sqlite_webgui.services.browser_svc import TableBrowser
    return TableBrowser(ro_db)


@pytest.fixture()
def rw_browser(rw_db):
    from sqlite_webgui.services.browser_svc import TableBrowser
    return TableBrowser(rw_db)


@pytest.fixture()
def ro_client(ro_db):
    from fastapi.testclient import TestClient
    from sqlite_webgui.api import create_app
    return TestClient(create_app(ro_db))


@pytest.fixture()
def rw_client(rw_db):
    from fastapi.testclient import TestClient
    from sqlite_webgui.api import create_app
    return TestClient(create_app(rw_db))
