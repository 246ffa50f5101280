from __future__ import annotations

from sqlite3 import Connection, Cursor, OperationalError
from typing import Any, Mapping


def quote_ident(name: str) -> str:
    """Quote an identifier for embedding in SQL text ("a""b" style)."""
    return '"' + str(name).replace('"', '""') + '"'


def list_table_names(conn: Connection) -> list[str]:
    rows = conn.execute(
        "SELECT name FROM sqlite_master "
        "WHERE type='table' AND name NOT LIKE 'sqlite\\_%' ESCAPE '\\' "
        "ORDER BY name"
    ).fetchall()
    return [r[0] for r in rows]


def list_relation_names(conn: Connection) -> set[str]:
    """Tables and views, i.e. everything SELECT * FROM can read."""
    rows = conn.execute(
        "SELECT name FROM sqlite_master WHERE type IN ('table', 'view')"
    ).fetchall()
    return {r[0] for r in rows}


def has_rowid(conn: Connection, table: str) -> bool:
    """False for WITHOUT ROWID tables and views, which have no implicit rowid."""
    try:
        conn.execute(f"SELECT rowid FROM {quote_ident(table)} LIMIT 0").fetchall()
    except OperationalError:
        return False
    return True


def count_rows(conn: Connection, table: str) -> int:
    return int(conn.execute(f"SELECT COUNT(*) FROM {quote_ident(table)}").fetchone()[0])


def table_info(conn: Connection, table: str) -> list[tuple]:
    """PRAGMA table_info rows: (cid, name, type, notnull, dflt_value, pk)."""
    return conn.execute(f"PRAGMA table_info({quote_ident(table)})").fetchall()


def select_page(conn: Connection, table: str, limit: int, offset: int) -> Cursor:
    return conn.execute(
        f"SELECT * FROM {quote_ident(table)} LIMIT ? OFFSET ?",
        (limit, offset),
    )


def insert_row(conn: Connection, table: str, values: Mapping[str, Any]) -> int:
    if not values:
        cur = conn.execute(f"INSERT INTO {quote_ident(table)} DEFAULT VALUES")
        return int(cur.lastrowid or 0)
    cols = list(values.keys())
    placeholders = ",".join(["?"] * len(cols))
    cur = conn.execute(
        f"INSERT INTO {quote_ident(table)} ({', '.join(quote_ident(c) for c in cols)}) "
        f"VALUES({placeholders})",
        [values[c] for c in cols],
    )
    return int(cur.lastrowid or 0)


def update_row(
    conn: Connection,
    table: str,
    pk_column: str,
    pk_value: Any,
    values: Mapping[str, Any],
) -> int:
    cols = list(values.keys())
    set_clause = ", ".join(f"{quote_ident(c)}=?" for c in cols)
    params: list[Any] = [values[c] for c in cols]
    params.append(pk_value)
    cur = conn.execute(
        f"UPDATE {quote_ident(table)} SET {set_clause} WHERE {quote_ident(pk_column)}=?",
        params,
    )
    return cur.rowcount


def delete_row(conn: Connection, table: str, pk_column: str, pk_value: Any) -> int:
    cur = conn.execute(
        f"DELETE FROM {quote_ident(table)} WHERE {quote_ident(pk_column)}=?",
        (pk_value,),
    )
    return cur.rowcount
