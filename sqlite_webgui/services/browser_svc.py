"""
Table browser service: generic table/row operations over one SQLite file.

Identifiers (table and column names) cannot be bound as parameters, so every
identifier is checked against the live schema before it is quoted into SQL
text. Values are always bound.
"""
from __future__ import annotations

import logging
import sqlite3
from typing import Any, Dict, List, Mapping

from ..db import Database
from ..errors import NotFoundError, QueryError, ReadOnlyError, ValidationError
from ..models import Column, Table, TableData
from ..repository import table_repo
from .utils import SQLITE_MAX_INT, convert_row

logger = logging.getLogger(__name__)

ROWID_ALIASES = ("rowid", "oid", "_rowid_")


def _query_error(prefix: str, e: Exception) -> QueryError:
    msg = f"{prefix}: {e}"
    # 引擎以只读连接拒绝写入时，给出可区分的 kind
    if "readonly" in str(e).lower():
        return QueryError(msg, kind="readonly")
    return QueryError(msg)


class TableBrowser:
    """Data access layer; the read-only flag comes from the Database it wraps."""

    def __init__(self, db: Database):
        self.db = db

    @property
    def readonly(self) -> bool:
        return self.db.readonly

    @property
    def conn(self) -> sqlite3.Connection:
        return self.db.conn

    # ---------------- schema checks ----------------

    def _ensure_writable(self) -> None:
        if self.readonly:
            raise ReadOnlyError("database is in read-only mode")

    def _resolve_table(self, table: str) -> str:
        """Canonical name of a table or view; SQLite matches identifiers case-insensitively."""
        try:
            names = table_repo.list_relation_names(self.conn)
        except sqlite3.Error as e:
            raise _query_error("failed to read schema", e) from e
        if table in names:
            return table
        folded = {n.casefold(): n for n in names}
        if str(table).casefold() not in folded:
            raise NotFoundError(f"no such table: {table}")
        return folded[str(table).casefold()]

    def _resolve_columns(self, table: str, names) -> tuple[str, List[str]]:
        """
        Resolve a table and column names against the live schema.

        Columns match case-insensitively; rowid/oid/_rowid_ are accepted on
        tables that have an implicit rowid and no real column of that name.
        """
        table = self._resolve_table(table)
        try:
            known = {r[1].casefold(): r[1] for r in table_repo.table_info(self.conn, table)}
            if any(a not in known for a in ROWID_ALIASES) and table_repo.has_rowid(self.conn, table):
                for alias in ROWID_ALIASES:
                    known.setdefault(alias, alias)
        except sqlite3.Error as e:
            raise _query_error("failed to query table schema", e) from e
        resolved, missing = [], []
        for n in names:
            key = str(n).casefold()
            if key in known:
                resolved.append(known[key])
            else:
                missing.append(str(n))
        if missing:
            raise NotFoundError(f"no such column in {table}: {', '.join(missing)}")
        return table, resolved

    def _resolve_values(self, table: str, values: Dict[str, Any]) -> tuple[str, Dict[str, Any]]:
        table, cols = self._resolve_columns(table, values.keys())
        out: Dict[str, Any] = {}
        for col, v in zip(cols, values.values()):
            if col in out:
                raise ValidationError(f"column given more than once: {col}")
            out[col] = v
        return table, out

    @staticmethod
    def _check_values(values) -> Dict[str, Any]:
        if not isinstance(values, Mapping):
            raise ValidationError("row values must be a JSON object")
        return dict(values)

    # ---------------- reads ----------------

    def list_tables(self) -> List[Table]:
        try:
            names = table_repo.list_table_names(self.conn)
        except sqlite3.Error as e:
            raise _query_error("failed to query tables", e) from e
        tables = []
        for name in names:
            try:
                row_count = table_repo.count_rows(self.conn, name)
            except sqlite3.Error as e:
                # 单表计数失败不影响整体列表
                logger.warning("count failed for table %s: %s", name, e)
                row_count = 0
            tables.append(Table(name=name, row_count=row_count))
        return tables

    def get_table_schema(self, table: str) -> List[Column]:
        table = self._resolve_table(table)
        try:
            rows = table_repo.table_info(self.conn, table)
        except sqlite3.Error as e:
            raise _query_error("failed to query table schema", e) from e
        return [
            Column(
                name=name,
                type=col_type or "",
                not_null=bool(not_null),
                default_value=None if default is None else str(default),
                primary_key=bool(pk),
            )
            for _cid, name, col_type, not_null, default, pk in rows
        ]

    def get_table_data(self, table: str, page: int = 1, limit: int = 50) -> TableData:
        if page < 1 or limit < 0:
            raise ValidationError("page must be >= 1 and limit must be >= 0")
        offset = (page - 1) * limit
        if limit > SQLITE_MAX_INT or offset > SQLITE_MAX_INT:
            raise ValidationError("page is out of range")
        table = self._resolve_table(table)
        try:
            total = table_repo.count_rows(self.conn, table)
        except sqlite3.Error as e:
            raise _query_error("failed to count rows", e) from e
        try:
            cur = table_repo.select_page(self.conn, table, limit, offset)
            columns = [d[0] for d in (cur.description or [])]
            rows = [convert_row(r) for r in cur.fetchall()]
        except sqlite3.Error as e:
            raise _query_error("failed to query table data", e) from e
        return TableData(columns=columns, rows=rows, total=total, page=page, limit=limit)

    # ---------------- writes ----------------
    # OverflowError: ints outside SQLite's 64-bit range fail while binding

    def insert_row(self, table: str, values: Mapping[str, Any]) -> int:
        """Insert one row; returns the new rowid."""
        self._ensure_writable()
        table, values = self._resolve_values(table, self._check_values(values))
        try:
            return table_repo.insert_row(self.conn, table, values)
        except (sqlite3.Error, OverflowError) as e:
            raise _query_error("failed to insert row", e) from e

    def update_row(self, table: str, pk_column: str, pk_value: Any, values: Mapping[str, Any]) -> int:
        """Update the row matching pk_column = pk_value; returns affected row count (may be 0)."""
        self._ensure_writable()
        values = self._check_values(values)
        if not values:
            raise ValidationError("no columns to update")
        table, values = self._resolve_values(table, values)
        _, (pk_column,) = self._resolve_columns(table, [pk_column])
        try:
            return table_repo.update_row(self.conn, table, pk_column, pk_value, values)
        except (sqlite3.Error, OverflowError) as e:
            raise _query_error("failed to update row", e) from e

    def delete_row(self, table: str, pk_column: str, pk_value: Any) -> int:
        self._ensure_writable()
        table, (pk_column,) = self._resolve_columns(table, [pk_column])
        try:
            return table_repo.delete_row(self.conn, table, pk_column, pk_value)
        except (sqlite3.Error, OverflowError) as e:
            raise _query_error("failed to delete row", e) from e

    # ---------------- ad-hoc SQL ----------------

    def execute_query(self, sql: str) -> TableData:
        """
        Run one arbitrary statement and return its result set.

        No read-only check here: a read-only Database opened its connection
        with mode=ro, so the engine itself refuses writes.
        """
        sql = (sql or "").strip()
        if not sql:
            raise ValidationError("query cannot be empty")
        try:
            cur = self.conn.execute(sql)
            columns = [d[0] for d in (cur.description or [])]
            rows = [convert_row(r) for r in cur.fetchall()] if cur.description else []
        except (sqlite3.Error, sqlite3.Warning) as e:
            raise _query_error("failed to execute query", e) from e
        return TableData(columns=columns, rows=rows, total=len(rows), page=1, limit=len(rows))
