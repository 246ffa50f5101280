"""Plain data carriers returned by the browser service and serialized by routes."""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, List, Optional


@dataclass
class Column:
    name: str
    type: str
    not_null: bool = False
    default_value: Optional[str] = None
    primary_key: bool = False

    def to_dict(self) -> dict:
        return {
            "name": self.name,
            "type": self.type,
            "not_null": self.not_null,
            "default_value": self.default_value,
            "primary_key": self.primary_key,
        }


@dataclass
class Table:
    name: str
    row_count: int = 0
    columns: Optional[List[Column]] = None

    def to_dict(self) -> dict:
        out: dict = {"name": self.name, "row_count": self.row_count}
        # column list is omitted unless it was loaded
        if self.columns:
            out["columns"] = [c.to_dict() for c in self.columns]
        return out


@dataclass
class TableData:
    """One page of rows; cells are None, int, float or str."""
    columns: List[str] = field(default_factory=list)
    rows: List[List[Any]] = field(default_factory=list)
    total: int = 0
    page: int = 1
    limit: int = 0

    def to_dict(self) -> dict:
        return {
            "columns": list(self.columns),
            "rows": [list(r) for r in self.rows],
            "total": self.total,
            "page": self.page,
            "limit": self.limit,
        }
