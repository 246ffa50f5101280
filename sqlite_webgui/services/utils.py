from __future__ import annotations

# sqlite_webgui/services/utils.py
from typing import Any, List, Sequence

DEFAULT_PAGE = 1
DEFAULT_LIMIT = 50
MAX_LIMIT = 1000
SQLITE_MAX_INT = 2**63 - 1
SQLITE_MIN_INT = -(2**63)


def convert_cell(v: Any) -> Any:
    """BLOB 转为字符串，其余原样返回（None/int/float/str）"""
    if isinstance(v, (bytes, bytearray, memoryview)):
        return bytes(v).decode("utf-8", errors="replace")
    return v


def convert_row(row: Sequence[Any]) -> List[Any]:
    return [convert_cell(v) for v in row]


def to_int_safe(x, default=None):
    """超出 SQLite INTEGER（有符号 64 位）范围的值与非数字同样处理"""
    try:
        v = int(x)
    except (TypeError, ValueError):
        return default
    if v < SQLITE_MIN_INT or v > SQLITE_MAX_INT:
        return default
    return v


def normalize_pagination(page, limit) -> tuple[int, int]:
    """page < 1 -> 1；limit 不在 [1, MAX_LIMIT] -> DEFAULT_LIMIT；非数字按缺省处理"""
    p = to_int_safe(page, DEFAULT_PAGE)
    if p < 1:
        p = DEFAULT_PAGE
    n = to_int_safe(limit, DEFAULT_LIMIT)
    if n < 1 or n > MAX_LIMIT:
        n = DEFAULT_LIMIT
    return p, n
