from __future__ import annotations

from typing import Optional

from fastapi import APIRouter, Depends

from ..deps import api_error, get_browser
from ..errors import BrowserError
from ..services.browser_svc import TableBrowser
from ..services.utils import normalize_pagination

router = APIRouter()


@router.get("/api/mode")
def api_mode(browser: TableBrowser = Depends(get_browser)):
    return {"readonly": browser.readonly}


@router.get("/api/tables")
def api_tables(browser: TableBrowser = Depends(get_browser)):
    try:
        return [t.to_dict() for t in browser.list_tables()]
    except BrowserError as e:
        raise api_error(e)


@router.get("/api/tables/{name}/schema")
def api_table_schema(name: str, browser: TableBrowser = Depends(get_browser)):
    try:
        return [c.to_dict() for c in browser.get_table_schema(name)]
    except BrowserError as e:
        raise api_error(e)


@router.get("/api/tables/{name}/data")
def api_table_data(
    name: str,
    page: Optional[str] = None,
    limit: Optional[str] = None,
    browser: TableBrowser = Depends(get_browser),
):
    # 非数字或越界的分页参数回落到默认值，而不是报错
    p, n = normalize_pagination(page, limit)
    try:
        return browser.get_table_data(name, p, n).to_dict()
    except BrowserError as e:
        raise api_error(e)
