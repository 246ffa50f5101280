"""
Row write endpoints. Only mounted when the database is writable.
"""
from __future__ import annotations

from typing import Any, Dict, Optional

from fastapi import APIRouter, Body, Depends, HTTPException

from ..deps import api_error, get_browser
from ..errors import BrowserError
from ..logs import LogContext
from ..services.browser_svc import TableBrowser

router = APIRouter()

MISSING_PK = {"error": "Missing pk or pk_value query parameters", "kind": "validation"}


def _require_pk(pk: Optional[str], pk_value: Optional[str]) -> None:
    if not pk or not pk_value:
        raise HTTPException(status_code=400, detail=MISSING_PK)


@router.post("/api/tables/{name}/rows", status_code=201)
def api_insert_row(
    name: str,
    values: Dict[str, Any] = Body(...),
    browser: TableBrowser = Depends(get_browser),
):
    log = LogContext("INSERT_ROW")
    log.set_entity("table", name)
    log.set_payload(values)
    try:
        rowid = browser.insert_row(name, values)
        log.set_after({"rowid": rowid})
        log.write("OK")
        return {"message": "Row inserted successfully"}
    except BrowserError as e:
        log.write("ERROR", str(e))
        raise api_error(e)


@router.put("/api/tables/{name}/rows")
def api_update_row(
    name: str,
    pk: Optional[str] = None,
    pk_value: Optional[str] = None,
    values: Dict[str, Any] = Body(...),
    browser: TableBrowser = Depends(get_browser),
):
    _require_pk(pk, pk_value)
    log = LogContext("UPDATE_ROW")
    log.set_entity("table", name)
    log.set_payload({"pk": pk, "pk_value": pk_value, "values": values})
    try:
        affected = browser.update_row(name, pk, pk_value, values)
        log.set_after({"affected": affected})
        log.write("OK")
        return {"message": "Row updated successfully"}
    except BrowserError as e:
        log.write("ERROR", str(e))
        raise api_error(e)


@router.delete("/api/tables/{name}/rows")
def api_delete_row(
    name: str,
    pk: Optional[str] = None,
    pk_value: Optional[str] = None,
    browser: TableBrowser = Depends(get_browser),
):
    _require_pk(pk, pk_value)
    log = LogContext("DELETE_ROW")
    log.set_entity("table", name)
    log.set_payload({"pk": pk, "pk_value": pk_value})
    try:
        affected = browser.delete_row(name, pk, pk_value)
        log.set_after({"affected": affected})
        log.write("OK")
        return {"message": "Row deleted successfully"}
    except BrowserError as e:
        log.write("ERROR", str(e))
        raise api_error(e)
