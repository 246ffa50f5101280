from __future__ import annotations

from fastapi import APIRouter, Depends
from pydantic import BaseModel

from ..deps import api_error, get_browser
from ..errors import BrowserError
from ..logs import LogContext
from ..services.browser_svc import TableBrowser

router = APIRouter()


class QueryRequest(BaseModel):
    sql: str = ""


@router.post("/api/query")
def api_query(body: QueryRequest, browser: TableBrowser = Depends(get_browser)):
    log = LogContext("EXECUTE_QUERY")
    log.set_payload({"sql": body.sql})
    try:
        data = browser.execute_query(body.sql)
        log.set_after({"rows": data.total})
        log.write("OK")
        return data.to_dict()
    except BrowserError as e:
        log.write("ERROR", str(e))
        # 引擎错误也按 400 返回（用户输入的 SQL 有误）
        raise api_error(e, default_status=400)
