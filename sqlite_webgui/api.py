"""
FastAPI app factory aggregating the routers under sqlite_webgui/routes.

The app is built once per Database; the write routes are only included
when the database was opened writable.
"""
from __future__ import annotations

import logging
import time
from pathlib import Path

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles
from starlette.exceptions import HTTPException as StarletteHTTPException

from . import __version__
from .db import Database
from .services.browser_svc import TableBrowser

WEB_DIR = Path(__file__).resolve().parent / "web"

logger = logging.getLogger("sqlite_webgui.access")


async def http_error_handler(request: Request, exc: StarletteHTTPException):
    detail = exc.detail
    body = detail if isinstance(detail, dict) else {"error": str(detail), "kind": "http"}
    return JSONResponse(status_code=exc.status_code, content=body, headers=getattr(exc, "headers", None))


async def validation_error_handler(request: Request, exc: RequestValidationError):
    errs = exc.errors()
    if any(e.get("type") == "json_invalid" for e in errs):
        msg = "Invalid JSON"
    else:
        msg = "; ".join(
            f"{'.'.join(str(p) for p in e.get('loc', ()))}: {e.get('msg', '')}" for e in errs
        ) or "Invalid request"
    return JSONResponse(status_code=400, content={"error": msg, "kind": "validation"})


def create_app(db: Database, serve_web: bool = True) -> FastAPI:
    app = FastAPI(title="sqlite-webgui", version=__version__)
    app.state.browser = TableBrowser(db)

    app.add_exception_handler(StarletteHTTPException, http_error_handler)
    app.add_exception_handler(RequestValidationError, validation_error_handler)

    @app.middleware("http")
    async def log_requests(request: Request, call_next):
        start = time.perf_counter()
        response = await call_next(request)
        elapsed_ms = (time.perf_counter() - start) * 1000
        logger.info("%s %s -> %s (%.1fms)", request.method, request.url.path, response.status_code, elapsed_ms)
        return response

    # Include routers
    from .routes import base as base_routes
    from .routes import tables as tables_routes
    from .routes import query as query_routes

    app.include_router(base_routes.router)
    app.include_router(tables_routes.router)
    app.include_router(query_routes.router)

    # 只读模式下不注册写接口（不存在，而不是拒绝）
    if not db.readonly:
        from .routes import rows as rows_routes
        app.include_router(rows_routes.router)

    if serve_web and WEB_DIR.is_dir():
        app.mount("/", StaticFiles(directory=str(WEB_DIR), html=True), name="web")

    return app
