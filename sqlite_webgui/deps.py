from __future__ import annotations

from fastapi import HTTPException, Request

from .errors import BrowserError, ValidationError
from .services.browser_svc import TableBrowser


def get_browser(request: Request) -> TableBrowser:
    """The TableBrowser bound to this app by create_app()."""
    return request.app.state.browser


def api_error(e: BrowserError, default_status: int = 500) -> HTTPException:
    status = 400 if isinstance(e, ValidationError) else default_status
    return HTTPException(status_code=status, detail=e.to_dict())
