from __future__ import annotations

import logging

from fastapi import FastAPI, Request
from fastapi.responses import PlainTextResponse

from app.domain.exceptions import StoreError

logger = logging.getLogger("app.store")

STORE_ERROR_BODY = "Error fetching admin"


def register_exception_handlers(app: FastAPI) -> None:
    """Register application exception handlers."""

    @app.exception_handler(StoreError)
    async def handle_store_error(request: Request, exc: StoreError) -> PlainTextResponse:
        # Full details stay in the server log; the caller gets a generic body.
        request_id = getattr(request.state, "request_id", None) or request.headers.get(
            "X-Request-ID"
        )
        logger.error(
            "Document store request failed",
            exc_info=exc,
            extra={
                "request_id": request_id,
                "http_method": request.method,
                "request_path": request.url.path,  # no query string
                "status_code": 500,
                "error_type": type(exc.__cause__ or exc).__name__,
            },
        )
        return PlainTextResponse(STORE_ERROR_BODY, status_code=500)
