"""Request logging middleware.

- One structured record per request: method, route template, status, duration.
- `X-Request-ID` is propagated when safe, generated otherwise, and echoed on the response.
- Bodies, query strings and headers are never logged.
"""

from __future__ import annotations

import logging
import re
import time
import uuid

from fastapi import Request
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.responses import Response

from app.core.middleware.route_label import route_label

logger = logging.getLogger("app.http")

REQUEST_ID_HEADER = "X-Request-ID"
_REQUEST_ID_RE = re.compile(r"^[A-Za-z0-9][A-Za-z0-9._-]{0,127}$")


def resolve_request_id(request: Request) -> str:
    """Use the caller's X-Request-ID if it is short and log-safe, else a new uuid4 hex."""

    incoming = request.headers.get(REQUEST_ID_HEADER)
    if incoming and _REQUEST_ID_RE.fullmatch(incoming):
        return incoming
    return uuid.uuid4().hex


def _elapsed_ms(started: float) -> float:
    return round((time.perf_counter() - started) * 1000.0, 2)


class HttpLoggingMiddleware(BaseHTTPMiddleware):
    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        request_id = resolve_request_id(request)
        request.state.request_id = request_id
        started = time.perf_counter()

        def _fields(status_code: int) -> dict[str, object]:
            return {
                "request_id": request_id,
                "http_method": request.method,
                "request_path": route_label(request),
                "status_code": status_code,
                "duration_ms": _elapsed_ms(started),
            }

        try:
            response = await call_next(request)
        except Exception:  # noqa: BLE001 - logged with stack trace, then re-raised
            logger.exception("Unhandled exception while processing request", extra=_fields(500))
            raise

        response.headers[REQUEST_ID_HEADER] = request_id
        logger.info("Request completed", extra=_fields(response.status_code))
        return response
