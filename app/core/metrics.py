from __future__ import annotations

import time
from typing import cast

from fastapi import APIRouter, Request
from prometheus_client import CONTENT_TYPE_LATEST, Counter, Histogram, generate_latest
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.responses import Response

from app.core.middleware.route_label import route_label

metrics_router = APIRouter(tags=["monitoring"])

# Labels are route templates or fixed outcome names only; never document ids.

http_requests_total = Counter(
    "http_requests_total",
    "Total HTTP requests",
    labelnames=("method", "route", "status_code"),
)

http_request_duration_seconds = Histogram(
    "http_request_duration_seconds",
    "HTTP request duration in seconds",
    labelnames=("method", "route", "status_code"),
    buckets=(0.005, 0.01, 0.025, 0.05, 0.1, 0.25, 0.5, 1.0, 2.5, 5.0, 10.0),
)

store_lookups_total = Counter(
    "store_lookups_total",
    "Document store point lookups by outcome",
    labelnames=("collection", "outcome"),
)

store_lookup_duration_seconds = Histogram(
    "store_lookup_duration_seconds",
    "Document store lookup latency in seconds",
    labelnames=("collection",),
    buckets=(0.01, 0.025, 0.05, 0.1, 0.25, 0.5, 1.0, 2.5, 5.0, 10.0),
)


def record_store_lookup(*, collection: str, outcome: str, duration_seconds: float) -> None:
    """Record one lookup; outcome is one of found|absent|error."""

    store_lookups_total.labels(collection=collection, outcome=outcome).inc()
    store_lookup_duration_seconds.labels(collection=collection).observe(duration_seconds)


class PrometheusMetricsMiddleware(BaseHTTPMiddleware):
    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        started = time.perf_counter()
        status_code = 500
        try:
            response = await call_next(request)
            status_code = response.status_code
            return response
        finally:
            labels = {
                "method": request.method,
                "route": route_label(request),
                "status_code": str(int(status_code)),
            }
            http_requests_total.labels(**labels).inc()
            http_request_duration_seconds.labels(**labels).observe(
                time.perf_counter() - started
            )


@metrics_router.get("/metrics", include_in_schema=False)
def metrics() -> Response:
    # Default registry; one uvicorn worker per process.
    payload = generate_latest()
    return Response(content=cast(bytes, payload), media_type=CONTENT_TYPE_LATEST)
