from __future__ import annotations

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI

from app.admin.router import router as admin_router
from app.api.exception_handlers import register_exception_handlers
from app.api.schemas import HealthOut
from app.core.logging import setup_logging
from app.core.metrics import PrometheusMetricsMiddleware, metrics_router
from app.core.middleware.http_logging import HttpLoggingMiddleware
from app.core.settings import get_settings
from app.core.store.firestore_client import DocumentStoreClient, init_store
from app.domain.exceptions import StartupFailure

setup_logging()

logger = logging.getLogger("app.server")


def create_app(*, store: DocumentStoreClient | None = None) -> FastAPI:
    """Build the FastAPI application.

    When `store` is given the app uses it as-is and does not close it on shutdown.
    Otherwise the store is initialized from settings during startup (credentials are
    read exactly once) and closed on shutdown.
    """

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        # Defer settings/env access until application startup so importing the module
        # never requires credentials (e.g. during pytest collection).
        settings = get_settings()
        if not settings.admin_document_id:
            raise StartupFailure("ADMIN_DOCUMENT_ID is not configured")

        owned = store is None
        app.state.document_store = init_store(settings=settings) if owned else store
        logger.info("Server is running on port %s", settings.port)
        try:
            yield
        finally:
            if owned:
                await app.state.document_store.close()

    app = FastAPI(
        title="Relumen Admin API",
        description=(
            "Backend for the Relumen mobile app.\n\n"
            "- `GET /admin` serves the administrative record from Firestore.\n"
            "- The service is read-only and keeps no record data between requests.\n"
            "- Logging and metrics avoid record contents by using route templates and "
            "metadata only."
        ),
        lifespan=lifespan,
        docs_url="/swagger",
        redoc_url=None,
        openapi_tags=[
            {
                "name": "health",
                "description": (
                    "Basic uptime and readiness checks for load balancers and monitoring."
                ),
            },
            {
                "name": "admin",
                "description": "Read the administrative record.",
            },
            {
                "name": "monitoring",
                "description": "Prometheus-compatible metrics endpoint.",
            },
        ],
    )

    app.add_middleware(PrometheusMetricsMiddleware)
    app.add_middleware(HttpLoggingMiddleware)

    register_exception_handlers(app)

    @app.get(
        "/health",
        response_model=HealthOut,
        tags=["health"],
        summary="Health check",
        description=(
            "Lightweight endpoint to verify the API process is running.\n\n"
            "This endpoint intentionally does not check the document store so it can be used "
            "safely for basic uptime checks."
        ),
    )
    async def health() -> HealthOut:
        return HealthOut(status="ok")

    app.include_router(metrics_router)
    app.include_router(admin_router)
    return app


app = create_app()
