from __future__ import annotations

from fastapi import Request

from app.core.store.firestore_client import DocumentStoreClient


def get_document_store(request: Request) -> DocumentStoreClient:
    """Dependency provider for the application-owned document store handle."""

    store: DocumentStoreClient | None = getattr(request.app.state, "document_store", None)
    if store is None:
        raise RuntimeError("Document store is not initialized. Did the app lifespan run?")
    return store
