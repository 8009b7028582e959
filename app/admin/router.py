from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, Request, status
from fastapi.responses import JSONResponse

from app.admin.schemas import AdminNotFoundOut, AdminOut
from app.admin.service import get_admin_payload
from app.core.settings import get_settings
from app.core.store.deps import get_document_store
from app.core.store.firestore_client import DocumentStoreClient

router = APIRouter(prefix="/admin", tags=["admin"])
logger = logging.getLogger("app.admin")


@router.get(
    "",
    response_model=AdminOut,
    summary="Get the administrative record",
    responses={
        status.HTTP_404_NOT_FOUND: {"model": AdminNotFoundOut},
        status.HTTP_500_INTERNAL_SERVER_ERROR: {
            "description": "Document store failure (plain-text body).",
            "content": {"text/plain": {}},
        },
    },
)
async def get_admin(
    request: Request,
    store: DocumentStoreClient = Depends(get_document_store),
) -> JSONResponse:
    """
    Read the configured administrative record from the document store.

    Read-only; nothing is cached between requests. Store failures are handled by the
    `StoreError` exception handler (500, plain text).
    """

    settings = get_settings()
    payload = await get_admin_payload(
        store=store,
        collection=settings.admin_collection,
        record_id=str(settings.admin_document_id),
    )

    if payload is None:
        # Expected absence; not an error condition.
        logger.info(
            "Admin record not found",
            extra={
                "request_id": getattr(request.state, "request_id", None),
                "status_code": status.HTTP_404_NOT_FOUND,
            },
        )
        return JSONResponse(
            status_code=status.HTTP_404_NOT_FOUND, content={"error": "Admin not found"}
        )

    return JSONResponse(status_code=status.HTTP_200_OK, content=payload)
