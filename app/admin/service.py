from __future__ import annotations

from typing import Any, Protocol

from app.core.store.firestore_client import Found, LookupResult


class RecordStore(Protocol):
    async def get_record(self, *, collection: str, record_id: str) -> LookupResult: ...


async def get_admin_payload(
    *, store: RecordStore, collection: str, record_id: str
) -> dict[str, Any] | None:
    """Return the admin record as `{id, ...fields}`, or None when it does not exist.

    `StoreError` propagates to the caller unchanged.
    """

    result = await store.get_record(collection=collection, record_id=record_id)
    if isinstance(result, Found):
        return result.record.to_payload()
    return None
