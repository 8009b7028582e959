"""Firestore-backed document store client.

The lookup result is a tagged union: `Found(record)` or `Absent(record_id)`.
Transport, authentication and backend failures never come back as a value; they raise
`StoreError`, so callers cannot confuse "no data" with "call failed".

No logging of record contents here (open-ended fields may hold personal data).
"""

from __future__ import annotations

import asyncio
import base64
import inspect
import logging
import time
from collections.abc import Mapping
from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Any

from google.api_core import exceptions as api_exceptions
from google.auth import exceptions as auth_exceptions
from google.cloud import firestore

from app.core.metrics import record_store_lookup
from app.core.settings import Settings
from app.core.store.credentials import load_credential_bundle
from app.domain.exceptions import StoreError

logger = logging.getLogger("app.store")


def _to_jsonable(value: Any) -> Any:
    """Convert Firestore field values into plain JSON-compatible values."""

    if isinstance(value, Mapping):
        return {str(k): _to_jsonable(v) for k, v in value.items()}
    if isinstance(value, (list, tuple)):
        return [_to_jsonable(v) for v in value]
    if isinstance(value, (datetime, date)):
        return value.isoformat()
    if isinstance(value, firestore.GeoPoint):
        return {"latitude": value.latitude, "longitude": value.longitude}
    if isinstance(value, (firestore.DocumentReference, firestore.AsyncDocumentReference)):
        return value.path
    if isinstance(value, (bytes, bytearray)):
        return base64.b64encode(bytes(value)).decode("ascii")
    return value


@dataclass(frozen=True)
class AdministrativeRecord:
    id: str
    fields: Mapping[str, Any] = field(default_factory=dict)

    def to_payload(self) -> dict[str, Any]:
        """Return `{id, ...fields}` as JSON-compatible data.

        The identifier wins when the fields also contain an `id` key.
        """

        payload = _to_jsonable(self.fields)
        payload["id"] = self.id
        return payload


@dataclass(frozen=True)
class Found:
    record: AdministrativeRecord


@dataclass(frozen=True)
class Absent:
    record_id: str


LookupResult = Found | Absent


class DocumentStoreClient:
    """Read-only point lookups against Firestore.

    Shared by all concurrent requests; it holds no per-request state.
    """

    def __init__(self, *, client: Any, timeout_seconds: float = 10.0):
        self._client = client
        self._timeout_seconds = timeout_seconds

    async def get_record(self, *, collection: str, record_id: str) -> LookupResult:
        if not collection:
            raise ValueError("collection must be a non-empty string")
        if not record_id:
            raise ValueError("record_id must be a non-empty string")

        started = time.perf_counter()
        try:
            doc_ref = self._client.collection(collection).document(record_id)
        except ValueError as exc:
            # e.g. "a/b": the SDK rejects identifiers that do not form a document path.
            self._observe(collection, "error", started)
            raise StoreError("Invalid document path") from exc

        try:
            # retry=None: failures surface immediately instead of using the SDK's retry policy.
            snapshot = await asyncio.wait_for(
                doc_ref.get(retry=None, timeout=self._timeout_seconds),
                timeout=self._timeout_seconds,
            )
        except TimeoutError as exc:
            self._observe(collection, "error", started)
            raise StoreError("Document store lookup timed out") from exc
        except (api_exceptions.GoogleAPIError, auth_exceptions.GoogleAuthError) as exc:
            self._observe(collection, "error", started)
            raise StoreError("Document store lookup failed") from exc
        except OSError as exc:
            self._observe(collection, "error", started)
            raise StoreError("Document store is unreachable") from exc

        if not snapshot.exists:
            self._observe(collection, "absent", started)
            return Absent(record_id=record_id)

        self._observe(collection, "found", started)
        return Found(record=AdministrativeRecord(id=snapshot.id, fields=snapshot.to_dict() or {}))

    @staticmethod
    def _observe(collection: str, outcome: str, started: float) -> None:
        record_store_lookup(
            collection=collection,
            outcome=outcome,
            duration_seconds=time.perf_counter() - started,
        )

    async def close(self) -> None:
        closer = getattr(self._client, "close", None)
        if closer is None:
            return
        result = closer()
        if inspect.isawaitable(result):
            await result


def init_store(*, settings: Settings) -> DocumentStoreClient:
    """Create the process-wide document store handle.

    Raises `StartupFailure` when the credential bundle is missing or malformed.
    """

    bundle = load_credential_bundle(
        path=settings.firebase_credentials_path,
        project_id=settings.firestore_project_id,
    )
    client = firestore.AsyncClient(project=bundle.project_id, credentials=bundle.credentials)
    logger.info("Firestore client initialized for project %s", bundle.project_id)
    return DocumentStoreClient(
        client=client, timeout_seconds=float(settings.firestore_timeout_seconds)
    )
