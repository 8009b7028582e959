from __future__ import annotations

import asyncio
from typing import Any

import pytest

ADMIN_ID = "admin-test-id"


class FakeSnapshot:
    def __init__(self, *, doc_id: str, data: dict[str, Any] | None):
        self.id = doc_id
        self._data = data
        self.exists = data is not None

    def to_dict(self) -> dict[str, Any] | None:
        return None if self._data is None else dict(self._data)


class FakeDocumentRef:
    def __init__(self, *, db: FakeFirestore, collection: str, doc_id: str):
        self._db = db
        self._collection = collection
        self._doc_id = doc_id

    async def get(self, retry: Any = None, timeout: float | None = None) -> FakeSnapshot:
        self._db.calls.append({"collection": self._collection, "id": self._doc_id, "retry": retry})
        self._db.in_flight += 1
        self._db.max_in_flight = max(self._db.max_in_flight, self._db.in_flight)
        try:
            if self._db.delay_seconds:
                await asyncio.sleep(self._db.delay_seconds)
        finally:
            self._db.in_flight -= 1
        if self._db.error is not None:
            raise self._db.error
        data = self._db.docs.get((self._collection, self._doc_id))
        return FakeSnapshot(doc_id=self._doc_id, data=data)


class FakeCollection:
    def __init__(self, *, db: FakeFirestore, name: str):
        self._db = db
        self._name = name

    def document(self, doc_id: str) -> FakeDocumentRef:
        # Same check the SDK applies when building a document path.
        if "/" in doc_id:
            raise ValueError("A document must have an even number of path elements")
        return FakeDocumentRef(db=self._db, collection=self._name, doc_id=doc_id)


class FakeFirestore:
    """In-memory stand-in for `google.cloud.firestore.AsyncClient` (lookups only)."""

    def __init__(
        self,
        *,
        docs: dict[tuple[str, str], dict[str, Any]] | None = None,
        error: BaseException | None = None,
        delay_seconds: float = 0.0,
    ):
        self.docs = docs or {}
        self.error = error
        self.delay_seconds = delay_seconds
        self.calls: list[dict[str, Any]] = []
        self.closed = False
        self.in_flight = 0
        self.max_in_flight = 0

    def collection(self, name: str) -> FakeCollection:
        return FakeCollection(db=self, name=name)

    def close(self) -> None:
        self.closed = True


@pytest.fixture(autouse=True)
def _set_test_env(monkeypatch: pytest.MonkeyPatch):
    monkeypatch.setenv("ADMIN_DOCUMENT_ID", ADMIN_ID)
    monkeypatch.setenv("ADMIN_COLLECTION", "admin")
    monkeypatch.delenv("GEMINI_API_KEY", raising=False)
    monkeypatch.delenv("GOOGLE_API_KEY", raising=False)
    monkeypatch.delenv("PORT", raising=False)
    from app.core.settings import Settings, get_settings

    # Ignore any developer .env so only the variables set here are visible.
    monkeypatch.setitem(Settings.model_config, "env_file", None)
    # Settings are cached via @lru_cache; clear so each test sees its own environment.
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def fake_firestore() -> FakeFirestore:
    return FakeFirestore(docs={("admin", ADMIN_ID): {"name": "Root Admin", "level": 3}})


@pytest.fixture
def make_client():
    """Factory: build a TestClient around a DocumentStoreClient backed by a FakeFirestore."""

    from fastapi.testclient import TestClient

    from app.core.store.firestore_client import DocumentStoreClient
    from app.main import create_app

    opened: list[TestClient] = []

    def _make(db: FakeFirestore, *, timeout_seconds: float = 5.0) -> TestClient:
        store = DocumentStoreClient(client=db, timeout_seconds=timeout_seconds)
        c = TestClient(create_app(store=store), raise_server_exceptions=False)
        c.__enter__()
        opened.append(c)
        return c

    yield _make

    for c in opened:
        c.__exit__(None, None, None)


@pytest.fixture
def client(make_client, fake_firestore: FakeFirestore):
    return make_client(fake_firestore)


@pytest.fixture
def firestore_factory() -> type[FakeFirestore]:
    return FakeFirestore
