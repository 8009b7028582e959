from __future__ import annotations


class StartupFailure(Exception):
    """Raised when the service cannot be initialized (e.g. bad credential bundle).

    Fatal: it propagates out of the application lifespan so no request is ever served.
    """

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class StoreError(Exception):
    """Raised when the document store cannot be reached or queried.

    A missing record is *not* a StoreError; see `app.core.store.firestore_client.Absent`.
    """


class CompletionProviderError(Exception):
    """Base error for generative completion provider failures."""
