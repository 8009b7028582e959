"""Credential bundle loading for the document store.

The bundle is a Google service-account JSON key. It is read once at startup; any problem
with it is fatal (`StartupFailure`) because the service cannot work without a store connection.
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from google.oauth2 import service_account

from app.domain.exceptions import StartupFailure

logger = logging.getLogger("app.store")

FIRESTORE_SCOPES: tuple[str, ...] = (
    "https://www.googleapis.com/auth/cloud-platform",
    "https://www.googleapis.com/auth/datastore",
)


@dataclass(frozen=True)
class CredentialBundle:
    info: dict[str, Any]
    credentials: service_account.Credentials
    project_id: str


def _read_bundle_info(*, path: Path) -> dict[str, Any]:
    try:
        raw = path.read_text(encoding="utf-8")
    except FileNotFoundError as exc:
        raise StartupFailure(f"Credential file not found: {path}") from exc
    except OSError as exc:
        raise StartupFailure(f"Credential file could not be read: {path}") from exc

    try:
        info = json.loads(raw)
    except ValueError as exc:
        raise StartupFailure(f"Credential file is not valid JSON: {path}") from exc

    if not isinstance(info, dict):
        raise StartupFailure(f"Credential file must contain a JSON object: {path}")
    return info


def load_credential_bundle(
    *, path: str | Path, project_id: str | None = None
) -> CredentialBundle:
    """Load and validate a service-account credential bundle.

    `project_id` overrides the project recorded in the key file.
    """

    bundle_path = Path(path)
    info = _read_bundle_info(path=bundle_path)

    try:
        credentials = service_account.Credentials.from_service_account_info(
            info, scopes=list(FIRESTORE_SCOPES)
        )
    except (ValueError, TypeError, KeyError) as exc:
        # Do not include the exception text: it may echo key material.
        raise StartupFailure(f"Credential file is not a valid service-account key: {path}") from exc

    resolved_project = project_id or info.get("project_id")
    if not isinstance(resolved_project, str) or not resolved_project:
        raise StartupFailure("No project id in credential file and none configured")

    logger.info("Loaded document store credentials for project %s", resolved_project)
    return CredentialBundle(info=info, credentials=credentials, project_id=resolved_project)
