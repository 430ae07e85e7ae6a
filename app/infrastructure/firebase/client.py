"""Firestore client lifecycle (REST-based, no firebase-admin).

Initialized in the app lifespan from FIREBASE_SERVICE_ACCOUNT_KEY (JSON
string) or FIREBASE_SERVICE_ACCOUNT_PATH (file path). The lifespan stores
the returned client on app.state; repositories receive it explicitly.
"""

import json
import logging
from pathlib import Path

from app.core.config import Settings, get_settings
from app.infrastructure.firebase._rest_client import (
    FirestoreRESTClient,
    _get_credentials,
)

logger = logging.getLogger(__name__)

_firestore_client: FirestoreRESTClient | None = None


def _load_key_dict(settings: Settings) -> dict | None:
    """Return service account dict from env key or file path."""
    key = settings.firebase_service_account_key
    key_json = key.get_secret_value() if key else None
    if key_json:
        try:
            return json.loads(key_json)
        except json.JSONDecodeError as e:
            raise ValueError("FIREBASE_SERVICE_ACCOUNT_KEY is not valid JSON") from e
    path = settings.firebase_service_account_path
    if path:
        resolved = Path(path).expanduser().resolve()
        if not resolved.is_file():
            logger.warning(
                "FIREBASE_SERVICE_ACCOUNT_PATH set but file not found: %s (resolved: %s)",
                path,
                resolved,
            )
            return None
        with open(resolved, encoding="utf-8") as f:
            return json.load(f)
    return None


def init_firebase(settings: Settings | None = None) -> FirestoreRESTClient | None:
    """Initialize the Firestore client if credentials are configured.

    Idempotent. On missing credentials returns None (the app still starts;
    flow endpoints answer DOCUMENT_STORE_NOT_CONFIGURED). On malformed
    credentials logs the exception and returns None.
    """
    global _firestore_client
    if _firestore_client is not None:
        return _firestore_client
    settings = settings or get_settings()
    try:
        key_dict = _load_key_dict(settings)
        if not key_dict:
            logger.info("Firestore credentials not configured; document store disabled")
            return None
        project_id = key_dict.get("project_id")
        if not project_id:
            logger.error("Firebase service account JSON missing 'project_id'")
            return None
        _firestore_client = FirestoreRESTClient(project_id, _get_credentials(key_dict))
        logger.info("Firestore client initialized for project %s", project_id)
        return _firestore_client
    except Exception:
        logger.exception("Firebase initialization failed")
        return None


async def close_firebase() -> None:
    """Close the Firestore client's HTTP connection pool. Call from app shutdown."""
    global _firestore_client
    if _firestore_client is not None:
        await _firestore_client.aclose()
        _firestore_client = None
        logger.info("Firestore HTTP client closed")
