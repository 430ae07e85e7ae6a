"""Firestore-backed admin activity log repository (implements IActivityLogRepository)."""

from __future__ import annotations

from typing import Any

from app.application.dtos.activity_log import ActivityLogEntry
from app.infrastructure.firebase._rest_client import FirestoreRESTClient
from app.infrastructure.firebase.collections import COLLECTION_ADMIN_ACTIVITY_LOGS
from app.shared.utils.generators import generate_cuid


def activity_entry_to_document(entry: ActivityLogEntry) -> dict[str, Any]:
    doc: dict[str, Any] = {
        "time": entry.time,
        "displayName": entry.display_name,
        "email": entry.email,
        "activity": entry.activity,
    }
    if entry.metadata:
        doc["metadata"] = entry.metadata
    return doc


class FirestoreActivityLogRepository:
    """Append-only activity log; each entry gets a fresh cuid document id."""

    def __init__(
        self, client: FirestoreRESTClient, collection: str = COLLECTION_ADMIN_ACTIVITY_LOGS
    ) -> None:
        self._client = client
        self._collection = collection

    async def write_entries(self, entries: list[ActivityLogEntry]) -> None:
        await self._client.batch_write([
            {
                "path": f"{self._collection}/{generate_cuid()}",
                "data": activity_entry_to_document(entry),
            }
            for entry in entries
        ])
