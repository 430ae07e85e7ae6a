"""Firestore-backed repository implementations."""

from app.infrastructure.firebase.repositories.activity_log_repo_firestore import (
    FirestoreActivityLogRepository,
)
from app.infrastructure.firebase.repositories.flow_repo_firestore import (
    FirestoreFlowRepository,
    flow_from_document,
    flow_to_document,
)

__all__ = [
    "FirestoreActivityLogRepository",
    "FirestoreFlowRepository",
    "flow_from_document",
    "flow_to_document",
]
