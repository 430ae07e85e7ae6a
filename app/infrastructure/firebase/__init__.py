"""Firestore integration (REST client, lifecycle, repositories)."""

from app.infrastructure.firebase.client import (
    close_firebase,
    init_firebase,
)

__all__ = [
    "close_firebase",
    "init_firebase",
]
