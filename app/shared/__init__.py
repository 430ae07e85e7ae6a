"""Shared utilities: telemetry and cross-cutting helpers.

Used by domain, application, and infrastructure. No business logic.
"""

from app.shared.utils import (
    cloned_flow_id,
    ensure_utc,
    generate_cuid,
    new_flow_id,
    to_epoch_ms,
    utc_now,
)

__all__ = [
    "cloned_flow_id",
    "ensure_utc",
    "generate_cuid",
    "new_flow_id",
    "to_epoch_ms",
    "utc_now",
]
