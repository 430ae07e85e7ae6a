"""Shared utilities: datetime, generators."""

from app.shared.utils.datetime import ensure_utc, to_epoch_ms, utc_now
from app.shared.utils.generators import cloned_flow_id, generate_cuid, new_flow_id

__all__ = [
    "cloned_flow_id",
    "ensure_utc",
    "generate_cuid",
    "new_flow_id",
    "to_epoch_ms",
    "utc_now",
]
