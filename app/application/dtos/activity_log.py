"""DTOs for admin activity logging."""

from dataclasses import dataclass
from datetime import datetime
from typing import Any


@dataclass(frozen=True)
class AdminUser:
    """Identity recorded with each activity log entry."""

    display_name: str
    email: str


@dataclass(frozen=True)
class ActivityLogEntry:
    """One admin_activity_logs document."""

    time: datetime
    display_name: str
    email: str
    activity: str
    metadata: dict[str, Any] | None = None
