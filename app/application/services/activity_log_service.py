"""Batched admin activity logging.

Activities are queued in memory and written to the activity log store in
batches, either by the periodic flush task started in the app lifespan or by
an explicit flush (e.g. on shutdown). Logging never raises into the caller;
entries that cannot be written after retries are dropped with a warning.
"""

from __future__ import annotations

import asyncio
from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from datetime import datetime
from typing import TYPE_CHECKING, Any

from app.application.dtos.activity_log import ActivityLogEntry, AdminUser
from app.shared.telemetry.logging import get_logger
from app.shared.utils.datetime import utc_now

if TYPE_CHECKING:
    from app.application.interfaces.repositories import IActivityLogRepository

logger = get_logger(__name__)


@dataclass(frozen=True)
class _QueuedActivity:
    admin: AdminUser
    activity: str
    time: datetime
    metadata: dict[str, Any] | None


def _is_permission_error(exc: Exception) -> bool:
    if isinstance(exc, PermissionError):
        return True
    text = str(exc)
    return "PERMISSION_DENIED" in text or "permission" in text.lower()


class ActivityLogService:
    """Queues admin activities and writes them in store-sized batches with retry."""

    def __init__(
        self,
        repo: IActivityLogRepository,
        *,
        max_queue_size: int = 1000,
        max_batch_size: int = 500,
        retry_attempts: int = 2,
        retry_delay_seconds: float = 1.0,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
    ) -> None:
        self._repo = repo
        self._max_queue_size = max_queue_size
        self._max_batch_size = max_batch_size
        self._retry_attempts = retry_attempts
        self._retry_delay_seconds = retry_delay_seconds
        self._sleep = sleep
        self._queue: list[_QueuedActivity] = []
        self._flush_lock = asyncio.Lock()

    @property
    def queue_length(self) -> int:
        return len(self._queue)

    async def log_activity(
        self,
        admin: AdminUser | None,
        activity: str,
        metadata: dict[str, Any] | None = None,
    ) -> None:
        """Queue an activity. Skipped when no admin identity is known."""
        if admin is None or not admin.email:
            return
        if len(self._queue) >= self._max_queue_size:
            # A flush already in progress is not waited on; the queue is trimmed instead.
            if not self._flush_lock.locked():
                await self.flush()
            if len(self._queue) >= self._max_queue_size:
                keep = self._max_queue_size // 2
                logger.warning(
                    "Activity log queue full; dropping %s oldest entries",
                    len(self._queue) - keep,
                )
                self._queue = self._queue[-keep:]
        self._queue.append(_QueuedActivity(admin, activity, utc_now(), metadata))

    async def flush(self) -> int:
        """Write all queued activities. Returns the number of entries written."""
        if not self._queue:
            return 0
        async with self._flush_lock:
            pending, self._queue = self._queue, []
            written = 0
            for start in range(0, len(pending), self._max_batch_size):
                chunk = pending[start:start + self._max_batch_size]
                entries = [
                    ActivityLogEntry(
                        time=item.time,
                        display_name=item.admin.display_name,
                        email=item.admin.email,
                        activity=item.activity,
                        metadata=item.metadata,
                    )
                    for item in chunk
                ]
                if await self._write_with_retry(entries):
                    written += len(entries)
            if written:
                logger.info("Wrote %s activity log entr%s", written, "y" if written == 1 else "ies")
            return written

    async def _write_with_retry(self, entries: list[ActivityLogEntry]) -> bool:
        for attempt in range(1, self._retry_attempts + 1):
            try:
                await self._repo.write_entries(entries)
                return True
            except Exception as exc:
                if _is_permission_error(exc):
                    logger.warning("Activity log write denied; discarding %s entries", len(entries))
                    return False
                if attempt < self._retry_attempts:
                    await self._sleep(self._retry_delay_seconds * 2 ** (attempt - 1))
                    continue
                logger.warning(
                    "Activity log write failed after %s attempts; discarding %s entries: %s",
                    attempt,
                    len(entries),
                    exc,
                )
        return False

    async def run_periodic_flush(self, interval_seconds: float) -> None:
        """Flush forever at a fixed interval. Cancel the task to stop."""
        while True:
            await asyncio.sleep(interval_seconds)
            await self.flush()
