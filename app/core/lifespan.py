"""Application lifespan: startup and shutdown.

Single place for all startup/shutdown logic. Used by main.py; no business
logic here, only wiring of infrastructure (logging, Firestore client,
activity log queue and its periodic flush task).
"""

import asyncio
import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator

from fastapi import FastAPI

from app.application.services.activity_log_service import ActivityLogService
from app.core.config import get_settings
from app.infrastructure.firebase.client import close_firebase, init_firebase
from app.infrastructure.firebase.repositories import FirestoreActivityLogRepository
from app.shared.telemetry.logging import setup_logging

logger = logging.getLogger(__name__)


@asynccontextmanager
async def create_lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Run startup then yield; on exit run shutdown.

    Startup order: logging, Firestore client (if credentials are set),
    activity log service and its periodic flush. Shutdown order: stop the
    flush task, final flush, Firestore HTTP client close.
    """
    settings = get_settings()

    # ---- Startup ----
    setup_logging()
    client = init_firebase(settings)
    app.state.firestore = client

    app.state.activity_log = None
    app.state.activity_log_flush_task = None
    if client is not None and settings.activity_log_enabled:
        activity_log = ActivityLogService(
            FirestoreActivityLogRepository(client, settings.activity_log_collection),
            max_queue_size=settings.activity_log_max_queue_size,
            max_batch_size=settings.activity_log_max_batch_size,
            retry_attempts=settings.activity_log_retry_attempts,
            retry_delay_seconds=settings.activity_log_retry_delay_seconds,
        )
        app.state.activity_log = activity_log
        app.state.activity_log_flush_task = asyncio.create_task(
            activity_log.run_periodic_flush(settings.activity_log_flush_interval_seconds)
        )
        logger.info("Activity log enabled (collection %s)", settings.activity_log_collection)

    yield

    # ---- Shutdown ----
    flush_task = getattr(app.state, "activity_log_flush_task", None)
    if flush_task is not None:
        flush_task.cancel()
        try:
            await flush_task
        except asyncio.CancelledError:
            pass
        logger.info("Activity log flush task stopped")

    activity_log = getattr(app.state, "activity_log", None)
    if activity_log is not None:
        await activity_log.flush()

    app.state.firestore = None
    await close_firebase()
