"""Flow lifecycle use cases: clone, activate/deactivate, delete."""

from __future__ import annotations

import copy
import re
from collections.abc import Awaitable, Callable
from dataclasses import replace
from datetime import datetime
from typing import Any

from app.application.dtos.activity_log import AdminUser
from app.application.interfaces.repositories import IFlowRepository
from app.application.services.activity_log_service import ActivityLogService
from app.application.services.flow_validator import validate_flow
from app.application.services.hash_service import FlowHashService
from app.application.use_cases.flows.validate_all_flows import rerun_validation
from app.domain.entities.flow import Flow
from app.domain.enums import ValidationStatus
from app.domain.exceptions import (
    FlowDeletionBlockedException,
    FlowValidationFailedException,
    ResourceNotFoundException,
)
from app.shared.telemetry.logging import get_logger
from app.shared.utils.datetime import to_epoch_ms, utc_now
from app.shared.utils.generators import cloned_flow_id

logger = get_logger(__name__)

_COPY_SUFFIX = re.compile(r" \(Copy( \d+)?\)$")


def clone_name(source_name: str, existing_names: list[str]) -> tuple[str, str]:
    """Return (base_name, new_name) for a copy of source_name.

    "Shoes" -> "Shoes (Copy)"; with copies already present the next one is
    numbered by the count of existing names starting with "Shoes (Copy", plus one.
    """
    base = _COPY_SUFFIX.sub("", source_name)
    copies = sum(1 for n in existing_names if n.startswith(f"{base} (Copy"))
    if copies:
        return base, f"{base} (Copy {copies + 1})"
    return base, f"{base} (Copy)"


class _FlowMutation:
    """Shared wiring for use cases that change the flow collection."""

    def __init__(
        self,
        flow_repo: IFlowRepository,
        *,
        activity_log: ActivityLogService | None = None,
        on_change: Callable[[], Awaitable[Any]] | None = None,
        clock: Callable[[], datetime] = utc_now,
    ) -> None:
        self._flow_repo = flow_repo
        self._activity_log = activity_log
        self._on_change = on_change
        self._clock = clock

    async def _get_or_raise(self, flow_id: str) -> Flow:
        flow = await self._flow_repo.get_by_id(flow_id)
        if flow is None:
            raise ResourceNotFoundException("flow", flow_id)
        return flow

    async def _changed(
        self, admin: AdminUser | None, activity: str, metadata: dict[str, Any]
    ) -> None:
        if self._activity_log is not None:
            await self._activity_log.log_activity(admin, activity, metadata)
        await rerun_validation(self._on_change)


class CloneFlowUseCase(_FlowMutation):
    """Copies a flow under a unique "(Copy N)" name as an inactive, unused flow."""

    def __init__(
        self,
        flow_repo: IFlowRepository,
        hash_service: FlowHashService,
        **kwargs: Any,
    ) -> None:
        super().__init__(flow_repo, **kwargs)
        self._hash_service = hash_service

    async def execute(
        self, flow_id: str, *, allow_invalid: bool = False, admin: AdminUser | None = None
    ) -> Flow:
        """Clone flow_id.

        Raises:
            ResourceNotFoundException: Source flow does not exist.
            FlowValidationFailedException: Source is invalid and allow_invalid is False.
        """
        source = await self._get_or_raise(flow_id)
        result = validate_flow(source)
        if not result.is_valid and not allow_invalid:
            raise FlowValidationFailedException(
                "Original flow has validation errors", source.id, result.errors
            )

        existing = await self._flow_repo.list_flows()
        base, name = clone_name(source.name, [f.name for f in existing])
        now = self._clock()
        clone = replace(
            source,
            id=cloned_flow_id(base, to_epoch_ms(now)),
            name=name,
            steps=copy.deepcopy(source.steps),
            is_active=False,
            is_default=False,
            usage_count=0,
            completion_rate=0,
            created_at=now,
            updated_at=now,
            last_validated=now,
            validation_status=ValidationStatus.VALID if result.is_valid else ValidationStatus.ERROR,
            validation_errors=list(result.errors),
        )
        clone.flow_hash = self._hash_service.fingerprint(clone)
        await self._flow_repo.save_flow(clone)
        logger.info("Cloned flow %s as %s", source.id, clone.id)
        await self._changed(
            admin,
            f'Cloned flow "{source.name}" as "{clone.name}"',
            {"sourceFlowId": source.id, "flowId": clone.id},
        )
        return clone


class ToggleFlowUseCase(_FlowMutation):
    """Flips a flow's active flag; activation requires a structurally valid flow."""

    async def execute(self, flow_id: str, *, admin: AdminUser | None = None) -> Flow:
        """Activate an inactive flow or deactivate an active one.

        Raises:
            ResourceNotFoundException: Flow does not exist.
            FlowValidationFailedException: Activating a flow with validation errors.
        """
        flow = await self._get_or_raise(flow_id)
        activate = not flow.is_active
        if activate:
            result = validate_flow(flow)
            if not result.is_valid:
                raise FlowValidationFailedException(
                    "Cannot activate flow due to validation errors", flow.id, result.errors
                )
        now = self._clock()
        await self._flow_repo.set_active(flow.id, activate, now)
        flow = replace(flow, is_active=activate, updated_at=now, last_validated=now)
        await self._changed(
            admin,
            f'{"Activated" if activate else "Deactivated"} flow "{flow.name}"',
            {"flowId": flow.id},
        )
        return flow


class DeleteFlowUseCase(_FlowMutation):
    """Deletes an inactive flow; heavily used flows need an explicit force."""

    def __init__(
        self,
        flow_repo: IFlowRepository,
        *,
        high_usage_threshold: int = 100,
        **kwargs: Any,
    ) -> None:
        super().__init__(flow_repo, **kwargs)
        self._high_usage_threshold = high_usage_threshold

    async def execute(
        self, flow_id: str, *, force: bool = False, admin: AdminUser | None = None
    ) -> None:
        """Delete flow_id.

        Raises:
            ResourceNotFoundException: Flow does not exist.
            FlowDeletionBlockedException: Flow is active, or usage exceeds the
                threshold and force is False.
        """
        flow = await self._get_or_raise(flow_id)
        if flow.is_active:
            raise FlowDeletionBlockedException(
                flow.id,
                "active",
                "Cannot delete an active flow. Please deactivate it first.",
            )
        usage = flow.usage_count or 0
        if usage > self._high_usage_threshold and not force:
            raise FlowDeletionBlockedException(
                flow.id,
                "high_usage",
                f"This flow has high usage ({usage} uses). Pass force=true to delete it.",
            )
        await self._flow_repo.delete_flow(flow.id)
        logger.info("Deleted flow %s (usage %s)", flow.id, usage)
        await self._changed(admin, f'Deleted flow "{flow.name}"', {"flowId": flow.id})
