"""Validation pass over all flows: drift detection and status persistence."""

from __future__ import annotations

from collections.abc import Awaitable, Callable, Iterable
from datetime import datetime
from typing import Any

from app.application.dtos.flow import FlowValidationReport, FlowValidationUpdate
from app.application.interfaces.repositories import IFlowRepository
from app.application.services.flow_validator import validate_flow
from app.application.services.hash_service import FlowHashService
from app.domain.entities.flow import Flow
from app.domain.enums import ValidationStatus
from app.shared.telemetry.logging import get_logger
from app.shared.telemetry.tracing import add_span_attributes, traced
from app.shared.utils.datetime import utc_now

logger = get_logger(__name__)


class ValidateAllFlowsUseCase:
    """Validates and fingerprints every flow, then writes changed statuses in one batch.

    Run on initial load of the flow list and again after any change to the
    collection. Only this use case writes validationStatus, validationErrors,
    lastValidated and flowHash.
    """

    def __init__(
        self,
        flow_repo: IFlowRepository,
        hash_service: FlowHashService,
        *,
        screen_ids: Iterable[str] | None = None,
        clock: Callable[[], datetime] = utc_now,
    ) -> None:
        self._flow_repo = flow_repo
        self._hash_service = hash_service
        self._screen_ids = None if screen_ids is None else frozenset(screen_ids)
        self._clock = clock

    @traced("flows.validate_all")
    async def execute(self, flows: list[Flow] | None = None) -> FlowValidationReport:
        """Validate every flow in the snapshot.

        Args:
            flows: Snapshot to validate; loaded from the repository when None.

        Returns:
            Report with drift warnings and the ids whose status was rewritten.

        Raises:
            Any error from the batch commit (nothing is partially applied).
        """
        if flows is None:
            flows = await self._flow_repo.list_flows()

        warnings: list[str] = []
        updates: list[FlowValidationUpdate] = []
        now = self._clock()

        for flow in flows:
            current_hash = self._hash_service.fingerprint(flow)
            legacy_hash = bool(flow.flow_hash) and not self._hash_service.is_current_format(
                flow.flow_hash
            )
            if flow.flow_hash and flow.flow_hash != current_hash:
                warnings.append(f'Flow "{flow.name}" has been unexpectedly modified!')

            result = validate_flow(flow, self._screen_ids)
            stored_valid = flow.validation_status == ValidationStatus.VALID
            stored_errors = flow.validation_errors or []
            if (
                legacy_hash
                or result.is_valid != stored_valid
                or result.errors != stored_errors
            ):
                updates.append(
                    FlowValidationUpdate(
                        flow_id=flow.id,
                        validation_status=(
                            ValidationStatus.VALID if result.is_valid else ValidationStatus.ERROR
                        ),
                        validation_errors=list(result.errors),
                        flow_hash=current_hash,
                        validated_at=now,
                    )
                )

        if updates:
            await self._flow_repo.apply_validation_updates(updates)

        add_span_attributes(
            flows_checked=len(flows),
            updates_staged=len(updates),
            drift_warnings=len(warnings),
        )
        logger.info(
            "Validated %s flow(s): %s status update(s), %s drift warning(s)",
            len(flows),
            len(updates),
            len(warnings),
        )
        return FlowValidationReport(
            flows_checked=len(flows),
            warnings=warnings,
            updated_flow_ids=[u.flow_id for u in updates],
        )


async def rerun_validation(on_change: Callable[[], Awaitable[Any]] | None) -> None:
    """Run the post-change validation pass; its failure never undoes the change.

    The next pass (list load or manual run) reconciles the stored statuses.
    """
    if on_change is None:
        return
    try:
        await on_change()
    except Exception:
        logger.exception("Validation pass after flow change failed")
