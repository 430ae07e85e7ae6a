"""Create flow use case: builds a linear listing wizard from an ordered screen list."""

from __future__ import annotations

from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from datetime import datetime
from typing import Any

from app.application.dtos.activity_log import AdminUser
from app.application.interfaces.repositories import IFlowRepository
from app.application.services.activity_log_service import ActivityLogService
from app.application.services.flow_validator import validate_flow
from app.application.services.hash_service import FlowHashService
from app.application.use_cases.flows.validate_all_flows import rerun_validation
from app.core.constants import DEFAULT_CREATED_BY, INITIAL_FLOW_VERSION, get_screen
from app.domain.entities.flow import TERMINAL_STEP_ID, Flow, FlowStep, NextStep
from app.domain.enums import ValidationStatus
from app.domain.exceptions import FlowValidationFailedException, ValidationException
from app.shared.utils.datetime import to_epoch_ms, utc_now
from app.shared.utils.generators import new_flow_id


@dataclass(frozen=True)
class CreateFlowCommand:
    """Input for creating a flow from the admin form."""

    name: str
    category: str
    screens: list[str]
    description: str = ""
    subcategory: str | None = None
    subsubcategory: str | None = None


def build_linear_steps(
    screens: list[str], conditions: dict[str, list[str]]
) -> dict[str, FlowStep]:
    """Chain screens in order; the first transition carries the category conditions.

    Raises:
        ValidationException: If a screen id is not in the registry.
    """
    steps: dict[str, FlowStep] = {}
    for index, screen_id in enumerate(screens):
        screen = get_screen(screen_id)
        if screen is None:
            raise ValidationException(f"Unknown screen: {screen_id}", field="screens")
        target = screens[index + 1] if index + 1 < len(screens) else TERMINAL_STEP_ID
        next_step = NextStep(step_id=target, conditions=conditions if index == 0 else None)
        steps[screen_id] = FlowStep(
            id=screen_id,
            step_type=screen_id,
            title=screen.label,
            required=True,
            next_steps=[next_step],
        )
    return steps


class CreateFlowUseCase:
    """Creates an inactive flow after input checks and structural validation."""

    def __init__(
        self,
        flow_repo: IFlowRepository,
        hash_service: FlowHashService,
        *,
        activity_log: ActivityLogService | None = None,
        on_change: Callable[[], Awaitable[Any]] | None = None,
        clock: Callable[[], datetime] = utc_now,
    ) -> None:
        self._flow_repo = flow_repo
        self._hash_service = hash_service
        self._activity_log = activity_log
        self._on_change = on_change
        self._clock = clock

    async def execute(
        self, command: CreateFlowCommand, admin: AdminUser | None = None
    ) -> Flow:
        """Create a flow.

        Args:
            command: Form input (name, category path, ordered screen ids).
            admin: Acting admin; recorded as createdBy and in the activity log.

        Returns:
            The saved flow.

        Raises:
            ValidationException: Blank name or category, no screens, duplicate
                name, or unknown screen.
            FlowValidationFailedException: Built flow fails structural validation.
        """
        name = command.name.strip() if command.name else ""
        if not name:
            raise ValidationException("Flow name is required", field="name")
        if not command.category:
            raise ValidationException("Category is required", field="category")
        if not command.screens:
            raise ValidationException("At least one screen must be added", field="screens")

        existing = await self._flow_repo.list_flows()
        if any(f.name.lower() == name.lower() for f in existing):
            raise ValidationException("A flow with this name already exists", field="name")

        conditions: dict[str, list[str]] = {"category": [command.category]}
        if command.subcategory:
            conditions["subcategory"] = [command.subcategory]
        if command.subsubcategory:
            conditions["subsubcategory"] = [command.subsubcategory]

        steps = build_linear_steps(command.screens, conditions)
        now = self._clock()
        flow = Flow(
            id=new_flow_id(command.name, to_epoch_ms(now)),
            name=name,
            description=command.description.strip()
            or f"Auto-generated flow for {command.category}",
            version=INITIAL_FLOW_VERSION,
            is_active=False,
            is_default=False,
            start_step_id=command.screens[0],
            steps=steps,
            created_at=now,
            updated_at=now,
            created_by=admin.email if admin and admin.email else DEFAULT_CREATED_BY,
            usage_count=0,
            completion_rate=0,
            last_validated=now,
            validation_status=ValidationStatus.VALID,
            validation_errors=[],
        )
        flow.flow_hash = self._hash_service.fingerprint(flow)

        result = validate_flow(flow)
        if not result.is_valid:
            raise FlowValidationFailedException("Flow validation failed", flow.id, result.errors)

        await self._flow_repo.save_flow(flow)
        if self._activity_log is not None:
            await self._activity_log.log_activity(
                admin, f'Created flow "{flow.name}"', {"flowId": flow.id}
            )
        await rerun_validation(self._on_change)
        return flow
