"""Repository interfaces (ports) for the application layer.

Protocols define contracts that infrastructure implementations must fulfill (DIP).
All types reference application DTOs or domain entities only; no infrastructure imports.
"""

from __future__ import annotations

from datetime import datetime
from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from app.application.dtos.activity_log import ActivityLogEntry
    from app.application.dtos.flow import FlowValidationUpdate
    from app.domain.entities.flow import Flow


# Flow repository interface
class IFlowRepository(Protocol):
    """Protocol for listing flow repository (DIP)."""

    async def list_flows(self) -> list[Flow]:
        """Return every flow in the collection (snapshot, store order)."""

    async def get_by_id(self, flow_id: str) -> Flow | None:
        """Return flow by id, or None."""

    async def save_flow(self, flow: Flow) -> None:
        """Create or overwrite the flow document."""

    async def set_active(self, flow_id: str, is_active: bool, at: datetime) -> None:
        """Set isActive and refresh updatedAt/lastValidated."""

    async def delete_flow(self, flow_id: str) -> None:
        """Hard-delete the flow document."""

    async def apply_validation_updates(
        self, updates: list[FlowValidationUpdate]
    ) -> None:
        """Write all staged validation status updates in one atomic batch."""


# Activity log repository interface
class IActivityLogRepository(Protocol):
    """Protocol for admin activity log storage."""

    async def write_entries(self, entries: list[ActivityLogEntry]) -> None:
        """Write entries in one atomic batch (caller keeps batches within store limits)."""
