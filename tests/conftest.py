"""Pytest configuration and fixtures for listing-flow-admin.

Uses app.main:app for HTTP tests with Firestore replaced by in-memory
repositories through FastAPI dependency overrides. No network access is
needed; the lifespan is not run by ASGITransport, so no Firestore client
is ever created.
"""

import copy
from datetime import UTC, datetime

import pytest
from httpx import ASGITransport, AsyncClient

from app.api.v1.dependencies import get_activity_log_service, get_flow_repo
from app.application.dtos.activity_log import ActivityLogEntry
from app.application.dtos.flow import FlowValidationUpdate
from app.application.services.activity_log_service import ActivityLogService
from app.domain.entities.flow import TERMINAL_STEP_ID, Flow, FlowStep, NextStep
from app.main import app

FIXED_NOW = datetime(2025, 3, 1, 9, 30, tzinfo=UTC)


class InMemoryFlowRepository:
    """IFlowRepository over a dict. Returns copies so callers cannot mutate storage."""

    def __init__(self, flows: list[Flow] | None = None) -> None:
        self.flows: dict[str, Flow] = {f.id: copy.deepcopy(f) for f in flows or []}
        self.commits: list[list[FlowValidationUpdate]] = []
        self.fail_commit: Exception | None = None

    async def list_flows(self) -> list[Flow]:
        return [copy.deepcopy(f) for f in self.flows.values()]

    async def get_by_id(self, flow_id: str) -> Flow | None:
        flow = self.flows.get(flow_id)
        return copy.deepcopy(flow) if flow else None

    async def save_flow(self, flow: Flow) -> None:
        self.flows[flow.id] = copy.deepcopy(flow)

    async def set_active(self, flow_id: str, is_active: bool, at: datetime) -> None:
        flow = self.flows[flow_id]
        flow.is_active = is_active
        flow.updated_at = at
        flow.last_validated = at

    async def delete_flow(self, flow_id: str) -> None:
        self.flows.pop(flow_id, None)

    async def apply_validation_updates(self, updates: list[FlowValidationUpdate]) -> None:
        if self.fail_commit is not None:
            raise self.fail_commit
        self.commits.append(list(updates))
        for u in updates:
            flow = self.flows[u.flow_id]
            flow.validation_status = u.validation_status
            flow.validation_errors = list(u.validation_errors)
            flow.flow_hash = u.flow_hash
            flow.last_validated = u.validated_at
            flow.updated_at = u.validated_at


class InMemoryActivityLogRepository:
    """IActivityLogRepository recording each batch; can be told to fail."""

    def __init__(self) -> None:
        self.batches: list[list[ActivityLogEntry]] = []
        self.failures: list[Exception] = []
        self.calls = 0

    @property
    def entries(self) -> list[ActivityLogEntry]:
        return [e for batch in self.batches for e in batch]

    async def write_entries(self, entries: list[ActivityLogEntry]) -> None:
        self.calls += 1
        if self.failures:
            raise self.failures.pop(0)
        self.batches.append(list(entries))


def build_flow(
    flow_id: str = "women_shoes",
    name: str = "Women Shoes",
    chain: tuple[str, ...] = ("list_brand", "list_footwear", "list_color"),
    **overrides,
) -> Flow:
    """Linear flow chaining registry screens in order and ending at preview."""
    steps: dict[str, FlowStep] = {}
    for index, screen_id in enumerate(chain):
        target = chain[index + 1] if index + 1 < len(chain) else TERMINAL_STEP_ID
        steps[screen_id] = FlowStep(
            id=screen_id,
            step_type=screen_id,
            title=screen_id.replace("_", " ").title(),
            next_steps=[NextStep(step_id=target)],
        )
    fields = {
        "start_step_id": chain[0] if chain else "",
        "steps": steps,
        "created_at": FIXED_NOW,
        "updated_at": FIXED_NOW,
        "created_by": "ops@example.com",
        "usage_count": 0,
        "completion_rate": 0.0,
    }
    fields.update(overrides)
    return Flow(id=flow_id, name=name, **fields)


@pytest.fixture
def make_flow():
    """Factory for linear flows (see build_flow)."""
    return build_flow


@pytest.fixture
def flow_repo() -> InMemoryFlowRepository:
    return InMemoryFlowRepository()


@pytest.fixture
def activity_repo() -> InMemoryActivityLogRepository:
    return InMemoryActivityLogRepository()


@pytest.fixture
def activity_log(activity_repo: InMemoryActivityLogRepository) -> ActivityLogService:
    async def no_sleep(_: float) -> None:
        return None

    return ActivityLogService(activity_repo, sleep=no_sleep)


@pytest.fixture
async def client(
    flow_repo: InMemoryFlowRepository, activity_log: ActivityLogService
) -> AsyncClient:
    """Async HTTP client against the FastAPI app (ASGI) with in-memory storage."""
    app.dependency_overrides[get_flow_repo] = lambda: flow_repo
    app.dependency_overrides[get_activity_log_service] = lambda: activity_log
    transport = ASGITransport(app=app)
    try:
        async with AsyncClient(transport=transport, base_url="http://test") as ac:
            yield ac
    finally:
        app.dependency_overrides.clear()


@pytest.fixture
async def unconfigured_client() -> AsyncClient:
    """Client with no overrides: the document store is not configured."""
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac
