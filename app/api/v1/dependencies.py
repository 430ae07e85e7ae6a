"""Presentation-layer dependency injection (composition root).

Provides FastAPI Depends() for repositories, services and flow use cases.
All use cases are built from infrastructure implementations here; routes
depend only on these dependencies, not on infra directly. Tests override
get_flow_repo and get_activity_log_service with in-memory fakes.

Every mutating use case is wired with on_change set to the validation pass,
so the stored validation status is refreshed after each change.
"""

from __future__ import annotations

from typing import Annotated

from fastapi import Depends, Header, Request

from app.application.dtos.activity_log import AdminUser
from app.application.interfaces.repositories import IFlowRepository
from app.application.services.activity_log_service import ActivityLogService
from app.application.services.hash_service import FlowHashService
from app.application.use_cases.flows import (
    CloneFlowUseCase,
    CreateFlowUseCase,
    DeleteFlowUseCase,
    ToggleFlowUseCase,
    ValidateAllFlowsUseCase,
)
from app.core.config import get_settings
from app.domain.exceptions import DocumentStoreNotConfiguredException
from app.infrastructure.firebase.repositories import FirestoreFlowRepository


def get_flow_repo(request: Request) -> IFlowRepository:
    """Flow repository backed by the lifespan's Firestore client; 503 when credentials are missing."""
    client = getattr(request.app.state, "firestore", None)
    if client is None:
        raise DocumentStoreNotConfiguredException()
    return FirestoreFlowRepository(client, get_settings().flows_collection)


def get_hash_service() -> FlowHashService:
    return FlowHashService()


def get_activity_log_service(request: Request) -> ActivityLogService | None:
    """Activity log service created in the lifespan (None when disabled)."""
    return getattr(request.app.state, "activity_log", None)


def get_admin_user(
    x_admin_email: Annotated[str | None, Header()] = None,
    x_admin_name: Annotated[str | None, Header()] = None,
) -> AdminUser | None:
    """Acting admin from X-Admin-Email / X-Admin-Name (set by the admin gateway)."""
    if not x_admin_email:
        return None
    return AdminUser(display_name=x_admin_name or x_admin_email, email=x_admin_email)


def get_validate_all_flows_use_case(
    flow_repo: Annotated[IFlowRepository, Depends(get_flow_repo)],
    hash_service: Annotated[FlowHashService, Depends(get_hash_service)],
) -> ValidateAllFlowsUseCase:
    return ValidateAllFlowsUseCase(flow_repo, hash_service)


def get_create_flow_use_case(
    flow_repo: Annotated[IFlowRepository, Depends(get_flow_repo)],
    hash_service: Annotated[FlowHashService, Depends(get_hash_service)],
    activity_log: Annotated[ActivityLogService | None, Depends(get_activity_log_service)],
    validate_all: Annotated[ValidateAllFlowsUseCase, Depends(get_validate_all_flows_use_case)],
) -> CreateFlowUseCase:
    return CreateFlowUseCase(
        flow_repo,
        hash_service,
        activity_log=activity_log,
        on_change=validate_all.execute,
    )


def get_clone_flow_use_case(
    flow_repo: Annotated[IFlowRepository, Depends(get_flow_repo)],
    hash_service: Annotated[FlowHashService, Depends(get_hash_service)],
    activity_log: Annotated[ActivityLogService | None, Depends(get_activity_log_service)],
    validate_all: Annotated[ValidateAllFlowsUseCase, Depends(get_validate_all_flows_use_case)],
) -> CloneFlowUseCase:
    return CloneFlowUseCase(
        flow_repo,
        hash_service,
        activity_log=activity_log,
        on_change=validate_all.execute,
    )


def get_toggle_flow_use_case(
    flow_repo: Annotated[IFlowRepository, Depends(get_flow_repo)],
    activity_log: Annotated[ActivityLogService | None, Depends(get_activity_log_service)],
    validate_all: Annotated[ValidateAllFlowsUseCase, Depends(get_validate_all_flows_use_case)],
) -> ToggleFlowUseCase:
    return ToggleFlowUseCase(
        flow_repo, activity_log=activity_log, on_change=validate_all.execute
    )


def get_delete_flow_use_case(
    flow_repo: Annotated[IFlowRepository, Depends(get_flow_repo)],
    activity_log: Annotated[ActivityLogService | None, Depends(get_activity_log_service)],
    validate_all: Annotated[ValidateAllFlowsUseCase, Depends(get_validate_all_flows_use_case)],
) -> DeleteFlowUseCase:
    return DeleteFlowUseCase(
        flow_repo,
        high_usage_threshold=get_settings().flow_high_usage_threshold,
        activity_log=activity_log,
        on_change=validate_all.execute,
    )
