"""Flow API: thin routes delegating to use cases and repositories."""

from typing import Annotated

from fastapi import APIRouter, Depends, Query, Response

from app.api.v1.dependencies import (
    get_activity_log_service,
    get_admin_user,
    get_clone_flow_use_case,
    get_create_flow_use_case,
    get_delete_flow_use_case,
    get_flow_repo,
    get_toggle_flow_use_case,
    get_validate_all_flows_use_case,
)
from app.application.dtos.activity_log import AdminUser
from app.application.interfaces.repositories import IFlowRepository
from app.application.services.activity_log_service import ActivityLogService
from app.application.services.flow_validator import validate_flow
from app.application.use_cases.flows import (
    CloneFlowUseCase,
    CreateFlowCommand,
    CreateFlowUseCase,
    DeleteFlowUseCase,
    ToggleFlowUseCase,
    ValidateAllFlowsUseCase,
    flow_complexity,
    summarize_flows,
)
from app.domain.entities.flow import Flow
from app.domain.exceptions import ResourceNotFoundException
from app.schemas.flow import (
    FlowCreateRequest,
    FlowDetailResponse,
    FlowListResponse,
    FlowResponse,
    FlowSummaryResponse,
    FlowValidationReportResponse,
    ValidationResultResponse,
)

router = APIRouter()


def _detail(flow: Flow) -> FlowDetailResponse:
    return FlowDetailResponse(
        flow=FlowResponse.model_validate(flow),
        validation=ValidationResultResponse.model_validate(validate_flow(flow)),
        complexity=flow_complexity(flow),
    )


@router.get("", response_model=FlowListResponse)
async def list_flows(
    flow_repo: Annotated[IFlowRepository, Depends(get_flow_repo)],
    validate_all: Annotated[
        ValidateAllFlowsUseCase, Depends(get_validate_all_flows_use_case)
    ],
):
    """List all flows. Runs a validation pass first so stored statuses are current."""
    flows = await flow_repo.list_flows()
    report = await validate_all.execute(flows)
    if report.updated_flow_ids:
        flows = await flow_repo.list_flows()
    return FlowListResponse(
        flows=[_detail(f) for f in flows],
        warnings=report.warnings,
        summary=FlowSummaryResponse.model_validate(summarize_flows(flows)),
    )


@router.post("/validate", response_model=FlowValidationReportResponse)
async def validate_flows(
    validate_all: Annotated[
        ValidateAllFlowsUseCase, Depends(get_validate_all_flows_use_case)
    ],
    activity_log: Annotated[
        ActivityLogService | None, Depends(get_activity_log_service)
    ],
    admin: Annotated[AdminUser | None, Depends(get_admin_user)],
):
    """Run a validation pass over every flow on demand."""
    report = await validate_all.execute()
    if activity_log is not None:
        await activity_log.log_activity(
            admin,
            "Ran flow validation",
            {
                "flowsChecked": report.flows_checked,
                "updated": len(report.updated_flow_ids),
            },
        )
    return FlowValidationReportResponse.model_validate(report)


@router.get("/{flow_id}", response_model=FlowDetailResponse)
async def get_flow(
    flow_id: str,
    flow_repo: Annotated[IFlowRepository, Depends(get_flow_repo)],
):
    """Get flow by id with its fresh validation result."""
    flow = await flow_repo.get_by_id(flow_id)
    if not flow:
        raise ResourceNotFoundException("flow", flow_id)
    return _detail(flow)


@router.post("", response_model=FlowResponse, status_code=201)
async def create_flow(
    body: FlowCreateRequest,
    create_flow_uc: Annotated[CreateFlowUseCase, Depends(get_create_flow_use_case)],
    admin: Annotated[AdminUser | None, Depends(get_admin_user)],
):
    """Create an inactive flow chaining the given screens in order."""
    flow = await create_flow_uc.execute(
        CreateFlowCommand(
            name=body.name,
            category=body.category,
            screens=body.screens,
            description=body.description,
            subcategory=body.subcategory,
            subsubcategory=body.subsubcategory,
        ),
        admin=admin,
    )
    return FlowResponse.model_validate(flow)


@router.post("/{flow_id}/clone", response_model=FlowResponse, status_code=201)
async def clone_flow(
    flow_id: str,
    clone_flow_uc: Annotated[CloneFlowUseCase, Depends(get_clone_flow_use_case)],
    admin: Annotated[AdminUser | None, Depends(get_admin_user)],
    allow_invalid: bool = Query(False, description="Clone even if the source has errors"),
):
    """Clone a flow as an inactive copy."""
    clone = await clone_flow_uc.execute(flow_id, allow_invalid=allow_invalid, admin=admin)
    return FlowResponse.model_validate(clone)


@router.post("/{flow_id}/toggle", response_model=FlowResponse)
async def toggle_flow(
    flow_id: str,
    toggle_flow_uc: Annotated[ToggleFlowUseCase, Depends(get_toggle_flow_use_case)],
    admin: Annotated[AdminUser | None, Depends(get_admin_user)],
):
    """Activate or deactivate a flow. Activation is refused for invalid flows."""
    flow = await toggle_flow_uc.execute(flow_id, admin=admin)
    return FlowResponse.model_validate(flow)


@router.delete("/{flow_id}", status_code=204)
async def delete_flow(
    flow_id: str,
    delete_flow_uc: Annotated[DeleteFlowUseCase, Depends(get_delete_flow_use_case)],
    admin: Annotated[AdminUser | None, Depends(get_admin_user)],
    force: bool = Query(False, description="Delete even if the flow has high usage"),
):
    """Delete an inactive flow."""
    await delete_flow_uc.execute(flow_id, force=force, admin=admin)
    return Response(status_code=204)
