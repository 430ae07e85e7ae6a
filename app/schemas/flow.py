"""Flow API schemas."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from app.domain.enums import ValidationStatus


class FlowCreateRequest(BaseModel):
    """Request body for creating a flow from an ordered screen list."""

    name: str = Field(..., max_length=200)
    category: str
    subcategory: str | None = None
    subsubcategory: str | None = None
    screens: list[str] = Field(default_factory=list)
    description: str = ""


class NextStepResponse(BaseModel):
    """Transition from a step."""

    model_config = ConfigDict(from_attributes=True)

    step_id: str
    conditions: dict[str, list[str]] | None = None


class FlowStepResponse(BaseModel):
    """One step (screen) of a flow."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    step_type: str
    title: str
    required: bool
    next_steps: list[NextStepResponse]


class FlowResponse(BaseModel):
    """Flow response."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    name: str
    description: str
    version: str
    is_active: bool
    is_default: bool
    start_step_id: str
    steps: dict[str, FlowStepResponse]
    step_count: int
    created_at: datetime | None
    updated_at: datetime | None
    created_by: str
    usage_count: int | None
    completion_rate: float | None
    last_validated: datetime | None
    validation_status: ValidationStatus | None
    validation_errors: list[str] | None
    flow_hash: str | None


class ValidationResultResponse(BaseModel):
    """Fresh structural validation of one flow."""

    model_config = ConfigDict(from_attributes=True)

    is_valid: bool
    errors: list[str]
    warnings: list[str]


class FlowDetailResponse(BaseModel):
    """Single flow plus its fresh validation result."""

    flow: FlowResponse
    validation: ValidationResultResponse
    complexity: str


class FlowSummaryResponse(BaseModel):
    """Counters over the flow collection."""

    model_config = ConfigDict(from_attributes=True)

    total_flows: int
    active_flows: int
    total_usage: int
    average_completion_rate: int
    invalid_flows: int


class FlowListResponse(BaseModel):
    """Flow list after a validation pass."""

    flows: list[FlowDetailResponse]
    warnings: list[str]
    summary: FlowSummaryResponse


class FlowValidationReportResponse(BaseModel):
    """Result of a manual validation pass."""

    model_config = ConfigDict(from_attributes=True)

    flows_checked: int
    warnings: list[str]
    updated_flow_ids: list[str]
