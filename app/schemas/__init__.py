"""Pydantic request/response schemas for the API."""

from app.schemas.flow import (
    FlowCreateRequest,
    FlowDetailResponse,
    FlowListResponse,
    FlowResponse,
    FlowValidationReportResponse,
)
from app.schemas.health import HealthResponse
from app.schemas.screen import ScreenResponse

__all__ = [
    "FlowCreateRequest",
    "FlowDetailResponse",
    "FlowListResponse",
    "FlowResponse",
    "FlowValidationReportResponse",
    "HealthResponse",
    "ScreenResponse",
]
