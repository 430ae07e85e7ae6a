"""Application DTOs (no persistence dependency)."""

from app.application.dtos.activity_log import ActivityLogEntry, AdminUser
from app.application.dtos.flow import (
    FlowSummary,
    FlowValidationReport,
    FlowValidationUpdate,
    ValidationResult,
)

__all__ = [
    "ActivityLogEntry",
    "AdminUser",
    "FlowSummary",
    "FlowValidationReport",
    "FlowValidationUpdate",
    "ValidationResult",
]
