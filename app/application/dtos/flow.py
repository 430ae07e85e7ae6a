"""DTOs for listing flow validation and admin summaries."""

from dataclasses import dataclass, field
from datetime import datetime

from app.domain.enums import ValidationStatus


@dataclass(frozen=True)
class ValidationResult:
    """Outcome of validating one flow. Produced fresh on every pass, never stored as-is."""

    is_valid: bool
    errors: list[str] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)


@dataclass(frozen=True)
class FlowValidationUpdate:
    """Status fields staged for one flow by the validation pass."""

    flow_id: str
    validation_status: ValidationStatus
    validation_errors: list[str]
    flow_hash: str
    validated_at: datetime


@dataclass(frozen=True)
class FlowValidationReport:
    """Result of a validation pass over all flows."""

    flows_checked: int
    warnings: list[str]
    updated_flow_ids: list[str]


@dataclass(frozen=True)
class FlowSummary:
    """Aggregate counters shown above the flow list."""

    total_flows: int
    active_flows: int
    total_usage: int
    average_completion_rate: int
    invalid_flows: int
