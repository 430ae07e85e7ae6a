"""Read-side helpers for the flow list: aggregate counters and complexity labels."""

from app.application.dtos.flow import FlowSummary
from app.domain.entities.flow import Flow
from app.domain.enums import ValidationStatus


def summarize_flows(flows: list[Flow]) -> FlowSummary:
    """Aggregate counters over a flow snapshot (stored status, not a fresh validation)."""
    if not flows:
        return FlowSummary(0, 0, 0, 0, 0)
    return FlowSummary(
        total_flows=len(flows),
        active_flows=sum(1 for f in flows if f.is_active),
        total_usage=sum(f.usage_count or 0 for f in flows),
        average_completion_rate=round(sum(f.completion_rate or 0 for f in flows) / len(flows)),
        invalid_flows=sum(1 for f in flows if f.validation_status == ValidationStatus.ERROR),
    )


def flow_complexity(flow: Flow) -> str:
    """Simple (<= 3 steps), Medium (<= 6), otherwise Complex."""
    n = flow.step_count
    if n <= 3:
        return "Simple"
    if n <= 6:
        return "Medium"
    return "Complex"
