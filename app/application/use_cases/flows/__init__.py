"""Flow use cases: create, clone, toggle, delete, validation pass, list summary."""

from app.application.use_cases.flows.create_flow import (
    CreateFlowCommand,
    CreateFlowUseCase,
)
from app.application.use_cases.flows.flow_summary import flow_complexity, summarize_flows
from app.application.use_cases.flows.manage_flow import (
    CloneFlowUseCase,
    DeleteFlowUseCase,
    ToggleFlowUseCase,
)
from app.application.use_cases.flows.validate_all_flows import ValidateAllFlowsUseCase

__all__ = [
    "CloneFlowUseCase",
    "CreateFlowCommand",
    "CreateFlowUseCase",
    "DeleteFlowUseCase",
    "ToggleFlowUseCase",
    "ValidateAllFlowsUseCase",
    "flow_complexity",
    "summarize_flows",
]
