"""Application use cases: one entry point per workflow."""

from app.application.use_cases.flows import (
    CloneFlowUseCase,
    CreateFlowUseCase,
    DeleteFlowUseCase,
    ToggleFlowUseCase,
    ValidateAllFlowsUseCase,
)

__all__ = [
    "CloneFlowUseCase",
    "CreateFlowUseCase",
    "DeleteFlowUseCase",
    "ToggleFlowUseCase",
    "ValidateAllFlowsUseCase",
]
