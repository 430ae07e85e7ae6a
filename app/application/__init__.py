"""Application layer: interfaces, services, use cases.

Depends only on domain and protocol definitions (DIP).
Infrastructure implements the interfaces (Firestore repositories).
"""

from app.application.interfaces import IActivityLogRepository, IFlowRepository
from app.application.services.activity_log_service import ActivityLogService
from app.application.services.flow_validator import validate_flow
from app.application.services.hash_service import FlowHashService
from app.application.use_cases.flows import ValidateAllFlowsUseCase

__all__ = [
    "ActivityLogService",
    "FlowHashService",
    "IActivityLogRepository",
    "IFlowRepository",
    "ValidateAllFlowsUseCase",
    "validate_flow",
]
