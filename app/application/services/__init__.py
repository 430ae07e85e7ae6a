"""Application services: flow validation, fingerprinting, activity logging."""

from app.application.services.activity_log_service import ActivityLogService
from app.application.services.flow_validator import find_cycles, validate_flow
from app.application.services.hash_service import (
    FlowHashService,
    HashAlgorithm,
    SHA256Algorithm,
)

__all__ = [
    "ActivityLogService",
    "FlowHashService",
    "HashAlgorithm",
    "SHA256Algorithm",
    "find_cycles",
    "validate_flow",
]
