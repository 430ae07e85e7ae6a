"""Domain layer: entities, enums, and exceptions.

No dependencies on infrastructure or presentation. Used by application
and infrastructure layers.
"""

from app.domain.entities import TERMINAL_STEP_ID, Flow, FlowStep, NextStep
from app.domain.enums import ValidationStatus
from app.domain.exceptions import (
    DocumentStoreNotConfiguredException,
    FlowAdminException,
    FlowDeletionBlockedException,
    FlowValidationFailedException,
    ResourceNotFoundException,
    ValidationException,
)

__all__ = [
    # Entities
    "TERMINAL_STEP_ID",
    "Flow",
    "FlowStep",
    "NextStep",
    # Enums
    "ValidationStatus",
    # Exceptions
    "DocumentStoreNotConfiguredException",
    "FlowAdminException",
    "FlowDeletionBlockedException",
    "FlowValidationFailedException",
    "ResourceNotFoundException",
    "ValidationException",
]
