"""Domain exceptions for the listing flow admin service.

Defines domain-level exceptions that represent business rule violations.
These exceptions are independent of infrastructure concerns. Presentation
layer maps them to HTTP responses in exception handlers.
"""

from typing import Any


class FlowAdminException(Exception):
    """Base exception for all flow admin errors.

    All custom exceptions should inherit from this class to allow
    consistent error handling and logging. Presentation layer maps
    these to HTTP responses using message, error_code, and details.

    Attributes:
        message: Human-readable error description.
        error_code: Machine-readable error code.
        details: Additional error context (e.g. field, resource_id).
    """

    def __init__(
        self,
        message: str,
        error_code: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """Initialize the exception.

        Args:
            message: Human-readable error description.
            error_code: Optional machine-readable code; defaults to class name.
            details: Optional dict of extra context.
        """
        self.message = message
        self.error_code = error_code or self.__class__.__name__
        self.details = details or {}
        super().__init__(self.message)

    def to_dict(self) -> dict[str, Any]:
        """Serialize for JSON error responses."""
        return {
            "error": self.error_code,
            "message": self.message,
            "details": self.details,
        }


class ValidationException(FlowAdminException):
    """Raised when input validation fails (e.g. blank name or unknown screen)."""

    def __init__(self, message: str, field: str | None = None) -> None:
        """Initialize with message and optional field name.

        Args:
            message: Description of the validation failure.
            field: Optional field or attribute that failed validation.
        """
        details = {"field": field} if field else {}
        super().__init__(message, "VALIDATION_ERROR", details)


class ResourceNotFoundException(FlowAdminException):
    """Raised when a requested resource is not found."""

    def __init__(self, resource_type: str, resource_id: str) -> None:
        """Initialize with resource type and id.

        Args:
            resource_type: Type of resource (e.g. 'flow').
            resource_id: The ID that was not found.
        """
        super().__init__(
            f"{resource_type} not found: {resource_id}",
            "RESOURCE_NOT_FOUND",
            {"resource_type": resource_type, "resource_id": resource_id},
        )


class FlowValidationFailedException(FlowAdminException):
    """Raised when an operation requires a structurally valid flow and the flow has errors."""

    def __init__(self, message: str, flow_id: str, errors: list[str]) -> None:
        """Initialize with message, flow id and the validator's error list.

        Args:
            message: Human-readable description (e.g. 'Cannot activate flow').
            flow_id: Flow that failed validation (may be a not-yet-saved id).
            errors: Hard validation errors, in discovery order.
        """
        super().__init__(
            message,
            "FLOW_VALIDATION_FAILED",
            {"flow_id": flow_id, "errors": list(errors)},
        )


class FlowDeletionBlockedException(FlowAdminException):
    """Raised when a flow may not be deleted (active, or high usage without force)."""

    def __init__(self, flow_id: str, reason: str, message: str) -> None:
        """Initialize with flow id and reason.

        Args:
            flow_id: Flow whose deletion was refused.
            reason: 'active' or 'high_usage'.
            message: Human-readable message shown to the operator.
        """
        super().__init__(
            message,
            "FLOW_DELETION_BLOCKED",
            {"flow_id": flow_id, "reason": reason},
        )


class DocumentStoreNotConfiguredException(FlowAdminException):
    """Raised when an endpoint needs Firestore but no credentials were configured."""

    def __init__(self) -> None:
        super().__init__(
            "Document store is not configured. Set FIREBASE_SERVICE_ACCOUNT_KEY "
            "or FIREBASE_SERVICE_ACCOUNT_PATH.",
            "DOCUMENT_STORE_NOT_CONFIGURED",
            {},
        )
