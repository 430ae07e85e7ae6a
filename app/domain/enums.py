"""Domain enumerations for the listing flow admin service.

Enums represent fixed sets of domain values (e.g. flow validation status).
"""

from enum import Enum


class ValidationStatus(str, Enum):
    """Stored validation status of a flow.

    Written only by the validation pass; 'warning' is accepted when reading
    documents but the pass itself only writes 'valid' or 'error'.
    """

    VALID = "valid"
    WARNING = "warning"
    ERROR = "error"

    @classmethod
    def values(cls) -> list[str]:
        """Return all valid status values as strings.

        Returns:
            List of enum value strings (e.g. for validation or serialization).
        """
        return [status.value for status in cls]
