"""Firestore collection names and persisted field names (schema-in-code).

Firestore has no DDL or migrations. Collection names come from settings
(defaults below) so staging projects can point elsewhere; field names of
the flow document are fixed because the mobile app reads them too.
"""

COLLECTION_PRODUCT_FLOWS = "product_flows"
COLLECTION_ADMIN_ACTIVITY_LOGS = "admin_activity_logs"

# Flow fields written by the validation pass (and nothing else)
FIELD_VALIDATION_STATUS = "validationStatus"
FIELD_VALIDATION_ERRORS = "validationErrors"
FIELD_LAST_VALIDATED = "lastValidated"
FIELD_FLOW_HASH = "flowHash"
FIELD_UPDATED_AT = "updatedAt"
FIELD_IS_ACTIVE = "isActive"
