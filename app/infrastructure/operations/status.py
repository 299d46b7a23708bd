"""Operation status enumeration.

Status codes for operation results, used to classify outcomes of
provisioning and teardown runs so callers can surface the right message.
"""

from enum import Enum


class OperationStatus(Enum):
    """Status codes for operation results.

    Attributes:
        SUCCESS: Operation completed successfully
        SKIPPED: Nothing to do (already provisioned, guarded by a marker)
        TRANSIENT_ERROR: Retryable error (file lock, disk write)
        PERMANENT_ERROR: Non-retryable error (validation, forbidden removal)
        NOT_FOUND: Language or resource not found
    """

    SUCCESS = "success"
    SKIPPED = "skipped"
    TRANSIENT_ERROR = "transient_error"
    PERMANENT_ERROR = "permanent_error"
    NOT_FOUND = "not_found"
