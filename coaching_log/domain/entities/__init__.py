"""Domain entities for the coaching log."""

from .coaching_session import (
    REQUIRED_SESSION_FIELDS,
    CoachingSession,
    new_session_id,
    utc_timestamp,
)
from .errors import (
    AccessDeniedError,
    CoachingLogError,
    ConflictError,
    NotFoundError,
    PayloadTooLargeError,
    StorageError,
    ValidationError,
)
from .reference_data import (
    DEFAULT_REFERENCE_DATA,
    ReferenceCategory,
    ReferenceData,
    default_values,
)
from .state_document import StateDocument

__all__ = [
    # Session entities
    "CoachingSession",
    "REQUIRED_SESSION_FIELDS",
    "new_session_id",
    "utc_timestamp",
    # Reference entities
    "ReferenceCategory",
    "ReferenceData",
    "DEFAULT_REFERENCE_DATA",
    "default_values",
    # Aggregate
    "StateDocument",
    # Errors
    "CoachingLogError",
    "ValidationError",
    "AccessDeniedError",
    "NotFoundError",
    "ConflictError",
    "PayloadTooLargeError",
    "StorageError",
]
