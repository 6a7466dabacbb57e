"""Error taxonomy for the coaching log.

Every error carries the HTTP status code the API layer answers with, so
request handlers can translate them without a lookup table.
"""


class CoachingLogError(Exception):
    """Base class for all coaching log errors."""

    status_code: int = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationError(CoachingLogError):
    """A required field is blank or a value has the wrong shape."""

    status_code = 400


class AccessDeniedError(CoachingLogError):
    """The asserted identity is not on the admin allow-list."""

    status_code = 403


class NotFoundError(CoachingLogError):
    """Unknown reference category or reference value."""

    status_code = 404


class ConflictError(CoachingLogError):
    """Duplicate reference value, or removal of a value still in use."""

    status_code = 409


class PayloadTooLargeError(CoachingLogError):
    """Request body exceeds the configured size limit."""

    status_code = 413


class StorageError(CoachingLogError):
    """The state document could not be written to durable storage."""

    status_code = 500
