"""
Error taxonomy for service operations.

Services raise these; the web layer maps them to HTTP status codes
(see web_api/errors.py). Nothing here knows about HTTP.
"""


class ServiceError(Exception):
    """Base class for errors raised by service operations."""

    default_message = "Request failed"

    def __init__(self, message: str | None = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class ValidationError(ServiceError):
    """Missing or malformed input. Caller's fault, never retried."""

    default_message = "Invalid input"


class ConflictError(ServiceError):
    """Uniqueness violation (email already registered, already enrolled)."""

    default_message = "Resource already exists"


class NotFoundError(ServiceError):
    """Referenced entity is absent, or the caller may not see it."""

    default_message = "Not found"


class Unauthorized(ServiceError):
    """Missing or insufficiently privileged principal."""

    default_message = "Unauthorized"


class InternalError(ServiceError):
    """Storage or unexpected failure. Message is safe to show to callers."""

    default_message = "Internal server error"
