# recipe_api/domain/exceptions.py

"""
Domain exceptions.

Every error that can reach a client is a subclass of DomainException and
carries its HTTP status and machine-readable code as data. The HTTP layer
translates them into the JSON error envelope without inspecting messages.
"""

from typing import Any, Optional


class DomainException(Exception):
    """
    Base class for errors surfaced to API clients.

    Attributes:
        message: Human-readable message, safe to show to the caller
        status_code: HTTP status used when the error is rendered
        internal_code: Stable machine-readable error code
        details: Optional structured details (validation errors, etc.)
    """

    status_code: int = 400
    internal_code: str = "ERROR"
    default_message: str = "Request could not be processed."

    def __init__(
            self,
            message: Optional[str] = None,
            details: Any = None,
            internal_code: Optional[str] = None,
    ):
        self.message = message or self.default_message
        self.details = details
        if internal_code:
            self.internal_code = internal_code
        super().__init__(self.message)


# ---------------------------------------------------------------------------
# Session / abuse-protection errors
# ---------------------------------------------------------------------------

class Unauthenticated(DomainException):
    """No valid identity could be resolved for the request."""

    status_code = 401
    internal_code = "UNAUTHORIZED"
    default_message = "Authentication required"


class Forbidden(DomainException):
    """Identity resolved but a role or status precondition failed."""

    status_code = 403
    internal_code = "FORBIDDEN"
    default_message = "Access denied"


class RateLimited(DomainException):
    """Operation-class threshold exceeded for the client address."""

    status_code = 429
    internal_code = "RATE_LIMITED"
    default_message = "Too many requests"

    def __init__(self, retry_after: int, message: Optional[str] = None):
        self.retry_after = max(1, int(retry_after))
        super().__init__(message=message, details={"retry_after": self.retry_after})


class CsrfRejected(DomainException):
    status_code = 403
    internal_code = "CSRF_TOKEN_INVALID"
    default_message = "Invalid CSRF token"


class PayloadTooLarge(DomainException):
    status_code = 413
    internal_code = "PAYLOAD_TOO_LARGE"
    default_message = "Request payload exceeds allowed size"


# ---------------------------------------------------------------------------
# Business errors used by the endpoints
# ---------------------------------------------------------------------------

class ValidationFailed(DomainException):
    status_code = 400
    internal_code = "VALIDATION_ERROR"
    default_message = "Validation failed"


class InvalidCredentials(DomainException):
    status_code = 401
    internal_code = "INVALID_CREDENTIALS"
    default_message = "Invalid email or password"


class ResourceNotFound(DomainException):
    status_code = 404
    internal_code = "NOT_FOUND"
    default_message = "Resource not found"


class ResourceAlreadyExists(DomainException):
    status_code = 409
    internal_code = "CONFLICT"
    default_message = "Resource conflict"


class DatabaseOperationException(DomainException):
    """
    Wraps a persistence failure. The original error is kept for logging
    only and never rendered to the client.
    """

    status_code = 500
    internal_code = "INTERNAL_ERROR"
    default_message = "Internal server error"

    def __init__(self, message: Optional[str] = None, original_error: Optional[Exception] = None):
        self.original_error = original_error
        super().__init__(message=message)


class ServiceUnavailable(DomainException):
    status_code = 503
    internal_code = "SERVICE_UNAVAILABLE"
    default_message = "Service unavailable"


# ---------------------------------------------------------------------------
# Startup errors (never rendered per request)
# ---------------------------------------------------------------------------

class ConfigurationFatal(RuntimeError):
    """Raised while building the application when configuration is unusable."""
