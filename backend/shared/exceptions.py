"""
Base exception classes for the Atelier backend.

Each module defines its own exceptions that inherit from these bases.
The API layer maps every base to one HTTP status (see api/errors.py).
"""

from typing import Optional, Any


class AtelierError(Exception):
    """
    Base exception for all Atelier errors.

    All custom exceptions should inherit from this class.
    """

    def __init__(
        self,
        message: str,
        code: Optional[str] = None,
        details: Optional[dict[str, Any]] = None,
    ):
        super().__init__(message)
        self.message = message
        self.code = code or self.__class__.__name__
        self.details = details or {}

    def to_dict(self) -> dict[str, Any]:
        """Convert exception to a dictionary for API responses."""
        body: dict[str, Any] = {
            "error": self.__class__.__name__,
            "message": self.message,
            "code": self.code,
        }
        if self.details:
            body["details"] = self.details
        return body


class NotFoundError(AtelierError):
    """Resource not found."""

    pass


class ValidationError(AtelierError):
    """Input validation failed."""

    pass


class AuthenticationError(AtelierError):
    """Authentication failed (invalid or missing credentials)."""

    pass


class AuthorizationError(AtelierError):
    """Authorization failed (insufficient permissions)."""

    pass


class ConflictError(AtelierError):
    """A uniqueness constraint or resource state prevents the operation."""

    pass


class RateLimitedError(AtelierError):
    """An upstream service throttled the request."""

    pass


class ConfigurationError(AtelierError):
    """Required configuration is missing or unsafe."""

    pass


class ExternalServiceError(AtelierError):
    """Error communicating with an external service."""

    def __init__(
        self,
        message: str,
        service: str,
        code: Optional[str] = None,
        details: Optional[dict[str, Any]] = None,
    ):
        super().__init__(message, code, details)
        self.service = service
        self.details["service"] = service


class StorageError(ExternalServiceError):
    """The document store failed or was unreachable."""

    def __init__(self, message: str = "Storage is temporarily unavailable"):
        super().__init__(message, service="storage", code="STORAGE_UNAVAILABLE")
