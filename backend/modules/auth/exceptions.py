"""
Authentication module exceptions.

These exceptions are raised by the auth module and caught by the API
error handlers to return appropriate HTTP responses.
"""

from typing import Optional

from shared.exceptions import (
    AuthenticationError,
    AuthorizationError,
    ConflictError,
    ExternalServiceError,
    RateLimitedError,
    ValidationError,
)


class InvalidTokenError(AuthenticationError):
    """Raised when a bearer token is invalid, malformed or unverifiable."""

    def __init__(self, message: str = "Invalid or expired token"):
        super().__init__(message, code="INVALID_TOKEN")


class ExpiredTokenError(AuthenticationError):
    """Raised when a bearer token has expired."""

    def __init__(self, message: str = "Authentication token has expired"):
        super().__init__(message, code="TOKEN_EXPIRED")


class TokenRevokedError(AuthenticationError):
    """Raised when the identity provider reports the token as revoked."""

    def __init__(self, message: str = "Token revoked. Please reauthenticate."):
        super().__init__(message, code="TOKEN_REVOKED")


class MissingTokenError(AuthenticationError):
    """Raised when no credential is provided."""

    def __init__(self, message: str = "Authentication required"):
        super().__init__(message, code="MISSING_TOKEN")


class InvalidSessionError(AuthenticationError):
    """Raised when a session credential fails signature or shape checks."""

    def __init__(self, message: str = "Invalid session"):
        super().__init__(message, code="INVALID_SESSION")


class ExpiredSessionError(AuthenticationError):
    """Raised when a session credential is past its expiry."""

    def __init__(self, message: str = "Session has expired"):
        super().__init__(message, code="SESSION_EXPIRED")


class InvalidCredentialsError(AuthenticationError):
    """Raised when an email/password pair is rejected."""

    def __init__(self, message: str = "Invalid email or password"):
        super().__init__(message, code="INVALID_CREDENTIALS")


class AccountDisabledError(AuthorizationError):
    """Raised when the identity provider reports the account as disabled."""

    def __init__(self, message: str = "This account has been disabled"):
        super().__init__(message, code="ACCOUNT_DISABLED")


class InsufficientPermissionsError(AuthorizationError):
    """Raised when the caller lacks the required role or ownership."""

    def __init__(self, message: str = "Insufficient permissions", required_role: Optional[str] = None):
        details = {"required_role": required_role} if required_role else None
        super().__init__(message, code="INSUFFICIENT_PERMISSIONS", details=details)


class TooManyAttemptsError(RateLimitedError):
    """Raised when the identity provider throttles sign-in attempts."""

    def __init__(self, message: str = "Too many attempts. Try again later."):
        super().__init__(message, code="TOO_MANY_ATTEMPTS")


class EmailExistsError(ConflictError):
    """Raised when registering an email the identity provider already knows."""

    def __init__(self, email: str):
        super().__init__(
            "An account with this email already exists",
            code="EMAIL_EXISTS",
            details={"email": email},
        )


class InvalidResetTokenError(ValidationError):
    """Raised when a reset token is unknown, used, expired or for another email."""

    def __init__(self, message: str = "Invalid or expired reset token"):
        super().__init__(message, code="INVALID_RESET_TOKEN")


class IdentityProviderError(ExternalServiceError):
    """Raised when the identity provider is unreachable or misbehaves."""

    def __init__(self, message: str = "Identity provider is temporarily unavailable"):
        super().__init__(message, service="identity", code="IDENTITY_PROVIDER_UNAVAILABLE")
