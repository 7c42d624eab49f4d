"""
Authentication module.

Handles identity verification, cookie sessions, account flows and the
authorization rules used by the API guards.

Public API:
- IIdentityProvider, IMailer: Interfaces for the provider and outbound mail
- SessionManager: Session token issue/verify and cookie handling
- AccountService: Registration, sign-in, profile and password reset flows
- AccessContext, resolve_access: Admin and ownership decisions
- Auth exceptions: InvalidTokenError, TokenRevokedError, etc.
"""

from .interfaces import IIdentityProvider, IMailer
from .models import VerifiedToken, ProviderUser, SignInResult
from .authorization import AccessContext, resolve_access, admin_secret_matches
from .exceptions import (
    InvalidTokenError,
    ExpiredTokenError,
    TokenRevokedError,
    MissingTokenError,
    InvalidSessionError,
    ExpiredSessionError,
    InvalidCredentialsError,
    AccountDisabledError,
    InsufficientPermissionsError,
    TooManyAttemptsError,
    EmailExistsError,
    InvalidResetTokenError,
    IdentityProviderError,
)

__all__ = [
    # Interfaces
    "IIdentityProvider",
    "IMailer",
    # Models
    "VerifiedToken",
    "ProviderUser",
    "SignInResult",
    # Authorization
    "AccessContext",
    "resolve_access",
    "admin_secret_matches",
    # Exceptions
    "InvalidTokenError",
    "ExpiredTokenError",
    "TokenRevokedError",
    "MissingTokenError",
    "InvalidSessionError",
    "ExpiredSessionError",
    "InvalidCredentialsError",
    "AccountDisabledError",
    "InsufficientPermissionsError",
    "TooManyAttemptsError",
    "EmailExistsError",
    "InvalidResetTokenError",
    "IdentityProviderError",
]
