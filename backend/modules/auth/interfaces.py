"""
Authentication module interfaces.

The account flows depend on IIdentityProvider and IMailer, not the
concrete Firebase and logging implementations. This enables testing
with fakes and swapping the provider without touching the flows.
"""

from typing import Any, Optional, Protocol, runtime_checkable

from .models import ProviderUser, SignInResult, VerifiedToken


@runtime_checkable
class IIdentityProvider(Protocol):
    """
    Interface to the external identity provider.

    All methods are async; implementations wrapping blocking SDKs must
    not block the event loop.
    """

    async def verify_token(self, token: str) -> VerifiedToken:
        """
        Verify a bearer token, consulting live revocation state.

        Raises:
            InvalidTokenError: Malformed, mis-signed or unverifiable token
            ExpiredTokenError: Token past its expiry
            TokenRevokedError: Token or session revoked at the provider
            IdentityProviderError: Provider unreachable
        """
        ...

    async def sign_in_with_password(self, email: str, password: str) -> SignInResult:
        """
        Exchange an email/password pair for a provider token.

        Raises:
            InvalidCredentialsError, AccountDisabledError, TooManyAttemptsError
        """
        ...

    async def create_user(
        self,
        email: str,
        password: str,
        display_name: Optional[str] = None,
        phone_number: Optional[str] = None,
        photo_url: Optional[str] = None,
    ) -> ProviderUser:
        """
        Create an account.

        Raises:
            EmailExistsError: If the email is already registered
        """
        ...

    async def get_user(self, uid: str) -> Optional[ProviderUser]:
        """Get an account by uid, or None if it does not exist."""
        ...

    async def get_user_by_email(self, email: str) -> Optional[ProviderUser]:
        """Get an account by email, or None if it does not exist."""
        ...

    async def update_password(self, uid: str, password: str) -> None:
        ...

    async def delete_user(self, uid: str) -> None:
        """Delete an account. Deleting a missing account is not an error."""
        ...

    async def set_custom_claims(self, uid: str, claims: dict[str, Any]) -> None:
        ...


@runtime_checkable
class IMailer(Protocol):
    """Interface for outbound account mail."""

    async def send_password_reset(self, email: str, reset_link: str) -> None:
        ...

    async def send_password_reset_confirmation(self, email: str) -> None:
        ...
