"""
Firebase identity provider.

Verifies Firebase ID tokens (with live revocation checks) and performs
account administration through the Firebase Admin SDK. Email/password
sign-in uses the Identity Toolkit REST API, which the Admin SDK does
not expose.

The Admin SDK is blocking, so every call runs in a worker thread under
a timeout to keep the event loop responsive.
"""

import asyncio
import logging
from typing import Any, Callable, Optional, TypeVar

import firebase_admin
import httpx
from firebase_admin import auth as firebase_auth
from firebase_admin import exceptions as firebase_exceptions

from shared.config import get_settings
from shared.exceptions import ValidationError
from shared.firebase import get_firebase_app

from .exceptions import (
    AccountDisabledError,
    EmailExistsError,
    ExpiredTokenError,
    IdentityProviderError,
    InvalidCredentialsError,
    InvalidTokenError,
    TokenRevokedError,
    TooManyAttemptsError,
)
from .models import ProviderUser, SignInResult, VerifiedToken

logger = logging.getLogger(__name__)

R = TypeVar("R")

SIGN_IN_URL = "https://identitytoolkit.googleapis.com/v1/accounts:signInWithPassword"

# Identity Toolkit error codes (the message prefix before any " : " detail)
BAD_CREDENTIAL_CODES = {"INVALID_LOGIN_CREDENTIALS", "EMAIL_NOT_FOUND", "INVALID_PASSWORD", "INVALID_EMAIL"}
DISABLED_CODES = {"USER_DISABLED"}
THROTTLED_CODES = {"TOO_MANY_ATTEMPTS_TRY_LATER"}


def _to_provider_user(record: firebase_auth.UserRecord) -> ProviderUser:
    providers = record.provider_data or []
    return ProviderUser(
        uid=record.uid,
        email=record.email,
        display_name=record.display_name,
        phone_number=record.phone_number,
        photo_url=record.photo_url,
        disabled=record.disabled,
        email_verified=record.email_verified,
        custom_claims=record.custom_claims or {},
        provider=providers[0].provider_id if providers else None,
    )


class FirebaseIdentityProvider:
    """
    IIdentityProvider backed by Firebase Authentication.

    Args:
        app: Firebase Admin app; defaults to the shared app from settings
        api_key: Web API key for password sign-in
        timeout: Seconds allowed for each provider call
    """

    def __init__(
        self,
        app: Optional[firebase_admin.App] = None,
        api_key: Optional[str] = None,
        timeout: Optional[float] = None,
    ) -> None:
        settings = get_settings()
        self._app = app
        self._api_key = api_key if api_key is not None else settings.firebase_api_key
        self._timeout = timeout if timeout is not None else settings.identity_verify_timeout

    @property
    def app(self) -> firebase_admin.App:
        if self._app is None:
            self._app = get_firebase_app()
        return self._app

    async def _in_thread(self, func: Callable[..., R], *args: Any, **kwargs: Any) -> R:
        return await asyncio.wait_for(
            asyncio.to_thread(func, *args, **kwargs),
            timeout=self._timeout,
        )

    async def _admin_call(self, func: Callable[..., R], *args: Any, **kwargs: Any) -> R:
        """Run an Admin SDK call, mapping transport failures to IdentityProviderError."""
        app = self.app
        try:
            return await self._in_thread(func, *args, app=app, **kwargs)
        except asyncio.TimeoutError as e:
            logger.error(f"Identity provider call {func.__name__} timed out after {self._timeout}s")
            raise IdentityProviderError() from e

    async def verify_token(self, token: str) -> VerifiedToken:
        app = self.app
        try:
            claims = await self._in_thread(
                firebase_auth.verify_id_token,
                token,
                app=app,
                check_revoked=True,
            )
        except asyncio.TimeoutError as e:
            logger.warning(f"Token verification timed out after {self._timeout}s")
            raise InvalidTokenError() from e
        except firebase_auth.RevokedIdTokenError as e:
            raise TokenRevokedError() from e
        except firebase_auth.ExpiredIdTokenError as e:
            raise ExpiredTokenError() from e
        except firebase_auth.UserDisabledError as e:
            raise InvalidTokenError() from e
        except firebase_auth.CertificateFetchError as e:
            logger.error(f"Could not fetch token signing certificates: {e}")
            raise IdentityProviderError() from e
        except (firebase_auth.InvalidIdTokenError, ValueError) as e:
            logger.info(f"Rejected bearer token: {type(e).__name__}")
            raise InvalidTokenError() from e
        except firebase_exceptions.FirebaseError as e:
            logger.error(f"Identity provider error during verification: {e.code}")
            raise IdentityProviderError() from e

        return VerifiedToken(subject_id=claims["uid"], claims=claims)

    async def sign_in_with_password(self, email: str, password: str) -> SignInResult:
        if not self._api_key:
            logger.error("FIREBASE_API_KEY is not configured; password sign-in unavailable")
            raise IdentityProviderError()

        try:
            async with httpx.AsyncClient(timeout=self._timeout) as client:
                response = await client.post(
                    SIGN_IN_URL,
                    params={"key": self._api_key},
                    json={"email": email, "password": password, "returnSecureToken": True},
                )
        except httpx.HTTPError as e:
            logger.error(f"Password sign-in request failed: {e}")
            raise IdentityProviderError() from e

        if response.status_code == 200:
            data = response.json()
            return SignInResult(
                id_token=data["idToken"],
                subject_id=data["localId"],
                email=data.get("email"),
            )

        try:
            message = response.json().get("error", {}).get("message", "")
        except ValueError:
            message = ""
        error_code = message.split(" ", 1)[0]

        if error_code in BAD_CREDENTIAL_CODES:
            raise InvalidCredentialsError()
        if error_code in DISABLED_CODES:
            raise AccountDisabledError()
        if error_code in THROTTLED_CODES:
            raise TooManyAttemptsError()

        logger.error(f"Unexpected sign-in failure: HTTP {response.status_code} {error_code}")
        raise IdentityProviderError()

    async def create_user(
        self,
        email: str,
        password: str,
        display_name: Optional[str] = None,
        phone_number: Optional[str] = None,
        photo_url: Optional[str] = None,
    ) -> ProviderUser:
        kwargs: dict[str, Any] = {"email": email, "password": password}
        if display_name:
            kwargs["display_name"] = display_name
        if phone_number:
            kwargs["phone_number"] = phone_number
        if photo_url:
            kwargs["photo_url"] = photo_url

        try:
            record = await self._admin_call(firebase_auth.create_user, **kwargs)
        except firebase_auth.EmailAlreadyExistsError as e:
            raise EmailExistsError(email) from e
        except ValueError as e:
            raise ValidationError(str(e), code="INVALID_ACCOUNT_DATA") from e
        except firebase_exceptions.FirebaseError as e:
            logger.error(f"Identity provider rejected account creation: {e.code}")
            raise IdentityProviderError() from e

        logger.info(f"Created identity {record.uid}")
        return _to_provider_user(record)

    async def get_user(self, uid: str) -> Optional[ProviderUser]:
        try:
            record = await self._admin_call(firebase_auth.get_user, uid)
        except firebase_auth.UserNotFoundError:
            return None
        except ValueError:
            return None
        except firebase_exceptions.FirebaseError as e:
            logger.error(f"Identity lookup failed: {e.code}")
            raise IdentityProviderError() from e
        return _to_provider_user(record)

    async def get_user_by_email(self, email: str) -> Optional[ProviderUser]:
        try:
            record = await self._admin_call(firebase_auth.get_user_by_email, email)
        except firebase_auth.UserNotFoundError:
            return None
        except ValueError:
            return None
        except firebase_exceptions.FirebaseError as e:
            logger.error(f"Identity lookup by email failed: {e.code}")
            raise IdentityProviderError() from e
        return _to_provider_user(record)

    async def update_password(self, uid: str, password: str) -> None:
        try:
            await self._admin_call(firebase_auth.update_user, uid, password=password)
        except ValueError as e:
            raise ValidationError(str(e), code="INVALID_PASSWORD") from e
        except firebase_exceptions.FirebaseError as e:
            logger.error(f"Password update failed for {uid}: {e.code}")
            raise IdentityProviderError() from e

    async def delete_user(self, uid: str) -> None:
        try:
            await self._admin_call(firebase_auth.delete_user, uid)
        except firebase_auth.UserNotFoundError:
            logger.info(f"Identity {uid} already absent at provider")
        except firebase_exceptions.FirebaseError as e:
            logger.error(f"Identity deletion failed for {uid}: {e.code}")
            raise IdentityProviderError() from e

    async def set_custom_claims(self, uid: str, claims: dict[str, Any]) -> None:
        try:
            await self._admin_call(firebase_auth.set_custom_user_claims, uid, claims)
        except ValueError as e:
            raise ValidationError(str(e), code="INVALID_CLAIMS") from e
        except firebase_exceptions.FirebaseError as e:
            logger.error(f"Setting custom claims failed for {uid}: {e.code}")
            raise IdentityProviderError() from e
