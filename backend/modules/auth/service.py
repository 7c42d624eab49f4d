"""
Account service implementation.

Registration, sign-in, provider (Google) sign-in, profile resolution and
password reset. Every flow that authenticates someone also ensures the
local user projection exists; a failed projection write is logged and
does not fail the request.
"""

import logging
from datetime import timedelta
from typing import Optional
from urllib.parse import urlencode

from modules.users.exceptions import UserNotFoundError
from modules.users.models import User, UserProfile, UserRole
from modules.users.repository import UserRepository
from shared.config import Settings, get_settings
from shared.exceptions import AtelierError
from shared.models import Identity

from .exceptions import InvalidResetTokenError
from .interfaces import IIdentityProvider, IMailer
from .models import (
    AdminCreateUserRequest,
    LoginRequest,
    ProviderUser,
    RegisterRequest,
    ResetPasswordRequest,
)
from .password_reset import PasswordResetRepository, generate_reset_token, hash_reset_token

logger = logging.getLogger(__name__)

FORGOT_PASSWORD_MESSAGE = "If an account exists with this email, a password reset link has been sent."
RESET_PASSWORD_MESSAGE = "Password has been reset successfully."


def _profile_from_provider(provider_user: ProviderUser) -> UserProfile:
    return UserProfile(
        uid=provider_user.uid,
        email=provider_user.email,
        display_name=provider_user.display_name,
        phone_number=provider_user.phone_number,
        photo_url=provider_user.photo_url,
        provider=provider_user.provider,
        role=UserRole.ADMIN if provider_user.custom_claims.get("admin") is True else UserRole.USER,
    )


class AccountService:
    """
    Implementation of the account flows.

    Args:
        provider: Identity provider for verification and account administration
        users: Local user record storage
        resets: Password reset token storage
        mailer: Outbound account mail
        settings: Application settings (defaults to the cached settings)
    """

    def __init__(
        self,
        provider: IIdentityProvider,
        users: UserRepository,
        resets: PasswordResetRepository,
        mailer: IMailer,
        settings: Optional[Settings] = None,
    ) -> None:
        self._provider = provider
        self._users = users
        self._resets = resets
        self._mailer = mailer
        self._settings = settings or get_settings()

    def _project(self, firebase_uid: str, terms_accepted: Optional[bool] = None, **fields) -> Optional[User]:
        """Ensure the local projection, tolerating storage failure."""
        try:
            return self._users.ensure_projection(firebase_uid, terms_accepted=terms_accepted, **fields)
        except AtelierError:
            logger.exception(f"Could not write local record for {firebase_uid}; continuing")
            return None

    # -------------------------------------------------------------------------
    # Sign-up and sign-in
    # -------------------------------------------------------------------------

    async def register(self, request: RegisterRequest) -> UserProfile:
        """Create a provider account with email/password and project it locally."""
        provider_user = await self._provider.create_user(
            email=request.email,
            password=request.password,
            display_name=request.display_name,
        )
        user = self._project(
            provider_user.uid,
            terms_accepted=request.terms_accepted,
            email=provider_user.email or request.email,
            display_name=request.display_name,
            phone_number=request.phone_number,
            address=request.address,
            provider="password",
        )
        logger.info(f"Registered account {provider_user.uid}")
        return UserProfile.from_user(user) if user else _profile_from_provider(provider_user)

    async def login(self, request: LoginRequest) -> UserProfile:
        """Sign in with email/password and return the caller's profile."""
        result = await self._provider.sign_in_with_password(request.email, request.password)
        verified = await self._provider.verify_token(result.id_token)
        user = self._project(verified.subject_id, email=result.email or request.email)
        if user:
            return UserProfile.from_user(user)
        return UserProfile(uid=verified.subject_id, email=result.email or request.email)

    async def _provider_user_for(self, id_token: str) -> ProviderUser:
        verified = await self._provider.verify_token(id_token)
        provider_user = await self._provider.get_user(verified.subject_id)
        if provider_user is None:
            raise UserNotFoundError(verified.subject_id)
        return provider_user

    def _project_provider_user(self, provider_user: ProviderUser) -> Optional[User]:
        return self._project(
            provider_user.uid,
            email=provider_user.email,
            display_name=provider_user.display_name,
            phone_number=provider_user.phone_number,
            photo_url=provider_user.photo_url,
            provider=provider_user.provider or "google.com",
        )

    async def google_login(self, id_token: str) -> UserProfile:
        """Sign in with a provider-issued token (e.g. after Google sign-in on the client)."""
        provider_user = await self._provider_user_for(id_token)
        user = self._project_provider_user(provider_user)
        return UserProfile.from_user(user) if user else _profile_from_provider(provider_user)

    async def google_register(self, id_token: str) -> tuple[UserProfile, bool]:
        """
        Register with a provider-issued token.

        Returns:
            The profile and whether no local record existed beforehand
        """
        provider_user = await self._provider_user_for(id_token)
        is_new_user = self._users.get_by_firebase_uid(provider_user.uid) is None
        user = self._project_provider_user(provider_user)
        if is_new_user:
            logger.info(f"Registered provider account {provider_user.uid}")
        profile = UserProfile.from_user(user) if user else _profile_from_provider(provider_user)
        return profile, is_new_user

    # -------------------------------------------------------------------------
    # Profiles
    # -------------------------------------------------------------------------

    def profile_for(self, identity: Identity) -> UserProfile:
        """Profile from the local record, falling back to token claims."""
        user = self._users.find_by_identity_id(identity.subject_id)
        if user is not None:
            return UserProfile.from_user(user)
        return UserProfile(
            uid=identity.subject_id,
            email=identity.email,
            display_name=identity.claims.get("name"),
            photo_url=identity.claims.get("picture"),
            role=UserRole.ADMIN if identity.claims_admin else UserRole.USER,
        )

    # -------------------------------------------------------------------------
    # Password reset
    # -------------------------------------------------------------------------

    async def forgot_password(self, email: str) -> str:
        """
        Issue a reset token and mail the link if the account exists.

        Always returns the same message so callers cannot probe which
        emails are registered.
        """
        email = email.lower()
        provider_user = await self._provider.get_user_by_email(email)
        if provider_user is None:
            logger.info("Password reset requested for an unknown email")
            return FORGOT_PASSWORD_MESSAGE

        token = generate_reset_token()
        try:
            self._resets.create(
                email,
                hash_reset_token(token),
                ttl=timedelta(minutes=self._settings.password_reset_ttl_minutes),
            )
        except AtelierError:
            logger.exception("Could not store password reset token")
            return FORGOT_PASSWORD_MESSAGE
        query = urlencode({"token": token, "email": email})
        reset_link = f"{self._settings.frontend_url.rstrip('/')}/reset-password?{query}"
        try:
            await self._mailer.send_password_reset(email, reset_link)
        except Exception:
            logger.exception(f"Could not send password reset mail to {email}")
        return FORGOT_PASSWORD_MESSAGE

    async def reset_password(self, request: ResetPasswordRequest) -> str:
        """
        Redeem a reset token and set the new password.

        The token is consumed before the provider update, so a failed
        update still leaves the token spent; the user requests a new one.
        """
        email = request.email.lower()
        if not self._resets.consume(email, hash_reset_token(request.token)):
            raise InvalidResetTokenError()

        provider_user = await self._provider.get_user_by_email(email)
        if provider_user is None:
            raise InvalidResetTokenError()

        await self._provider.update_password(provider_user.uid, request.new_password)
        logger.info(f"Password reset completed for {provider_user.uid}")
        try:
            await self._mailer.send_password_reset_confirmation(email)
        except Exception:
            logger.exception(f"Could not send password change confirmation to {email}")
        return RESET_PASSWORD_MESSAGE

    # -------------------------------------------------------------------------
    # Administration
    # -------------------------------------------------------------------------

    async def admin_create_user(self, request: AdminCreateUserRequest) -> UserProfile:
        """Provision an account, optionally with custom claims, and project it."""
        provider_user = await self._provider.create_user(
            email=request.email,
            password=request.password,
            display_name=request.display_name,
            phone_number=request.phone_number,
            photo_url=request.photo_url,
        )
        if request.custom_claims:
            await self._provider.set_custom_claims(provider_user.uid, request.custom_claims)
            provider_user = provider_user.model_copy(update={"custom_claims": request.custom_claims})

        user = self._project(
            provider_user.uid,
            email=provider_user.email,
            display_name=provider_user.display_name,
            phone_number=request.phone_number,
            photo_url=provider_user.photo_url,
            provider="password",
        )
        # Stored roles win over claims, so claim-provisioned admins get the stored role too.
        if user is not None and provider_user.custom_claims.get("admin") is True:
            user = self._users.update_user(user.id, {"role": UserRole.ADMIN}) or user
        logger.info(f"Administratively created account {provider_user.uid}")
        return UserProfile.from_user(user) if user else _profile_from_provider(provider_user)
