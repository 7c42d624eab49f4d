"""
Authentication module data models.

Request bodies accepted by the auth endpoints, and the shapes the
identity provider hands back to the account flows.
"""

from typing import Any, Optional
from pydantic import AliasChoices, BaseModel, EmailStr, Field

MIN_PASSWORD_LENGTH = 6


class VerifiedToken(BaseModel):
    """Result of verifying a bearer token with the identity provider."""

    subject_id: str = Field(..., description="External identity id (uid)")
    claims: dict[str, Any] = Field(default_factory=dict)

    model_config = {"frozen": True}


class ProviderUser(BaseModel):
    """A user record as held by the identity provider."""

    uid: str
    email: Optional[str] = None
    display_name: Optional[str] = None
    phone_number: Optional[str] = None
    photo_url: Optional[str] = None
    disabled: bool = False
    email_verified: bool = False
    custom_claims: dict[str, Any] = Field(default_factory=dict)
    provider: Optional[str] = None


class SignInResult(BaseModel):
    """Result of an email/password sign-in against the provider."""

    id_token: str
    subject_id: str
    email: Optional[str] = None


class RegisterRequest(BaseModel):
    """Email/password registration."""

    email: EmailStr
    password: str = Field(..., min_length=MIN_PASSWORD_LENGTH)
    display_name: str = Field(
        ...,
        min_length=1,
        validation_alias=AliasChoices("display_name", "name", "displayName"),
    )
    phone_number: Optional[str] = Field(
        None, validation_alias=AliasChoices("phone_number", "phone", "phoneNumber")
    )
    address: Optional[str] = None
    terms_accepted: bool = Field(
        False, validation_alias=AliasChoices("terms_accepted", "termsAccepted")
    )


class LoginRequest(BaseModel):
    """Email/password sign-in."""

    email: EmailStr
    password: str = Field(..., min_length=1)


class ProviderTokenRequest(BaseModel):
    """Sign-in or registration with a token issued by the identity provider (e.g. Google)."""

    id_token: str = Field(
        ..., min_length=1, validation_alias=AliasChoices("id_token", "idToken", "token")
    )


class ForgotPasswordRequest(BaseModel):
    email: EmailStr


class ResetPasswordRequest(BaseModel):
    """Redeem a password reset token."""

    email: EmailStr
    token: str = Field(..., min_length=1)
    new_password: str = Field(
        ...,
        min_length=MIN_PASSWORD_LENGTH,
        validation_alias=AliasChoices("new_password", "newPassword", "password"),
    )


class AdminCreateUserRequest(BaseModel):
    """Administrative provisioning of an account, optionally with custom claims."""

    email: EmailStr
    password: str = Field(..., min_length=MIN_PASSWORD_LENGTH)
    display_name: Optional[str] = Field(
        None, validation_alias=AliasChoices("display_name", "name", "displayName")
    )
    phone_number: Optional[str] = Field(
        None, validation_alias=AliasChoices("phone_number", "phone", "phoneNumber")
    )
    photo_url: Optional[str] = Field(
        None, validation_alias=AliasChoices("photo_url", "photoURL", "image")
    )
    custom_claims: Optional[dict[str, Any]] = Field(
        None, validation_alias=AliasChoices("custom_claims", "customClaims")
    )


class MessageResponse(BaseModel):
    message: str


class LogoutResponse(BaseModel):
    ok: bool = True
