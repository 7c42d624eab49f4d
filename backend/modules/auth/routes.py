"""
Account API endpoints.

Cookie-session registration and sign-in, provider (Google) sign-in,
profile lookup, password reset and administrative account creation.
Mounted under /api.
"""

from fastapi import APIRouter, Depends, Response, status
from pydantic import BaseModel

from api.dependencies import get_account_service, get_session_manager
from api.middleware.guards import (
    RequireAdmin,
    RequireIdentity,
    require_bearer_identity,
)
from modules.users.models import UserProfile
from shared.models import Identity

from .models import (
    AdminCreateUserRequest,
    ForgotPasswordRequest,
    LoginRequest,
    LogoutResponse,
    MessageResponse,
    ProviderTokenRequest,
    RegisterRequest,
    ResetPasswordRequest,
)
from .service import AccountService
from .sessions import SessionManager

router = APIRouter()


class SessionUserResponse(BaseModel):
    """Profile returned after a session is established."""

    user: UserProfile


class ProviderRegisterResponse(SessionUserResponse):
    is_new_user: bool


@router.post("/register-cookie", response_model=SessionUserResponse, status_code=201)
async def register_with_cookie(
    request: RegisterRequest,
    response: Response,
    accounts: AccountService = Depends(get_account_service),
    sessions: SessionManager = Depends(get_session_manager),
) -> SessionUserResponse:
    """
    Register with email and password and start a cookie session.

    Returns 409 if the email is already registered.
    """
    profile = await accounts.register(request)
    sessions.set_cookie(response, profile.uid)
    return SessionUserResponse(user=profile)


@router.post("/login-cookie", response_model=SessionUserResponse)
async def login_with_cookie(
    request: LoginRequest,
    response: Response,
    accounts: AccountService = Depends(get_account_service),
    sessions: SessionManager = Depends(get_session_manager),
) -> SessionUserResponse:
    """Sign in with email and password and start a cookie session."""
    profile = await accounts.login(request)
    sessions.set_cookie(response, profile.uid)
    return SessionUserResponse(user=profile)


@router.post("/google-login", response_model=SessionUserResponse)
async def google_login(
    request: ProviderTokenRequest,
    response: Response,
    accounts: AccountService = Depends(get_account_service),
    sessions: SessionManager = Depends(get_session_manager),
) -> SessionUserResponse:
    """Exchange a provider ID token for a cookie session."""
    profile = await accounts.google_login(request.id_token)
    sessions.set_cookie(response, profile.uid)
    return SessionUserResponse(user=profile)


@router.post("/google-register", response_model=ProviderRegisterResponse)
async def google_register(
    request: ProviderTokenRequest,
    response: Response,
    accounts: AccountService = Depends(get_account_service),
    sessions: SessionManager = Depends(get_session_manager),
) -> ProviderRegisterResponse:
    """
    Register (or sign in) with a provider ID token.

    Responds 201 when this created the local record, 200 otherwise.
    """
    profile, is_new_user = await accounts.google_register(request.id_token)
    sessions.set_cookie(response, profile.uid)
    response.status_code = status.HTTP_201_CREATED if is_new_user else status.HTTP_200_OK
    return ProviderRegisterResponse(user=profile, is_new_user=is_new_user)


@router.post("/logout", response_model=LogoutResponse)
async def logout(
    response: Response,
    sessions: SessionManager = Depends(get_session_manager),
) -> LogoutResponse:
    """Clear the session cookie. Always succeeds."""
    sessions.clear_cookie(response)
    return LogoutResponse()


@router.get("/profile", response_model=UserProfile)
async def get_profile(
    identity: Identity = Depends(require_bearer_identity),
    accounts: AccountService = Depends(get_account_service),
) -> UserProfile:
    """Profile of the bearer-token caller."""
    return accounts.profile_for(identity)


@router.get("/me", response_model=UserProfile)
async def get_me(
    identity: Identity = RequireIdentity,
    accounts: AccountService = Depends(get_account_service),
) -> UserProfile:
    """Profile of the caller, authenticated by bearer token or session cookie."""
    return accounts.profile_for(identity)


@router.post("/forgot-password", response_model=MessageResponse)
async def forgot_password(
    request: ForgotPasswordRequest,
    accounts: AccountService = Depends(get_account_service),
) -> MessageResponse:
    """
    Request a password reset link.

    The response is identical whether or not the email is registered.
    """
    message = await accounts.forgot_password(request.email)
    return MessageResponse(message=message)


@router.post("/reset-password", response_model=MessageResponse)
async def reset_password(
    request: ResetPasswordRequest,
    accounts: AccountService = Depends(get_account_service),
) -> MessageResponse:
    """Redeem a reset token. Each token works once, until it expires."""
    message = await accounts.reset_password(request)
    return MessageResponse(message=message)


@router.post(
    "/create-user",
    response_model=UserProfile,
    status_code=201,
    dependencies=[RequireAdmin],
)
async def create_user(
    request: AdminCreateUserRequest,
    accounts: AccountService = Depends(get_account_service),
) -> UserProfile:
    """
    Provision an account as an administrator.

    Accepts an admin identity or a matching x-admin-secret header.
    """
    return await accounts.admin_create_user(request)
