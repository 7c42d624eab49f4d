"""
Authorization guards.

FastAPI dependencies that gate routes on the identity attached by
IdentityResolutionMiddleware.

Usage:
    @router.get("/me")
    async def me(identity: Identity = RequireIdentity): ...

    @router.get("/{user_id}", dependencies=[Depends(require_owner_or_admin("user_id"))])
    async def get_user(user_id: str): ...
"""

import logging
from typing import Callable, Optional

from fastapi import Depends, Header, Request

from modules.auth.authorization import AccessContext, admin_secret_matches, resolve_access
from modules.auth.exceptions import InsufficientPermissionsError, MissingTokenError
from modules.users.repository import UserRepository
from shared.config import get_settings
from shared.models import Identity, IdentitySource

from ..dependencies import get_user_repository
from .auth import get_request_identity

logger = logging.getLogger(__name__)


async def optional_identity(request: Request) -> Optional[Identity]:
    """Identity if one resolved, else None. Never rejects."""
    return get_request_identity(request)


async def require_any_identity(request: Request) -> Identity:
    """
    Dependency that requires a bearer or session identity.

    Raises:
        MissingTokenError: (401) when neither channel resolved
    """
    identity = get_request_identity(request)
    if identity is None:
        raise MissingTokenError()
    return identity


async def require_bearer_identity(request: Request) -> Identity:
    """Dependency that requires a verified bearer token specifically."""
    identity = get_request_identity(request)
    if identity is None or identity.source == IdentitySource.SESSION:
        raise MissingTokenError("Bearer token required")
    return identity


async def current_access(
    identity: Identity = Depends(require_any_identity),
    users: UserRepository = Depends(get_user_repository),
) -> AccessContext:
    """The caller's stored record and admin status. Requires an identity."""
    return resolve_access(identity, users, get_settings().admin_claim_fallback)


async def optional_access(
    identity: Optional[Identity] = Depends(optional_identity),
    users: UserRepository = Depends(get_user_repository),
) -> Optional[AccessContext]:
    if identity is None:
        return None
    return resolve_access(identity, users, get_settings().admin_claim_fallback)


async def require_admin(
    request: Request,
    x_admin_secret: Optional[str] = Header(default=None, alias="x-admin-secret"),
    users: UserRepository = Depends(get_user_repository),
) -> Optional[AccessContext]:
    """
    Dependency that requires administrator access.

    A matching x-admin-secret header passes without any identity and
    yields None. Otherwise the caller must resolve to an admin.

    Raises:
        MissingTokenError: (401) no secret match and no identity
        InsufficientPermissionsError: (403) identity is not an admin
    """
    settings = get_settings()
    if admin_secret_matches(x_admin_secret, settings.admin_secret):
        logger.info(f"Admin secret accepted for {request.method} {request.url.path}")
        return None

    identity = get_request_identity(request)
    if identity is None:
        raise MissingTokenError()

    access = resolve_access(identity, users, settings.admin_claim_fallback)
    if not access.is_admin:
        logger.warning(f"Admin access denied for {identity.subject_id} on {request.url.path}")
        raise InsufficientPermissionsError("Admin access required", required_role="admin")
    return access


def authorize_owner_or_admin(access: AccessContext, owner_id: Optional[str]) -> None:
    """
    Check ownership of a resource whose owner id is only known after loading it.

    Raises:
        InsufficientPermissionsError: (403) caller is neither admin nor owner
    """
    if access.is_admin or access.owns(owner_id):
        return
    logger.info(f"Owner check failed for {access.identity.subject_id}")
    raise InsufficientPermissionsError("You can only access your own resources")


def require_owner_or_admin(param: str = "user_id") -> Callable[..., AccessContext]:
    """
    Dependency factory: the path parameter `param` must name the caller, or the caller is admin.

    The id may be either the caller's database id or external id.
    """

    async def dependency(request: Request, access: AccessContext = Depends(current_access)) -> AccessContext:
        authorize_owner_or_admin(access, request.path_params.get(param))
        return access

    return dependency


# Type aliases for cleaner route definitions
RequireIdentity = Depends(require_any_identity)
OptionalIdentity = Depends(optional_identity)
RequireAdmin = Depends(require_admin)
RequireAccess = Depends(current_access)
