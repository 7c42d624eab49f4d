"""
User management API endpoints.

Administrators list and moderate accounts. Each user may read and edit
their own record; the {user_id} path segment accepts either the database
id or the identity provider uid.
"""

import logging
from typing import Optional

from fastapi import APIRouter, Depends, Query

from api.dependencies import get_identity_provider, get_user_repository
from api.middleware.guards import RequireAdmin, require_owner_or_admin
from modules.auth.authorization import AccessContext
from modules.auth.interfaces import IIdentityProvider

from .exceptions import UserNotFoundError
from .models import (
    RoleUpdateRequest,
    StatusUpdateRequest,
    User,
    UserListResponse,
    UserProfile,
    UserRole,
    UserRoleResponse,
    UserStatus,
    UserStatusResponse,
    UserUpdateRequest,
)
from .repository import UserRepository

logger = logging.getLogger(__name__)

router = APIRouter()

RequireOwnerOrAdmin = Depends(require_owner_or_admin("user_id"))

ADMIN_ONLY_FIELDS = ("role", "status")


def _load(user_id: str, users: UserRepository) -> User:
    user = users.find_by_identity_id(user_id)
    if user is None:
        raise UserNotFoundError(user_id)
    return user


@router.get("", response_model=UserListResponse, dependencies=[RequireAdmin])
async def list_users(
    users: UserRepository = Depends(get_user_repository),
) -> UserListResponse:
    """All users, newest first."""
    items, total = users.list_users()
    return UserListResponse(users=items, total=total)


@router.get("/status/all", response_model=UserListResponse, dependencies=[RequireAdmin])
async def list_users_by_status(
    status: Optional[UserStatus] = Query(default=None),
    users: UserRepository = Depends(get_user_repository),
) -> UserListResponse:
    items, total = users.list_users(status=status)
    return UserListResponse(users=items, total=total)


@router.get("/role/all", response_model=UserListResponse, dependencies=[RequireAdmin])
async def list_users_by_role(
    role: Optional[UserRole] = Query(default=None),
    users: UserRepository = Depends(get_user_repository),
) -> UserListResponse:
    items, total = users.list_users(role=role)
    return UserListResponse(users=items, total=total)


@router.get("/{user_id}/status", response_model=UserStatusResponse, dependencies=[RequireAdmin])
async def get_user_status(
    user_id: str,
    users: UserRepository = Depends(get_user_repository),
) -> UserStatusResponse:
    user = _load(user_id, users)
    return UserStatusResponse(id=user.id, status=user.status)


@router.patch("/{user_id}/status", response_model=UserStatusResponse, dependencies=[RequireAdmin])
async def update_user_status(
    user_id: str,
    request: StatusUpdateRequest,
    users: UserRepository = Depends(get_user_repository),
) -> UserStatusResponse:
    user = _load(user_id, users)
    updated = users.update_user(user.id, {"status": request.status})
    if updated is None:
        raise UserNotFoundError(user_id)
    logger.info(f"User {user.id} status set to {request.status.value}")
    return UserStatusResponse(id=updated.id, status=updated.status)


@router.get("/{user_id}/role", response_model=UserRoleResponse, dependencies=[RequireOwnerOrAdmin])
async def get_user_role(
    user_id: str,
    users: UserRepository = Depends(get_user_repository),
) -> UserRoleResponse:
    user = _load(user_id, users)
    return UserRoleResponse(id=user.id, role=user.role)


@router.patch("/{user_id}/role", response_model=UserRoleResponse, dependencies=[RequireAdmin])
async def update_user_role(
    user_id: str,
    request: RoleUpdateRequest,
    users: UserRepository = Depends(get_user_repository),
) -> UserRoleResponse:
    user = _load(user_id, users)
    updated = users.update_user(user.id, {"role": request.role})
    if updated is None:
        raise UserNotFoundError(user_id)
    logger.info(f"User {user.id} role set to {request.role.value}")
    return UserRoleResponse(id=updated.id, role=updated.role)


@router.get("/{user_id}", response_model=UserProfile)
async def get_user(
    user_id: str,
    access: AccessContext = RequireOwnerOrAdmin,
    users: UserRepository = Depends(get_user_repository),
) -> UserProfile:
    """A user's profile. Owner or admin only."""
    return UserProfile.from_user(_load(user_id, users))


@router.put("/{user_id}", response_model=UserProfile)
@router.patch("/{user_id}", response_model=UserProfile)
async def update_user(
    user_id: str,
    request: UserUpdateRequest,
    access: AccessContext = RequireOwnerOrAdmin,
    users: UserRepository = Depends(get_user_repository),
) -> UserProfile:
    """
    Update a profile. Owner or admin only.

    role and status are silently ignored unless the caller is an admin.
    """
    user = _load(user_id, users)
    changes = request.model_dump(exclude_unset=True)
    if not access.is_admin:
        for field in ADMIN_ONLY_FIELDS:
            changes.pop(field, None)
    if not changes:
        return UserProfile.from_user(user)
    updated = users.update_user(user.id, changes)
    if updated is None:
        raise UserNotFoundError(user_id)
    return UserProfile.from_user(updated)


@router.delete("/{user_id}", status_code=204, dependencies=[RequireAdmin])
async def delete_user(
    user_id: str,
    users: UserRepository = Depends(get_user_repository),
    provider: IIdentityProvider = Depends(get_identity_provider),
) -> None:
    """
    Delete an account: the provider identity first, then the local record.

    If the provider deletion fails the local record is kept.
    """
    user = _load(user_id, users)
    await provider.delete_user(user.firebase_uid)
    users.delete_user(user.id)
    logger.info(f"Deleted user {user.id} ({user.firebase_uid})")
