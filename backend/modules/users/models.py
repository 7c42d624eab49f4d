"""
User module data models.

The local user record is a projection of the identity provider's
account, keyed by the provider uid and carrying the role used for
authorization decisions.
"""

from datetime import datetime
from enum import Enum
from typing import Optional
from pydantic import AliasChoices, BaseModel, Field, field_validator


class UserRole(str, Enum):
    USER = "user"
    ADMIN = "admin"
    MODERATOR = "moderator"


class UserStatus(str, Enum):
    ACTIVE = "active"
    INACTIVE = "inactive"
    SUSPENDED = "suspended"
    PENDING = "pending"


class User(BaseModel):
    """A stored user record."""

    id: str = Field(..., description="Database id (UUID)")
    firebase_uid: str = Field(..., description="External identity id")
    email: Optional[str] = None
    display_name: Optional[str] = None
    phone_number: Optional[str] = None
    address: Optional[str] = None
    photo_url: Optional[str] = None
    provider: Optional[str] = None
    role: UserRole = UserRole.USER
    status: UserStatus = UserStatus.ACTIVE
    terms_accepted: bool = False
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @field_validator("role", mode="before")
    @classmethod
    def _default_role(cls, value):
        # Records written before roles existed have no role; they are plain users.
        return value or UserRole.USER

    @field_validator("status", mode="before")
    @classmethod
    def _default_status(cls, value):
        return value or UserStatus.ACTIVE

    @field_validator("terms_accepted", mode="before")
    @classmethod
    def _default_terms(cls, value):
        return bool(value)

    def has_identity_id(self, identity_id: str) -> bool:
        """Whether an id names this user in either id shape."""
        return identity_id in (self.id, self.firebase_uid)


class UserProfile(BaseModel):
    """Profile returned to the account owner."""

    id: Optional[str] = None
    uid: str
    email: Optional[str] = None
    display_name: Optional[str] = None
    phone_number: Optional[str] = None
    address: Optional[str] = None
    photo_url: Optional[str] = None
    provider: Optional[str] = None
    role: UserRole = UserRole.USER
    status: Optional[UserStatus] = None
    created_at: Optional[datetime] = None

    @classmethod
    def from_user(cls, user: User) -> "UserProfile":
        return cls(
            id=user.id,
            uid=user.firebase_uid,
            email=user.email,
            display_name=user.display_name,
            phone_number=user.phone_number,
            address=user.address,
            photo_url=user.photo_url,
            provider=user.provider,
            role=user.role,
            status=user.status,
            created_at=user.created_at,
        )


class UserUpdateRequest(BaseModel):
    """
    Partial profile update.

    role and status are honoured only for administrators; the route
    drops them for everyone else.
    """

    display_name: Optional[str] = Field(
        None, validation_alias=AliasChoices("display_name", "name", "displayName")
    )
    phone_number: Optional[str] = Field(
        None, validation_alias=AliasChoices("phone_number", "phone", "phoneNumber")
    )
    address: Optional[str] = None
    photo_url: Optional[str] = Field(
        None, validation_alias=AliasChoices("photo_url", "photoURL", "image")
    )
    role: Optional[UserRole] = None
    status: Optional[UserStatus] = None


class StatusUpdateRequest(BaseModel):
    status: UserStatus


class RoleUpdateRequest(BaseModel):
    role: UserRole


class UserStatusResponse(BaseModel):
    id: str
    status: UserStatus


class UserRoleResponse(BaseModel):
    id: str
    role: UserRole


class UserListResponse(BaseModel):
    users: list[User]
    total: int
