"""
Users module.

Local user records (the projection of provider accounts), the role
lookup behind every authorization decision, and user management routes.

Public API:
- UserRepository: Record storage and role lookup by either id shape
- User, UserProfile, UserRole, UserStatus: Models
"""

from .models import User, UserProfile, UserRole, UserStatus
from .repository import UserRepository
from .exceptions import UserNotFoundError

__all__ = [
    "User",
    "UserProfile",
    "UserRole",
    "UserStatus",
    "UserRepository",
    "UserNotFoundError",
]
