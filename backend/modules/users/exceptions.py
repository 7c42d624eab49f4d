"""
User module exceptions.
"""

from shared.exceptions import NotFoundError


class UserNotFoundError(NotFoundError):
    """Raised when no local user record matches an id."""

    def __init__(self, user_id: str):
        super().__init__(
            f"User not found: {user_id}",
            code="USER_NOT_FOUND",
            details={"user_id": user_id},
        )
