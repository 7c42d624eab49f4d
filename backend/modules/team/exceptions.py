"""
Team module exceptions.
"""

from shared.exceptions import ConflictError, NotFoundError


class TeamMemberNotFoundError(NotFoundError):
    """Raised when no team member matches a slug or id."""

    def __init__(self, member_id: str):
        super().__init__(
            f"Team member not found: {member_id}",
            code="TEAM_MEMBER_NOT_FOUND",
            details={"member_id": member_id},
        )


class DepartmentNotFoundError(NotFoundError):
    def __init__(self, name: str):
        super().__init__(
            f"Department not found: {name}",
            code="DEPARTMENT_NOT_FOUND",
            details={"department": name},
        )


class DepartmentExistsError(ConflictError):
    def __init__(self, name: str):
        super().__init__(
            f"Department already exists: {name}",
            code="DEPARTMENT_EXISTS",
            details={"department": name},
        )


class DepartmentInUseError(ConflictError):
    """Raised when deleting a department that still has members."""

    def __init__(self, name: str, member_count: int):
        super().__init__(
            f"Department {name} still has {member_count} member(s)",
            code="DEPARTMENT_IN_USE",
            details={"department": name, "member_count": member_count},
        )
