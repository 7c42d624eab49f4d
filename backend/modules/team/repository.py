"""
Team repository for database access.

Covers the `team_members` and `departments` tables. Department names
match case-insensitively everywhere.
"""

from typing import Any, Optional

from shared.exceptions import ValidationError
from shared.repository import BaseRepository, escape_like, is_database_id, slugify, utc_now
from .exceptions import DepartmentExistsError, DepartmentInUseError, DepartmentNotFoundError
from .models import Department, MemberStatus, TeamMember

MEMBERS = "team_members"
DEPARTMENTS = "departments"

SORTABLE_FIELDS = {"role_value", "name", "department", "joined_date", "created_at"}


class TeamRepository(BaseRepository[TeamMember]):
    """Repository for team members and departments."""

    # -------------------------------------------------------------------------
    # Members
    # -------------------------------------------------------------------------

    def list_members(
        self,
        department: Optional[str] = None,
        status: Optional[MemberStatus] = None,
        role: Optional[str] = None,
        skills: Optional[list[str]] = None,
        page: int = 1,
        limit: int = 10,
        sort_by: str = "role_value",
        sort_order: str = "asc",
    ) -> tuple[list[TeamMember], int]:
        """
        Filtered page of members.

        department matches exactly (ignoring case); role matches as a
        case-insensitive substring; skills matches members with any of them.
        """
        if sort_by not in SORTABLE_FIELDS:
            raise ValidationError(
                f"Cannot sort by '{sort_by}'",
                code="INVALID_SORT",
                details={"allowed": sorted(SORTABLE_FIELDS)},
            )
        query = self._db.table(MEMBERS).select("*", count="exact")
        if department:
            query = query.ilike("department", escape_like(department))
        if status is not None:
            query = query.eq("status", status.value)
        if role:
            query = query.ilike("role", f"%{escape_like(role)}%")
        if skills:
            query = query.ov("skills", skills)
        offset = (page - 1) * limit
        query = query.order(sort_by, desc=sort_order.lower() == "desc").range(offset, offset + limit - 1)
        result = self._execute(query)
        members = [TeamMember.model_validate(row) for row in result.data]
        total = result.count if result.count is not None else len(members)
        return members, total

    def members_in_department(self, department: str, status: Optional[MemberStatus] = None) -> list[TeamMember]:
        query = self._db.table(MEMBERS).select("*").ilike("department", escape_like(department))
        if status is not None:
            query = query.eq("status", status.value)
        result = self._execute(query.order("role_value"))
        return [TeamMember.model_validate(row) for row in result.data]

    def _find_member_row(self, identifier: str) -> Optional[dict[str, Any]]:
        result = self._execute(self._db.table(MEMBERS).select("*").eq("slug", identifier).limit(1))
        if result.data:
            return result.data[0]
        if is_database_id(identifier):
            result = self._execute(self._db.table(MEMBERS).select("*").eq("id", identifier).limit(1))
            if result.data:
                return result.data[0]
        return None

    def get_member(self, identifier: str) -> Optional[TeamMember]:
        """Look up a member by slug, then by database id."""
        row = self._find_member_row(identifier)
        return TeamMember.model_validate(row) if row else None

    def create_member(self, data: dict[str, Any], created_by: Optional[str] = None) -> TeamMember:
        row = dict(data)
        row["slug"] = slugify(row.get("slug") or row["name"])
        if not row["slug"]:
            raise ValidationError("Member name must contain letters or digits", code="INVALID_NAME")
        row["created_by"] = created_by
        result = self._execute(
            self._db.table(MEMBERS).insert(row),
            conflict_message=f"Team member '{row['slug']}' already exists",
        )
        return TeamMember.model_validate(result.data[0])

    def update_member(self, identifier: str, changes: dict[str, Any]) -> Optional[TeamMember]:
        row = self._find_member_row(identifier)
        if row is None:
            return None
        payload = {k: v for k, v in changes.items() if k not in ("id", "created_by", "created_at")}
        if "slug" in payload:
            payload["slug"] = slugify(payload["slug"])
        payload["updated_at"] = utc_now().isoformat()
        result = self._execute(
            self._db.table(MEMBERS).update(payload).eq("id", row["id"]),
            conflict_message="Team member slug already exists",
        )
        return TeamMember.model_validate(result.data[0]) if result.data else None

    def delete_member(self, identifier: str) -> bool:
        row = self._find_member_row(identifier)
        if row is None:
            return False
        self._execute(self._db.table(MEMBERS).delete().eq("id", row["id"]))
        return True

    # -------------------------------------------------------------------------
    # Departments
    # -------------------------------------------------------------------------

    def list_departments(self) -> list[Department]:
        result = self._execute(self._db.table(DEPARTMENTS).select("*").order("name"))
        return [Department.model_validate(row) for row in result.data]

    def _find_department(self, name: str) -> Optional[dict[str, Any]]:
        result = self._execute(
            self._db.table(DEPARTMENTS).select("*").ilike("name", escape_like(name.strip())).limit(1)
        )
        return result.data[0] if result.data else None

    def create_department(
        self,
        name: str,
        description: Optional[str] = None,
        created_by: Optional[str] = None,
    ) -> Department:
        """
        Raises:
            DepartmentExistsError: If a department with that name (ignoring case) exists
        """
        name = name.strip()
        if self._find_department(name) is not None:
            raise DepartmentExistsError(name)
        result = self._execute(
            self._db.table(DEPARTMENTS).insert(
                {"name": name, "description": description, "created_by": created_by}
            ),
            conflict_message=f"Department already exists: {name}",
        )
        return Department.model_validate(result.data[0])

    def delete_department(self, name: str) -> None:
        """
        Delete a department that has no members.

        Raises:
            DepartmentInUseError: If members are still assigned to it
            DepartmentNotFoundError: If no department has that name
        """
        name = name.strip()
        members = self._execute(
            self._db.table(MEMBERS).select("id", count="exact").ilike("department", escape_like(name))
        )
        member_count = members.count if members.count is not None else len(members.data)
        if member_count:
            raise DepartmentInUseError(name, member_count)
        row = self._find_department(name)
        if row is None:
            raise DepartmentNotFoundError(name)
        self._execute(self._db.table(DEPARTMENTS).delete().eq("id", row["id"]))
