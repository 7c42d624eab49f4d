"""
Team directory API endpoints.

Reading is public; member and department changes require an administrator.
"""

import math
from typing import Literal, Optional

from fastapi import APIRouter, Depends, Query

from api.dependencies import get_team_repository
from api.middleware.guards import RequireAdmin, optional_identity
from shared.models import Identity

from .exceptions import TeamMemberNotFoundError
from .models import (
    Department,
    DepartmentCreateRequest,
    DepartmentListResponse,
    MemberStatus,
    TeamMember,
    TeamMemberCreateRequest,
    TeamMemberListResponse,
    TeamMemberUpdateRequest,
)
from .repository import TeamRepository

router = APIRouter()


@router.get("", response_model=TeamMemberListResponse)
async def list_members(
    department: Optional[str] = Query(default=None),
    status: Optional[MemberStatus] = Query(default=None),
    role: Optional[str] = Query(default=None),
    skills: Optional[str] = Query(default=None, description="Comma-separated; matches any"),
    page: int = Query(default=1, ge=1),
    limit: int = Query(default=10, ge=1, le=100),
    sort_by: str = Query(default="role_value"),
    sort_order: Literal["asc", "desc"] = Query(default="asc"),
    team: TeamRepository = Depends(get_team_repository),
) -> TeamMemberListResponse:
    """Filtered, paginated team members, ordered by role seniority by default."""
    skill_list = [skill.strip() for skill in skills.split(",") if skill.strip()] if skills else None
    members, total = team.list_members(
        department=department,
        status=status,
        role=role,
        skills=skill_list,
        page=page,
        limit=limit,
        sort_by=sort_by,
        sort_order=sort_order,
    )
    return TeamMemberListResponse(
        members=members,
        total=total,
        page=page,
        limit=limit,
        total_pages=math.ceil(total / limit),
    )


@router.get("/departments", response_model=DepartmentListResponse)
async def list_departments(
    team: TeamRepository = Depends(get_team_repository),
) -> DepartmentListResponse:
    return DepartmentListResponse(departments=team.list_departments())


@router.get("/department/{department}", response_model=list[TeamMember])
async def list_department_members(
    department: str,
    status: Optional[MemberStatus] = Query(default=None),
    team: TeamRepository = Depends(get_team_repository),
) -> list[TeamMember]:
    """Members of one department (name matched ignoring case)."""
    return team.members_in_department(department, status)


@router.post("/departments", response_model=Department, status_code=201, dependencies=[RequireAdmin])
async def create_department(
    request: DepartmentCreateRequest,
    identity: Optional[Identity] = Depends(optional_identity),
    team: TeamRepository = Depends(get_team_repository),
) -> Department:
    """Create a department. Returns 409 if the name exists in any case."""
    created_by = identity.subject_id if identity else None
    return team.create_department(request.name, request.description, created_by=created_by)


@router.delete("/departments/{name}", status_code=204, dependencies=[RequireAdmin])
async def delete_department(
    name: str,
    team: TeamRepository = Depends(get_team_repository),
) -> None:
    """Delete a department. Returns 409 while members are assigned to it."""
    team.delete_department(name)


@router.get("/{member_id}", response_model=TeamMember)
async def get_member(
    member_id: str,
    team: TeamRepository = Depends(get_team_repository),
) -> TeamMember:
    member = team.get_member(member_id)
    if member is None:
        raise TeamMemberNotFoundError(member_id)
    return member


@router.post("", response_model=TeamMember, status_code=201, dependencies=[RequireAdmin])
async def create_member(
    request: TeamMemberCreateRequest,
    identity: Optional[Identity] = Depends(optional_identity),
    team: TeamRepository = Depends(get_team_repository),
) -> TeamMember:
    created_by = identity.subject_id if identity else None
    return team.create_member(request.model_dump(mode="json"), created_by=created_by)


@router.put("/{member_id}", response_model=TeamMember, dependencies=[RequireAdmin])
@router.patch("/{member_id}", response_model=TeamMember, dependencies=[RequireAdmin])
async def update_member(
    member_id: str,
    request: TeamMemberUpdateRequest,
    team: TeamRepository = Depends(get_team_repository),
) -> TeamMember:
    member = team.update_member(member_id, request.model_dump(mode="json", exclude_unset=True))
    if member is None:
        raise TeamMemberNotFoundError(member_id)
    return member


@router.delete("/{member_id}", status_code=204, dependencies=[RequireAdmin])
async def delete_member(
    member_id: str,
    team: TeamRepository = Depends(get_team_repository),
) -> None:
    if not team.delete_member(member_id):
        raise TeamMemberNotFoundError(member_id)
