"""
Portfolio project API endpoints.

Reading is public; changes require an administrator.
"""

from typing import Literal, Optional

from fastapi import APIRouter, Depends, Query

from api.dependencies import get_project_repository
from api.middleware.guards import RequireAdmin, optional_identity
from shared.models import Identity

from .models import (
    Project,
    ProjectCategory,
    ProjectCategoryCreateRequest,
    ProjectCategoryListResponse,
    ProjectCategoryUpdateRequest,
    ProjectUpdateRequest,
)
from .repository import ProjectCategoryRepository

router = APIRouter()


@router.get("", response_model=ProjectCategoryListResponse)
async def list_project_categories(
    is_active: Optional[bool] = Query(default=None),
    sort_by: str = Query(default="display_order"),
    sort_order: Literal["asc", "desc"] = Query(default="asc"),
    projects: ProjectCategoryRepository = Depends(get_project_repository),
) -> ProjectCategoryListResponse:
    """All portfolio categories with their projects."""
    return ProjectCategoryListResponse(categories=projects.list_categories(is_active, sort_by, sort_order))


@router.get("/categories/{category_id}", response_model=ProjectCategory)
async def get_project_category(
    category_id: str,
    projects: ProjectCategoryRepository = Depends(get_project_repository),
) -> ProjectCategory:
    return projects.get_category(category_id)


@router.post("/categories", response_model=ProjectCategory, status_code=201, dependencies=[RequireAdmin])
async def create_project_category(
    request: ProjectCategoryCreateRequest,
    identity: Optional[Identity] = Depends(optional_identity),
    projects: ProjectCategoryRepository = Depends(get_project_repository),
) -> ProjectCategory:
    created_by = identity.subject_id if identity else None
    return projects.create_category(request.model_dump(mode="json"), created_by=created_by)


@router.put("/categories/{category_id}", response_model=ProjectCategory, dependencies=[RequireAdmin])
@router.patch("/categories/{category_id}", response_model=ProjectCategory, dependencies=[RequireAdmin])
async def update_project_category(
    category_id: str,
    request: ProjectCategoryUpdateRequest,
    projects: ProjectCategoryRepository = Depends(get_project_repository),
) -> ProjectCategory:
    return projects.update_category(category_id, request.model_dump(mode="json", exclude_unset=True))


@router.delete("/categories/{category_id}", status_code=204, dependencies=[RequireAdmin])
async def delete_project_category(
    category_id: str,
    projects: ProjectCategoryRepository = Depends(get_project_repository),
) -> None:
    projects.delete_category(category_id)


@router.post(
    "/categories/{category_id}/projects",
    response_model=ProjectCategory,
    status_code=201,
    dependencies=[RequireAdmin],
)
async def add_project(
    category_id: str,
    request: Project,
    projects: ProjectCategoryRepository = Depends(get_project_repository),
) -> ProjectCategory:
    """Add a project. Its id defaults to the slugified title; duplicates are 409."""
    return projects.add_item(category_id, request.model_dump(mode="json"))


@router.put(
    "/categories/{category_id}/projects/{project_id}",
    response_model=ProjectCategory,
    dependencies=[RequireAdmin],
)
@router.patch(
    "/categories/{category_id}/projects/{project_id}",
    response_model=ProjectCategory,
    dependencies=[RequireAdmin],
)
async def update_project(
    category_id: str,
    project_id: str,
    request: ProjectUpdateRequest,
    projects: ProjectCategoryRepository = Depends(get_project_repository),
) -> ProjectCategory:
    return projects.update_item(category_id, project_id, request.model_dump(mode="json", exclude_unset=True))


@router.delete(
    "/categories/{category_id}/projects/{project_id}",
    response_model=ProjectCategory,
    dependencies=[RequireAdmin],
)
async def remove_project(
    category_id: str,
    project_id: str,
    projects: ProjectCategoryRepository = Depends(get_project_repository),
) -> ProjectCategory:
    return projects.remove_item(category_id, project_id)
