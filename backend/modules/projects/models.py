"""
Projects module data models.
"""

from typing import Optional
from pydantic import AliasChoices, BaseModel, Field

from shared.models import Timestamped


class Project(BaseModel):
    """A showcased project embedded in a category."""

    id: Optional[str] = None
    title: str = Field(..., min_length=1)
    description: Optional[str] = None
    tags: list[str] = Field(default_factory=list)
    thumbnail: Optional[str] = None
    preview_url: Optional[str] = Field(None, validation_alias=AliasChoices("preview_url", "previewUrl"))
    is_featured: bool = Field(False, validation_alias=AliasChoices("is_featured", "isFeatured"))
    display_order: int = Field(0, validation_alias=AliasChoices("display_order", "order"))


class ProjectUpdateRequest(BaseModel):
    title: Optional[str] = Field(None, min_length=1)
    description: Optional[str] = None
    tags: Optional[list[str]] = None
    thumbnail: Optional[str] = None
    preview_url: Optional[str] = Field(None, validation_alias=AliasChoices("preview_url", "previewUrl"))
    is_featured: Optional[bool] = Field(None, validation_alias=AliasChoices("is_featured", "isFeatured"))
    display_order: Optional[int] = Field(None, validation_alias=AliasChoices("display_order", "order"))


class ProjectCategory(Timestamped):
    id: str
    slug: str
    name: str
    description: Optional[str] = None
    display_order: int = 0
    is_active: bool = True
    projects: list[Project] = Field(default_factory=list)
    created_by: Optional[str] = None


class ProjectCategoryCreateRequest(BaseModel):
    """New category. The slug defaults to the slugified name."""

    slug: Optional[str] = Field(None, validation_alias=AliasChoices("slug", "id"))
    name: str = Field(..., min_length=1)
    description: Optional[str] = None
    display_order: int = Field(0, validation_alias=AliasChoices("display_order", "order"))
    is_active: bool = Field(True, validation_alias=AliasChoices("is_active", "isActive"))
    projects: list[Project] = Field(default_factory=list)


class ProjectCategoryUpdateRequest(BaseModel):
    slug: Optional[str] = None
    name: Optional[str] = Field(None, min_length=1)
    description: Optional[str] = None
    display_order: Optional[int] = Field(None, validation_alias=AliasChoices("display_order", "order"))
    is_active: Optional[bool] = Field(None, validation_alias=AliasChoices("is_active", "isActive"))


class ProjectCategoryListResponse(BaseModel):
    categories: list[ProjectCategory]
