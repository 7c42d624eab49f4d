"""
Services module data models.
"""

from enum import Enum
from typing import Optional
from pydantic import AliasChoices, BaseModel, Field

from shared.models import Timestamped


class ServiceStatus(str, Enum):
    ACTIVE = "active"
    INACTIVE = "inactive"
    DRAFT = "draft"


class ServiceImages(BaseModel):
    thumbnail: Optional[str] = None
    gallery: list[str] = Field(default_factory=list)


class ServiceLinks(BaseModel):
    live_demo: Optional[str] = Field(None, validation_alias=AliasChoices("live_demo", "liveDemo"))
    youtube_demo: Optional[str] = Field(None, validation_alias=AliasChoices("youtube_demo", "youtubeDemo"))
    github_repo: Optional[str] = Field(None, validation_alias=AliasChoices("github_repo", "githubRepo"))


class ServiceFields(BaseModel):
    short_description: Optional[str] = Field(
        None, validation_alias=AliasChoices("short_description", "shortDescription")
    )
    tags: list[str] = Field(default_factory=list)
    images: ServiceImages = Field(default_factory=ServiceImages)
    links: ServiceLinks = Field(default_factory=ServiceLinks)
    base_price: float = Field(0, ge=0, validation_alias=AliasChoices("base_price", "basePrice"))
    currency: str = "USD"
    delivery_time_days: Optional[int] = Field(
        None, ge=0, validation_alias=AliasChoices("delivery_time_days", "deliveryTimeDays")
    )
    features: list[str] = Field(default_factory=list)
    technologies: list[str] = Field(default_factory=list)
    requirements: dict[str, bool] = Field(default_factory=dict)
    status: ServiceStatus = ServiceStatus.ACTIVE


class ServiceCreateRequest(ServiceFields):
    title: str = Field(..., min_length=1)
    category: str = Field(..., min_length=1)


class ServiceUpdateRequest(BaseModel):
    title: Optional[str] = Field(None, min_length=1)
    category: Optional[str] = Field(None, min_length=1)
    short_description: Optional[str] = Field(
        None, validation_alias=AliasChoices("short_description", "shortDescription")
    )
    tags: Optional[list[str]] = None
    images: Optional[ServiceImages] = None
    links: Optional[ServiceLinks] = None
    base_price: Optional[float] = Field(None, ge=0, validation_alias=AliasChoices("base_price", "basePrice"))
    currency: Optional[str] = None
    delivery_time_days: Optional[int] = Field(
        None, ge=0, validation_alias=AliasChoices("delivery_time_days", "deliveryTimeDays")
    )
    features: Optional[list[str]] = None
    technologies: Optional[list[str]] = None
    requirements: Optional[dict[str, bool]] = None
    status: Optional[ServiceStatus] = None


class Service(ServiceFields, Timestamped):
    id: str
    title: str
    category: str
    created_by: Optional[str] = None


class ServiceListResponse(BaseModel):
    services: list[Service]
    total: int
    skip: int
    limit: int
    has_more: bool


class ServiceCategoriesResponse(BaseModel):
    categories: list[str]
