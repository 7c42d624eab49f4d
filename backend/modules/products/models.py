"""
Product module data models.
"""

from enum import Enum
from typing import Any, Optional
from pydantic import AliasChoices, BaseModel, Field

from shared.models import Timestamped


class ProductStatus(str, Enum):
    ACTIVE = "active"
    INACTIVE = "inactive"


class ProductFields(BaseModel):
    """Editable product fields, shared by requests and stored rows."""

    tagline: Optional[str] = None
    description: Optional[str] = None
    category: Optional[str] = None
    price: Optional[float] = Field(None, ge=0)
    stock: Optional[int] = Field(None, ge=0)
    cover_image: Optional[dict[str, Any]] = Field(
        None, validation_alias=AliasChoices("cover_image", "coverImage")
    )
    badge: Optional[dict[str, Any]] = None
    live_link: Optional[str] = Field(None, validation_alias=AliasChoices("live_link", "liveLink"))
    repo_link: Optional[str] = Field(None, validation_alias=AliasChoices("repo_link", "repoLink"))
    highlights: list[dict[str, Any]] = Field(default_factory=list)
    features: list[str] = Field(default_factory=list)
    cta: Optional[dict[str, Any]] = None
    theme: Optional[dict[str, Any]] = None
    status: ProductStatus = ProductStatus.ACTIVE
    display_order: int = Field(0, validation_alias=AliasChoices("display_order", "order"))


class ProductCreateRequest(ProductFields):
    """New product. The slug defaults to the slugified title."""

    title: str = Field(..., min_length=1)
    slug: Optional[str] = None


class ProductUpdateRequest(BaseModel):
    """Partial product update; only fields present in the body change."""

    slug: Optional[str] = None
    title: Optional[str] = Field(None, min_length=1)
    tagline: Optional[str] = None
    description: Optional[str] = None
    category: Optional[str] = None
    price: Optional[float] = Field(None, ge=0)
    stock: Optional[int] = Field(None, ge=0)
    cover_image: Optional[dict[str, Any]] = Field(
        None, validation_alias=AliasChoices("cover_image", "coverImage")
    )
    badge: Optional[dict[str, Any]] = None
    live_link: Optional[str] = Field(None, validation_alias=AliasChoices("live_link", "liveLink"))
    repo_link: Optional[str] = Field(None, validation_alias=AliasChoices("repo_link", "repoLink"))
    highlights: Optional[list[dict[str, Any]]] = None
    features: Optional[list[str]] = None
    cta: Optional[dict[str, Any]] = None
    theme: Optional[dict[str, Any]] = None
    status: Optional[ProductStatus] = None
    display_order: Optional[int] = Field(None, validation_alias=AliasChoices("display_order", "order"))


class Product(ProductFields, Timestamped):
    """A stored product."""

    id: str
    slug: str
    title: str
    created_by: Optional[str] = Field(None, description="Subject id of the poster")


class ProductListItem(Product):
    owned_by_me: bool = False


class ProductListResponse(BaseModel):
    products: list[ProductListItem]
    count: int
