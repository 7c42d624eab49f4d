"""
Pricing module data models.
"""

from enum import Enum
from typing import Any, Optional
from pydantic import AliasChoices, BaseModel, Field

from shared.models import Timestamped


class PlanType(str, Enum):
    FIXED = "fixed"
    CUSTOM = "custom"


class BillingCycle(str, Enum):
    MONTHLY = "monthly"
    YEARLY = "yearly"
    CUSTOM = "custom"


class PlanPrice(BaseModel):
    """Plan price per currency; None means "contact us"."""

    usd: Optional[float] = Field(None, ge=0, validation_alias=AliasChoices("usd", "USD"))
    bdt: Optional[float] = Field(None, ge=0, validation_alias=AliasChoices("bdt", "BDT"))


class PricingPlan(BaseModel):
    id: Optional[str] = None
    name: str = Field(..., min_length=1)
    description: Optional[str] = None
    type: PlanType = PlanType.FIXED
    popular: bool = False
    price: PlanPrice = Field(default_factory=PlanPrice)
    billing_cycle: BillingCycle = Field(
        BillingCycle.MONTHLY, validation_alias=AliasChoices("billing_cycle", "billingCycle")
    )
    features: list[str] = Field(default_factory=list)
    cta: Optional[dict[str, Any]] = None
    display_order: int = Field(0, validation_alias=AliasChoices("display_order", "order"))


class PlanUpdateRequest(BaseModel):
    name: Optional[str] = Field(None, min_length=1)
    description: Optional[str] = None
    type: Optional[PlanType] = None
    popular: Optional[bool] = None
    price: Optional[PlanPrice] = None
    billing_cycle: Optional[BillingCycle] = Field(
        None, validation_alias=AliasChoices("billing_cycle", "billingCycle")
    )
    features: Optional[list[str]] = None
    cta: Optional[dict[str, Any]] = None
    display_order: Optional[int] = Field(None, validation_alias=AliasChoices("display_order", "order"))


class PricingCategory(Timestamped):
    id: str
    slug: str
    name: str
    display_order: int = 0
    is_active: bool = True
    plans: list[PricingPlan] = Field(default_factory=list)
    created_by: Optional[str] = None


class PricingCategoryCreateRequest(BaseModel):
    """New category. The slug defaults to the slugified name."""

    slug: Optional[str] = Field(None, validation_alias=AliasChoices("slug", "id"))
    name: str = Field(..., min_length=1)
    display_order: int = Field(0, validation_alias=AliasChoices("display_order", "order"))
    is_active: bool = Field(True, validation_alias=AliasChoices("is_active", "isActive"))
    plans: list[PricingPlan] = Field(default_factory=list)


class PricingCategoryUpdateRequest(BaseModel):
    slug: Optional[str] = None
    name: Optional[str] = Field(None, min_length=1)
    display_order: Optional[int] = Field(None, validation_alias=AliasChoices("display_order", "order"))
    is_active: Optional[bool] = Field(None, validation_alias=AliasChoices("is_active", "isActive"))


class PricingResponse(BaseModel):
    categories: list[PricingCategory]
