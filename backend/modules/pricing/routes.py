"""
Pricing API endpoints.

Reading is public. Category and plan changes require an administrator
(or the x-admin-secret header).
"""

from typing import Literal, Optional

from fastapi import APIRouter, Depends, Query

from api.dependencies import get_pricing_repository
from api.middleware.guards import RequireAdmin, optional_identity
from shared.models import Identity

from .models import (
    PlanUpdateRequest,
    PricingCategory,
    PricingCategoryCreateRequest,
    PricingCategoryUpdateRequest,
    PricingPlan,
    PricingResponse,
)
from .repository import PricingRepository

router = APIRouter()


@router.get("", response_model=PricingResponse)
async def list_pricing(
    is_active: Optional[bool] = Query(default=None),
    sort_by: str = Query(default="display_order"),
    sort_order: Literal["asc", "desc"] = Query(default="asc"),
    pricing: PricingRepository = Depends(get_pricing_repository),
) -> PricingResponse:
    """All pricing categories with their plans."""
    return PricingResponse(categories=pricing.list_categories(is_active, sort_by, sort_order))


@router.get("/categories/{category_id}", response_model=PricingCategory)
async def get_category(
    category_id: str,
    pricing: PricingRepository = Depends(get_pricing_repository),
) -> PricingCategory:
    """One category, addressed by slug or database id."""
    return pricing.get_category(category_id)


@router.post("/categories", response_model=PricingCategory, status_code=201, dependencies=[RequireAdmin])
async def create_category(
    request: PricingCategoryCreateRequest,
    identity: Optional[Identity] = Depends(optional_identity),
    pricing: PricingRepository = Depends(get_pricing_repository),
) -> PricingCategory:
    """Create a category. Returns 409 if its slug is taken."""
    created_by = identity.subject_id if identity else None
    return pricing.create_category(request.model_dump(mode="json"), created_by=created_by)


@router.put("/categories/{category_id}", response_model=PricingCategory, dependencies=[RequireAdmin])
@router.patch("/categories/{category_id}", response_model=PricingCategory, dependencies=[RequireAdmin])
async def update_category(
    category_id: str,
    request: PricingCategoryUpdateRequest,
    pricing: PricingRepository = Depends(get_pricing_repository),
) -> PricingCategory:
    return pricing.update_category(category_id, request.model_dump(mode="json", exclude_unset=True))


@router.delete("/categories/{category_id}", status_code=204, dependencies=[RequireAdmin])
async def delete_category(
    category_id: str,
    pricing: PricingRepository = Depends(get_pricing_repository),
) -> None:
    pricing.delete_category(category_id)


@router.post(
    "/categories/{category_id}/plans",
    response_model=PricingCategory,
    status_code=201,
    dependencies=[RequireAdmin],
)
async def add_plan(
    category_id: str,
    request: PricingPlan,
    pricing: PricingRepository = Depends(get_pricing_repository),
) -> PricingCategory:
    """Add a plan. Its id defaults to the slugified plan name; duplicates are 409."""
    return pricing.add_item(category_id, request.model_dump(mode="json"))


@router.put("/categories/{category_id}/plans/{plan_id}", response_model=PricingCategory, dependencies=[RequireAdmin])
@router.patch("/categories/{category_id}/plans/{plan_id}", response_model=PricingCategory, dependencies=[RequireAdmin])
async def update_plan(
    category_id: str,
    plan_id: str,
    request: PlanUpdateRequest,
    pricing: PricingRepository = Depends(get_pricing_repository),
) -> PricingCategory:
    return pricing.update_item(category_id, plan_id, request.model_dump(mode="json", exclude_unset=True))


@router.delete("/categories/{category_id}/plans/{plan_id}", response_model=PricingCategory, dependencies=[RequireAdmin])
async def remove_plan(
    category_id: str,
    plan_id: str,
    pricing: PricingRepository = Depends(get_pricing_repository),
) -> PricingCategory:
    return pricing.remove_item(category_id, plan_id)
