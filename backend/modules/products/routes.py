"""
Product API endpoints.

Listing and reading are public (a signed-in caller also sees which
products are theirs). Any signed-in user may post; only the poster or
an administrator may update or delete.
"""

from typing import Optional

from fastapi import APIRouter, Depends, Query

from api.dependencies import get_product_repository
from api.middleware.guards import (
    RequireAccess,
    authorize_owner_or_admin,
    optional_access,
)
from modules.auth.authorization import AccessContext

from .exceptions import ProductNotFoundError
from .models import (
    Product,
    ProductCreateRequest,
    ProductListItem,
    ProductListResponse,
    ProductStatus,
    ProductUpdateRequest,
)
from .repository import ProductRepository

router = APIRouter()


def _load_owned(product_id: str, access: AccessContext, products: ProductRepository) -> Product:
    product = products.get_by_id(product_id)
    if product is None:
        raise ProductNotFoundError(product_id)
    authorize_owner_or_admin(access, product.created_by)
    return product


@router.get("", response_model=ProductListResponse)
async def list_products(
    category: Optional[str] = Query(default=None),
    status: Optional[ProductStatus] = Query(default=None),
    min_price: Optional[float] = Query(default=None, ge=0),
    max_price: Optional[float] = Query(default=None, ge=0),
    search: Optional[str] = Query(default=None, max_length=100),
    access: Optional[AccessContext] = Depends(optional_access),
    products: ProductRepository = Depends(get_product_repository),
) -> ProductListResponse:
    """List products with optional filters."""
    items = [
        ProductListItem(
            **product.model_dump(),
            owned_by_me=access is not None and access.owns(product.created_by),
        )
        for product in products.list_products(category, status, min_price, max_price, search)
    ]
    return ProductListResponse(products=items, count=len(items))


@router.get("/{product_id}", response_model=Product)
async def get_product(
    product_id: str,
    products: ProductRepository = Depends(get_product_repository),
) -> Product:
    product = products.get_by_id(product_id)
    if product is None:
        raise ProductNotFoundError(product_id)
    return product


@router.post("", response_model=Product, status_code=201)
async def create_product(
    request: ProductCreateRequest,
    access: AccessContext = RequireAccess,
    products: ProductRepository = Depends(get_product_repository),
) -> Product:
    """Post a product owned by the caller. Returns 409 on a duplicate slug."""
    return products.create(request.model_dump(mode="json"), created_by=access.identity.subject_id)


@router.put("/{product_id}", response_model=Product)
@router.patch("/{product_id}", response_model=Product)
async def update_product(
    product_id: str,
    request: ProductUpdateRequest,
    access: AccessContext = RequireAccess,
    products: ProductRepository = Depends(get_product_repository),
) -> Product:
    """Update a product. Owner or admin only."""
    product = _load_owned(product_id, access, products)
    changes = request.model_dump(mode="json", exclude_unset=True)
    if not changes:
        return product
    updated = products.update(product_id, changes)
    if updated is None:
        raise ProductNotFoundError(product_id)
    return updated


@router.delete("/{product_id}", status_code=204)
async def delete_product(
    product_id: str,
    access: AccessContext = RequireAccess,
    products: ProductRepository = Depends(get_product_repository),
) -> None:
    """Delete a product. Owner or admin only."""
    _load_owned(product_id, access, products)
    if not products.delete(product_id):
        raise ProductNotFoundError(product_id)
