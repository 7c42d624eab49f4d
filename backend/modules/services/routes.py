"""
Service catalog API endpoints.

Reading is public; changes require an administrator.
"""

from typing import Optional

from fastapi import APIRouter, Depends, Query

from api.dependencies import get_service_repository
from api.middleware.guards import RequireAdmin, optional_identity
from shared.exceptions import ValidationError
from shared.models import Identity

from .exceptions import ServiceNotFoundError
from .models import (
    Service,
    ServiceCategoriesResponse,
    ServiceCreateRequest,
    ServiceListResponse,
    ServiceStatus,
    ServiceUpdateRequest,
)
from .repository import ServiceRepository

router = APIRouter()


def _page(
    services: ServiceRepository,
    skip: int,
    limit: int,
    **filters,
) -> ServiceListResponse:
    items, total = services.list_services(skip=skip, limit=limit, **filters)
    return ServiceListResponse(
        services=items,
        total=total,
        skip=skip,
        limit=limit,
        has_more=skip + len(items) < total,
    )


@router.get("", response_model=ServiceListResponse)
async def list_services(
    category: Optional[str] = Query(default=None),
    status: Optional[ServiceStatus] = Query(default=None),
    tags: Optional[str] = Query(default=None, description="Comma-separated; matches any"),
    min_price: Optional[float] = Query(default=None, ge=0),
    max_price: Optional[float] = Query(default=None, ge=0),
    skip: int = Query(default=0, ge=0),
    limit: int = Query(default=20, ge=1, le=100),
    services: ServiceRepository = Depends(get_service_repository),
) -> ServiceListResponse:
    """Filtered, paginated services, newest first."""
    tag_list = [tag.strip() for tag in tags.split(",") if tag.strip()] if tags else None
    return _page(
        services,
        skip,
        limit,
        category=category,
        status=status,
        tags=tag_list,
        min_price=min_price,
        max_price=max_price,
    )


@router.get("/categories", response_model=ServiceCategoriesResponse)
async def list_categories(
    services: ServiceRepository = Depends(get_service_repository),
) -> ServiceCategoriesResponse:
    return ServiceCategoriesResponse(categories=services.categories())


@router.get("/category/{category}", response_model=ServiceListResponse)
async def list_services_in_category(
    category: str,
    status: Optional[ServiceStatus] = Query(default=None),
    skip: int = Query(default=0, ge=0),
    limit: int = Query(default=20, ge=1, le=100),
    services: ServiceRepository = Depends(get_service_repository),
) -> ServiceListResponse:
    return _page(services, skip, limit, category=category, status=status)


@router.get("/{service_id}", response_model=Service)
async def get_service(
    service_id: str,
    services: ServiceRepository = Depends(get_service_repository),
) -> Service:
    service = services.get_by_id(service_id)
    if service is None:
        raise ServiceNotFoundError(service_id)
    return service


@router.post("", response_model=Service, status_code=201, dependencies=[RequireAdmin])
async def create_service(
    request: ServiceCreateRequest,
    identity: Optional[Identity] = Depends(optional_identity),
    services: ServiceRepository = Depends(get_service_repository),
) -> Service:
    created_by = identity.subject_id if identity else None
    return services.create(request.model_dump(mode="json"), created_by=created_by)


@router.put("/{service_id}", response_model=Service, dependencies=[RequireAdmin])
@router.patch("/{service_id}", response_model=Service, dependencies=[RequireAdmin])
async def update_service(
    service_id: str,
    request: ServiceUpdateRequest,
    services: ServiceRepository = Depends(get_service_repository),
) -> Service:
    changes = request.model_dump(mode="json", exclude_unset=True)
    if not changes:
        raise ValidationError("Request body must contain fields to update", code="EMPTY_UPDATE")
    service = services.update(service_id, changes)
    if service is None:
        raise ServiceNotFoundError(service_id)
    return service


@router.delete("/{service_id}", status_code=204, dependencies=[RequireAdmin])
async def delete_service(
    service_id: str,
    services: ServiceRepository = Depends(get_service_repository),
) -> None:
    if not services.delete(service_id):
        raise ServiceNotFoundError(service_id)
