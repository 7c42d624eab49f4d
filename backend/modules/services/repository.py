"""
Service repository for database access.
"""

from typing import Any, Optional

from shared.repository import BaseRepository, is_database_id, utc_now
from .models import Service, ServiceStatus

TABLE = "services"


class ServiceRepository(BaseRepository[Service]):
    """Repository for service offerings."""

    def list_services(
        self,
        category: Optional[str] = None,
        status: Optional[ServiceStatus] = None,
        tags: Optional[list[str]] = None,
        min_price: Optional[float] = None,
        max_price: Optional[float] = None,
        skip: int = 0,
        limit: int = 20,
    ) -> tuple[list[Service], int]:
        """
        Filtered page of services, newest first.

        tags matches services carrying any of the given tags.

        Returns:
            The page and the total number of matching services
        """
        query = self._db.table(TABLE).select("*", count="exact")
        if category:
            query = query.eq("category", category)
        if status is not None:
            query = query.eq("status", status.value)
        if tags:
            query = query.ov("tags", tags)
        if min_price is not None:
            query = query.gte("base_price", min_price)
        if max_price is not None:
            query = query.lte("base_price", max_price)
        query = query.order("created_at", desc=True).range(skip, skip + limit - 1)
        result = self._execute(query)
        services = [Service.model_validate(row) for row in result.data]
        total = result.count if result.count is not None else len(services)
        return services, total

    def categories(self) -> list[str]:
        """Distinct categories in use, alphabetically."""
        result = self._execute(self._db.table(TABLE).select("category"))
        return sorted({row["category"] for row in result.data if row.get("category")})

    def get_by_id(self, service_id: str) -> Optional[Service]:
        if not is_database_id(service_id):
            return None
        result = self._execute(self._db.table(TABLE).select("*").eq("id", service_id).limit(1))
        if not result.data:
            return None
        return Service.model_validate(result.data[0])

    def create(self, data: dict[str, Any], created_by: Optional[str] = None) -> Service:
        row = {**data, "created_by": created_by}
        result = self._execute(self._db.table(TABLE).insert(row))
        return Service.model_validate(result.data[0])

    def update(self, service_id: str, changes: dict[str, Any]) -> Optional[Service]:
        if not is_database_id(service_id):
            return None
        payload = {**changes, "updated_at": utc_now().isoformat()}
        result = self._execute(self._db.table(TABLE).update(payload).eq("id", service_id))
        if not result.data:
            return None
        return Service.model_validate(result.data[0])

    def delete(self, service_id: str) -> bool:
        if not is_database_id(service_id):
            return False
        result = self._execute(self._db.table(TABLE).delete().eq("id", service_id))
        return bool(result.data)
