"""
Product repository for database access.
"""

import re
from typing import Any, Optional

from shared.exceptions import ValidationError
from shared.repository import BaseRepository, is_database_id, slugify, utc_now
from .models import Product, ProductStatus

TABLE = "products"

# Characters with meaning inside a PostgREST or=() filter
_FILTER_SYNTAX = re.compile(r"[,()*%\\\"]")


class ProductRepository(BaseRepository[Product]):
    """
    Repository for products.

    Note: This repository does NOT perform authorization checks.
    Routes verify ownership against created_by before changes.
    """

    def list_products(
        self,
        category: Optional[str] = None,
        status: Optional[ProductStatus] = None,
        min_price: Optional[float] = None,
        max_price: Optional[float] = None,
        search: Optional[str] = None,
    ) -> list[Product]:
        """List products by display order, newest first within the same order."""
        query = self._db.table(TABLE).select("*")
        if category:
            query = query.eq("category", category)
        if status is not None:
            query = query.eq("status", status.value)
        if min_price is not None:
            query = query.gte("price", min_price)
        if max_price is not None:
            query = query.lte("price", max_price)
        if search:
            term = _FILTER_SYNTAX.sub("", search).strip()
            if term:
                query = query.or_(f"title.ilike.%{term}%,description.ilike.%{term}%")
        query = query.order("display_order").order("created_at", desc=True)
        result = self._execute(query)
        return [Product.model_validate(row) for row in result.data]

    def get_by_id(self, product_id: str) -> Optional[Product]:
        if not is_database_id(product_id):
            return None
        result = self._execute(self._db.table(TABLE).select("*").eq("id", product_id).limit(1))
        if not result.data:
            return None
        return Product.model_validate(result.data[0])

    def create(self, data: dict[str, Any], created_by: str) -> Product:
        """
        Insert a product owned by created_by.

        Raises:
            ConflictError: If the slug is already taken
        """
        row = dict(data)
        row["slug"] = slugify(row.get("slug") or row["title"])
        if not row["slug"]:
            raise ValidationError("Product title must contain letters or digits", code="INVALID_TITLE")
        row["created_by"] = created_by
        result = self._execute(
            self._db.table(TABLE).insert(row),
            conflict_message=f"Product '{row['slug']}' already exists",
        )
        return Product.model_validate(result.data[0])

    def update(self, product_id: str, changes: dict[str, Any]) -> Optional[Product]:
        if not is_database_id(product_id):
            return None
        payload = {k: v for k, v in changes.items() if k not in ("id", "created_by", "created_at")}
        if "slug" in payload:
            payload["slug"] = slugify(payload["slug"])
        payload["updated_at"] = utc_now().isoformat()
        result = self._execute(
            self._db.table(TABLE).update(payload).eq("id", product_id),
            conflict_message="Product slug already exists",
        )
        if not result.data:
            return None
        return Product.model_validate(result.data[0])

    def delete(self, product_id: str) -> bool:
        if not is_database_id(product_id):
            return False
        result = self._execute(self._db.table(TABLE).delete().eq("id", product_id))
        return bool(result.data)
