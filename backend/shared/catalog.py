"""
Category documents with an embedded item list.

Pricing categories embed plans and project categories embed portfolio
projects. Both are stored as one row per category with the items in a
JSONB column, and both are addressed by slug first, then database id.
"""

import uuid
from typing import Any, Generic, Optional, TypeVar

from pydantic import BaseModel

from .exceptions import ConflictError, NotFoundError, ValidationError
from .repository import BaseRepository, is_database_id, slugify, utc_now

C = TypeVar("C", bound=BaseModel)

SORTABLE_FIELDS = {"display_order", "name", "created_at", "updated_at"}


class CategoryNotFoundError(NotFoundError):
    """Raised when no category matches a slug or id."""

    def __init__(self, identifier: str):
        super().__init__(
            f"Category not found: {identifier}",
            code="CATEGORY_NOT_FOUND",
            details={"category_id": identifier},
        )


class ItemNotFoundError(NotFoundError):
    """Raised when a category does not embed the requested item."""

    def __init__(self, category_id: str, item_id: str):
        super().__init__(
            f"Item {item_id} not found in category {category_id}",
            code="ITEM_NOT_FOUND",
            details={"category_id": category_id, "item_id": item_id},
        )


class CategoryRepository(BaseRepository[C], Generic[C]):
    """
    Repository for a category table with an embedded item list.

    Subclasses set `table`, `items_field` and `model`. Item edits are
    read-modify-write guarded by the row's updated_at, so a concurrent
    edit of the same category surfaces as ConflictError instead of
    silently dropping one of the writes.
    """

    table: str = ""
    items_field: str = "items"
    model: type[C]

    def _to_model(self, row: dict[str, Any]) -> C:
        return self.model.model_validate(row)

    @staticmethod
    def _item_id(item: dict[str, Any]) -> str:
        """Explicit id, else slugified name or title, else a random id."""
        source = item.get("id") or item.get("name") or item.get("title") or ""
        return slugify(source) or str(uuid.uuid4())

    def list_categories(
        self,
        is_active: Optional[bool] = None,
        sort_by: str = "display_order",
        sort_order: str = "asc",
    ) -> list[C]:
        if sort_by not in SORTABLE_FIELDS:
            raise ValidationError(
                f"Cannot sort by '{sort_by}'",
                code="INVALID_SORT",
                details={"allowed": sorted(SORTABLE_FIELDS)},
            )
        query = self._db.table(self.table).select("*")
        if is_active is not None:
            query = query.eq("is_active", is_active)
        query = query.order(sort_by, desc=sort_order.lower() == "desc")
        result = self._execute(query)
        return [self._to_model(row) for row in result.data]

    def _find_row(self, identifier: str) -> Optional[dict[str, Any]]:
        result = self._execute(self._db.table(self.table).select("*").eq("slug", identifier))
        if result.data:
            return result.data[0]
        if is_database_id(identifier):
            result = self._execute(self._db.table(self.table).select("*").eq("id", identifier))
            if result.data:
                return result.data[0]
        return None

    def _get_row(self, identifier: str) -> dict[str, Any]:
        row = self._find_row(identifier)
        if row is None:
            raise CategoryNotFoundError(identifier)
        return row

    def get_category(self, identifier: str) -> C:
        return self._to_model(self._get_row(identifier))

    def create_category(self, data: dict[str, Any], created_by: Optional[str] = None) -> C:
        """
        Insert a category; the slug defaults to the slugified name.

        Raises:
            ConflictError: If the slug is already taken
        """
        row = dict(data)
        row["slug"] = slugify(row.get("slug") or row["name"])
        if not row["slug"]:
            raise ValidationError("Category name must contain letters or digits", code="INVALID_NAME")
        items: list[dict[str, Any]] = []
        for item in row.get(self.items_field) or []:
            item = {**item, "id": self._item_id(item)}
            if any(existing["id"] == item["id"] for existing in items):
                raise ConflictError(f"Duplicate item '{item['id']}' in category", code="DUPLICATE")
            items.append(item)
        row[self.items_field] = items
        row["created_by"] = created_by
        result = self._execute(
            self._db.table(self.table).insert(row),
            conflict_message=f"Category '{row['slug']}' already exists",
        )
        return self._to_model(result.data[0])

    def update_category(self, identifier: str, changes: dict[str, Any]) -> C:
        row = self._get_row(identifier)
        changes = {k: v for k, v in changes.items() if k not in ("id", self.items_field, "created_by")}
        if "slug" in changes:
            changes["slug"] = slugify(changes["slug"])
        if not changes:
            return self._to_model(row)
        changes["updated_at"] = utc_now().isoformat()
        result = self._execute(
            self._db.table(self.table).update(changes).eq("id", row["id"]),
            conflict_message="Category slug already exists",
        )
        return self._to_model(result.data[0])

    def delete_category(self, identifier: str) -> None:
        row = self._get_row(identifier)
        self._execute(self._db.table(self.table).delete().eq("id", row["id"]))

    def _write_items(self, row: dict[str, Any], items: list[dict[str, Any]]) -> C:
        result = self._execute(
            self._db.table(self.table)
            .update({self.items_field: items, "updated_at": utc_now().isoformat()})
            .eq("id", row["id"])
            .eq("updated_at", row["updated_at"])
        )
        if not result.data:
            raise ConflictError(
                "Category was modified concurrently, retry the request",
                code="CONCURRENT_MODIFICATION",
            )
        return self._to_model(result.data[0])

    def add_item(self, identifier: str, item: dict[str, Any]) -> C:
        """
        Append an item; its id defaults to the slugified name.

        Raises:
            ConflictError: If the category already holds an item with that id
        """
        row = self._get_row(identifier)
        items = list(row.get(self.items_field) or [])
        item = {**item, "id": self._item_id(item)}
        if any(existing.get("id") == item["id"] for existing in items):
            raise ConflictError(
                f"Item '{item['id']}' already exists in this category",
                code="DUPLICATE",
            )
        items.append(item)
        return self._write_items(row, items)

    def update_item(self, identifier: str, item_id: str, changes: dict[str, Any]) -> C:
        row = self._get_row(identifier)
        items = list(row.get(self.items_field) or [])
        for index, existing in enumerate(items):
            if existing.get("id") == item_id:
                items[index] = {**existing, **changes, "id": item_id}
                return self._write_items(row, items)
        raise ItemNotFoundError(identifier, item_id)

    def remove_item(self, identifier: str, item_id: str) -> C:
        row = self._get_row(identifier)
        items = list(row.get(self.items_field) or [])
        remaining = [existing for existing in items if existing.get("id") != item_id]
        if len(remaining) == len(items):
            raise ItemNotFoundError(identifier, item_id)
        return self._write_items(row, remaining)
