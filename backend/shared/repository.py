"""
Base repository class for database access.

Provides a common abstraction layer for all repositories, encapsulating
Supabase client access and translating storage failures into the
shared exception taxonomy.
"""

import logging
import re
import uuid
from datetime import datetime, timezone
from typing import Any, TypeVar, Generic

import httpx
from postgrest.exceptions import APIError
from supabase import Client

from .exceptions import ConflictError, StorageError

logger = logging.getLogger(__name__)

T = TypeVar("T")

# Postgres unique_violation
UNIQUE_VIOLATION = "23505"

_SLUG_STRIP = re.compile(r"[^a-z0-9-]")
_WHITESPACE = re.compile(r"\s+")


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def is_database_id(value: str) -> bool:
    """Whether a value is syntactically a database-assigned id (UUID)."""
    try:
        uuid.UUID(str(value))
    except ValueError:
        return False
    return True


def slugify(value: str) -> str:
    """
    Build a URL-safe identifier from a display name.

    Lowercases, turns whitespace runs into hyphens and drops every
    character outside [a-z0-9-].
    """
    slug = _WHITESPACE.sub("-", value.strip().lower())
    return _SLUG_STRIP.sub("", slug)


def escape_like(value: str) -> str:
    """Escape LIKE wildcards so an ilike filter matches the value literally."""
    return value.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")


class BaseRepository(Generic[T]):
    """
    Base class for all repositories.

    Provides common functionality for database operations:
    - Supabase client access via self._db
    - Generic type parameter for model type hints
    - _execute(), which maps duplicate-key errors to ConflictError and
      every other storage failure to StorageError

    Subclasses implement domain-specific data access methods and handle
    dict-to-Pydantic model mapping internally.

    Example:
        class ProductRepository(BaseRepository[Product]):
            def get_by_id(self, product_id: str) -> Optional[Product]:
                result = self._execute(
                    self._db.table("products").select("*").eq("id", product_id)
                )
                if not result.data:
                    return None
                return Product.model_validate(result.data[0])
    """

    def __init__(self, db: Client) -> None:
        """
        Initialize the repository with a Supabase client.

        Args:
            db: Supabase client instance for database operations.
        """
        self._db = db

    def _execute(self, query: Any, conflict_message: str = "Resource already exists") -> Any:
        """
        Execute a PostgREST query builder.

        Raises:
            ConflictError: On a unique constraint violation
            StorageError: On any other storage or transport failure
        """
        try:
            return query.execute()
        except APIError as e:
            if e.code == UNIQUE_VIOLATION:
                raise ConflictError(conflict_message, code="DUPLICATE") from e
            logger.error(f"Storage query failed: {e.code} {e.message}")
            raise StorageError() from e
        except httpx.HTTPError as e:
            logger.error(f"Storage unreachable: {e}")
            raise StorageError() from e
