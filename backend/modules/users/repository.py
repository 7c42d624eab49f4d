"""
User repository for database access.

Encapsulates all Supabase queries for the `users` table, including the
role lookup the authorization guards depend on. Records are addressable
by two id shapes: the database-assigned UUID and the identity
provider's uid.
"""

from typing import Any, Optional

from shared.repository import BaseRepository, is_database_id, utc_now
from .models import User, UserRole, UserStatus

TABLE = "users"

# Fields the projection copies from the identity provider when present
PROJECTION_FIELDS = ("email", "display_name", "phone_number", "address", "photo_url", "provider")


class UserRepository(BaseRepository[User]):
    """
    Repository for user records.

    Note: This repository does NOT perform authorization checks.
    The guards and routes are responsible for that.
    """

    def _first(self, query) -> Optional[User]:
        result = self._execute(query.limit(1))
        if not result.data:
            return None
        return User.model_validate(result.data[0])

    def get_by_id(self, user_id: str) -> Optional[User]:
        """Look up by database id. Non-UUID values never match."""
        if not is_database_id(user_id):
            return None
        return self._first(self._db.table(TABLE).select("*").eq("id", user_id))

    def get_by_firebase_uid(self, firebase_uid: str) -> Optional[User]:
        return self._first(self._db.table(TABLE).select("*").eq("firebase_uid", firebase_uid))

    def find_by_identity_id(self, identity_id: str) -> Optional[User]:
        """
        Resolve a user from either id shape.

        Tries the database id first when the value parses as one, then
        falls back to the external uid.
        """
        if not identity_id:
            return None
        user = self.get_by_id(identity_id)
        if user is None:
            user = self.get_by_firebase_uid(identity_id)
        return user

    def role_of(self, identity_id: str) -> Optional[UserRole]:
        """
        Stored role for an identity id.

        Returns None when no record exists; a record without a role
        counts as a plain user.
        """
        user = self.find_by_identity_id(identity_id)
        return user.role if user else None

    def ensure_projection(
        self,
        firebase_uid: str,
        terms_accepted: Optional[bool] = None,
        **fields: Optional[str],
    ) -> User:
        """
        Create or refresh the local record for an identity.

        Upserts on firebase_uid, copying only non-empty fields so a later
        sign-in never blanks out stored profile data. The role column is
        never written here: new rows take the storage default (user) and
        existing roles are preserved.
        """
        payload: dict[str, Any] = {"firebase_uid": firebase_uid}
        for name in PROJECTION_FIELDS:
            value = fields.get(name)
            if value:
                payload[name] = value
        if terms_accepted is not None:
            payload["terms_accepted"] = terms_accepted
        payload["updated_at"] = utc_now().isoformat()
        result = self._execute(
            self._db.table(TABLE).upsert(payload, on_conflict="firebase_uid")
        )
        return User.model_validate(result.data[0])

    def list_users(
        self,
        status: Optional[UserStatus] = None,
        role: Optional[UserRole] = None,
    ) -> tuple[list[User], int]:
        """List users, newest first, optionally filtered by status and role."""
        query = self._db.table(TABLE).select("*", count="exact")
        if status is not None:
            query = query.eq("status", status.value)
        if role is not None:
            query = query.eq("role", role.value)
        result = self._execute(query.order("created_at", desc=True))
        users = [User.model_validate(row) for row in result.data]
        total = result.count if result.count is not None else len(users)
        return users, total

    def update_user(self, user_id: str, changes: dict[str, Any]) -> Optional[User]:
        """
        Apply changes to the record with the given database id.

        Returns the updated user, or None if no record matched.
        """
        payload = {
            key: value.value if isinstance(value, (UserRole, UserStatus)) else value
            for key, value in changes.items()
        }
        payload["updated_at"] = utc_now().isoformat()
        result = self._execute(self._db.table(TABLE).update(payload).eq("id", user_id))
        if not result.data:
            return None
        return User.model_validate(result.data[0])

    def delete_user(self, user_id: str) -> None:
        self._execute(self._db.table(TABLE).delete().eq("id", user_id))
