"""
In-memory stand-ins for Supabase and Firebase used across the test suite.

FakeSupabase emulates the subset of the PostgREST query builder the
repositories use: filters, ordering, ranges, exact counts, upserts,
column defaults and unique constraints (raising APIError 23505).
Each execute() runs under a lock, so a conditional update behaves
atomically like the real single-statement UPDATE.
"""

import copy
import itertools
import re
import threading
import uuid
from datetime import datetime, timezone
from typing import Any, Callable, Optional

from postgrest.exceptions import APIError

from modules.auth.exceptions import (
    AccountDisabledError,
    EmailExistsError,
    ExpiredTokenError,
    IdentityProviderError,
    InvalidCredentialsError,
    InvalidTokenError,
    TokenRevokedError,
)
from modules.auth.models import ProviderUser, SignInResult, VerifiedToken

# Test secrets (only for testing)
TEST_SESSION_SECRET = "test-session-secret-for-testing-only"
TEST_ADMIN_SECRET = "test-admin-secret"


# -----------------------------------------------------------------------------
# Supabase
# -----------------------------------------------------------------------------

# table -> (unique column sets, defaults); a "lower:" prefix makes a column compare case-insensitively
TABLES: dict[str, tuple[list[tuple[str, ...]], dict[str, Any]]] = {
    "users": (
        [("firebase_uid",)],
        {"role": "user", "status": "active", "terms_accepted": False},
    ),
    "password_reset_tokens": ([("token_hash",)], {"used": False, "used_at": None}),
    "products": (
        [("slug",)],
        {"highlights": [], "features": [], "status": "active", "display_order": 0},
    ),
    "pricing_categories": ([("slug",)], {"plans": [], "is_active": True, "display_order": 0}),
    "project_categories": ([("slug",)], {"projects": [], "is_active": True, "display_order": 0}),
    "services": (
        [],
        {"tags": [], "features": [], "technologies": [], "status": "active", "base_price": 0, "currency": "USD"},
    ),
    "departments": ([("lower:name",)], {}),
    "team_members": ([("slug",)], {"skills": [], "status": "active", "role_value": 0}),
}


class FakeResponse:
    def __init__(self, data: list[dict[str, Any]], count: Optional[int] = None):
        self.data = data
        self.count = count


def _now_iso() -> str:
    return datetime.now(timezone.utc).isoformat()


def _comparable(value: Any) -> Any:
    if isinstance(value, str):
        try:
            return datetime.fromisoformat(value)
        except ValueError:
            return value
    return value


def _like_to_regex(pattern: str) -> re.Pattern:
    parts = []
    chars = iter(pattern)
    for char in chars:
        if char == "\\":
            parts.append(re.escape(next(chars, "\\")))
        elif char == "%":
            parts.append(".*")
        elif char == "_":
            parts.append(".")
        else:
            parts.append(re.escape(char))
    return re.compile("".join(parts), re.IGNORECASE | re.DOTALL)


def _ilike(value: Any, pattern: str) -> bool:
    return isinstance(value, str) and _like_to_regex(pattern).fullmatch(value) is not None


def _unique_key(row: dict[str, Any], columns: tuple[str, ...]) -> Optional[tuple]:
    key = []
    for column in columns:
        if column.startswith("lower:"):
            value = row.get(column[len("lower:"):])
            value = value.lower() if isinstance(value, str) else value
        else:
            value = row.get(column)
        if value is None:
            return None
        key.append(value)
    return tuple(key)


class FakeQuery:
    """Chainable query mirroring postgrest's SyncRequestBuilder surface."""

    def __init__(self, db: "FakeSupabase", table: str):
        self._db = db
        self._table = table
        self._operation = "select"
        self._columns = "*"
        self._count: Optional[str] = None
        self._payload: Any = None
        self._on_conflict: Optional[str] = None
        self._filters: list[Callable[[dict[str, Any]], bool]] = []
        self._orders: list[tuple[str, bool]] = []
        self._range: Optional[tuple[int, int]] = None
        self._limit: Optional[int] = None

    # Operations

    def select(self, columns: str = "*", count: Optional[str] = None) -> "FakeQuery":
        self._operation = "select"
        self._columns = columns
        self._count = count
        return self

    def insert(self, payload: Any) -> "FakeQuery":
        self._operation = "insert"
        self._payload = payload
        return self

    def upsert(self, payload: Any, on_conflict: str = "") -> "FakeQuery":
        self._operation = "upsert"
        self._payload = payload
        self._on_conflict = on_conflict
        return self

    def update(self, payload: dict[str, Any]) -> "FakeQuery":
        self._operation = "update"
        self._payload = payload
        return self

    def delete(self) -> "FakeQuery":
        self._operation = "delete"
        return self

    # Filters

    def _add(self, predicate: Callable[[dict[str, Any]], bool]) -> "FakeQuery":
        self._filters.append(predicate)
        return self

    def eq(self, column: str, value: Any) -> "FakeQuery":
        return self._add(lambda row: row.get(column) == value)

    def neq(self, column: str, value: Any) -> "FakeQuery":
        return self._add(lambda row: row.get(column) != value)

    def gt(self, column: str, value: Any) -> "FakeQuery":
        return self._add(lambda row: row.get(column) is not None and _comparable(row[column]) > _comparable(value))

    def gte(self, column: str, value: Any) -> "FakeQuery":
        return self._add(lambda row: row.get(column) is not None and _comparable(row[column]) >= _comparable(value))

    def lt(self, column: str, value: Any) -> "FakeQuery":
        return self._add(lambda row: row.get(column) is not None and _comparable(row[column]) < _comparable(value))

    def lte(self, column: str, value: Any) -> "FakeQuery":
        return self._add(lambda row: row.get(column) is not None and _comparable(row[column]) <= _comparable(value))

    def ilike(self, column: str, pattern: str) -> "FakeQuery":
        return self._add(lambda row: _ilike(row.get(column), pattern))

    def ov(self, column: str, values: list[Any]) -> "FakeQuery":
        return self._add(lambda row: bool(set(row.get(column) or []) & set(values)))

    def contains(self, column: str, values: list[Any]) -> "FakeQuery":
        return self._add(lambda row: set(values) <= set(row.get(column) or []))

    def in_(self, column: str, values: list[Any]) -> "FakeQuery":
        return self._add(lambda row: row.get(column) in values)

    def or_(self, filters: str) -> "FakeQuery":
        clauses = []
        for clause in filters.split(","):
            column, operator, value = clause.split(".", 2)
            if operator == "ilike":
                clauses.append(lambda row, c=column, v=value: _ilike(row.get(c), v))
            elif operator == "eq":
                clauses.append(lambda row, c=column, v=value: str(row.get(c)) == v)
            else:
                raise NotImplementedError(operator)
        return self._add(lambda row: any(clause(row) for clause in clauses))

    # Modifiers

    def order(self, column: str, desc: bool = False) -> "FakeQuery":
        self._orders.append((column, desc))
        return self

    def range(self, start: int, end: int) -> "FakeQuery":
        self._range = (start, end)
        return self

    def limit(self, size: int) -> "FakeQuery":
        self._limit = size
        return self

    def execute(self) -> FakeResponse:
        with self._db.lock:
            self._db.calls.append((self._table, self._operation))
            if self._db.fail_with is not None:
                raise self._db.fail_with
            return getattr(self, f"_execute_{self._operation}")()

    # Execution

    @property
    def _rows(self) -> list[dict[str, Any]]:
        return self._db.tables.setdefault(self._table, [])

    def _matching(self) -> list[dict[str, Any]]:
        return [row for row in self._rows if all(predicate(row) for predicate in self._filters)]

    def _check_unique(self, candidate: dict[str, Any], ignore: Optional[dict[str, Any]] = None) -> None:
        unique_sets, _ = TABLES.get(self._table, ([], {}))
        for columns in unique_sets:
            key = _unique_key(candidate, columns)
            if key is None:
                continue
            for row in self._rows:
                if row is ignore:
                    continue
                if _unique_key(row, columns) == key:
                    raise APIError(
                        {
                            "code": "23505",
                            "message": f"duplicate key value violates unique constraint on {self._table}",
                            "details": f"Key {columns}={key} already exists.",
                            "hint": None,
                        }
                    )

    def _new_row(self, payload: dict[str, Any]) -> dict[str, Any]:
        _, defaults = TABLES.get(self._table, ([], {}))
        now = _now_iso()
        row = {"id": str(uuid.uuid4()), "created_at": now, "updated_at": now}
        row.update(copy.deepcopy(defaults))
        row.update(copy.deepcopy(payload))
        return row

    def _execute_select(self) -> FakeResponse:
        rows = self._matching()
        for column, desc in reversed(self._orders):
            present = [row for row in rows if row.get(column) is not None]
            missing = [row for row in rows if row.get(column) is None]
            present.sort(key=lambda row: _comparable(row[column]), reverse=desc)
            rows = present + missing
        total = len(rows)
        if self._range is not None:
            start, end = self._range
            rows = rows[start:end + 1]
        if self._limit is not None:
            rows = rows[: self._limit]
        if self._columns != "*":
            wanted = [column.strip() for column in self._columns.split(",")]
            rows = [{column: row.get(column) for column in wanted} for row in rows]
        count = total if self._count == "exact" else None
        return FakeResponse(copy.deepcopy(rows), count)

    def _execute_insert(self) -> FakeResponse:
        payloads = self._payload if isinstance(self._payload, list) else [self._payload]
        inserted = []
        for payload in payloads:
            row = self._new_row(payload)
            self._check_unique(row)
            self._rows.append(row)
            inserted.append(row)
        return FakeResponse(copy.deepcopy(inserted))

    def _execute_upsert(self) -> FakeResponse:
        payloads = self._payload if isinstance(self._payload, list) else [self._payload]
        conflict_columns = [column.strip() for column in (self._on_conflict or "id").split(",")]
        written = []
        for payload in payloads:
            existing = next(
                (
                    row
                    for row in self._rows
                    if all(row.get(column) == payload.get(column) for column in conflict_columns)
                ),
                None,
            )
            if existing is None:
                row = self._new_row(payload)
                self._check_unique(row)
                self._rows.append(row)
            else:
                merged = {**existing, **copy.deepcopy(payload)}
                self._check_unique(merged, ignore=existing)
                existing.update(merged)
                row = existing
            written.append(row)
        return FakeResponse(copy.deepcopy(written))

    def _execute_update(self) -> FakeResponse:
        updated = []
        for row in self._matching():
            merged = {**row, **copy.deepcopy(self._payload)}
            self._check_unique(merged, ignore=row)
            row.update(merged)
            updated.append(row)
        return FakeResponse(copy.deepcopy(updated))

    def _execute_delete(self) -> FakeResponse:
        doomed = self._matching()
        self._db.tables[self._table] = [row for row in self._rows if row not in doomed]
        return FakeResponse(copy.deepcopy(doomed))


class FakeSupabase:
    """Drop-in for supabase.Client in repositories."""

    def __init__(self) -> None:
        self.tables: dict[str, list[dict[str, Any]]] = {}
        self.calls: list[tuple[str, str]] = []
        self.lock = threading.Lock()
        self.fail_with: Optional[Exception] = None

    def table(self, name: str) -> FakeQuery:
        return FakeQuery(self, name)

    def rows(self, table: str) -> list[dict[str, Any]]:
        return self.tables.get(table, [])

    def seed(self, table: str, **values: Any) -> dict[str, Any]:
        """Insert a row directly, applying defaults, and return a copy of it."""
        return self.table(table).insert(values).execute().data[0]


# -----------------------------------------------------------------------------
# Firebase
# -----------------------------------------------------------------------------


class FakeIdentityProvider:
    """IIdentityProvider keeping accounts and issued tokens in memory."""

    def __init__(self) -> None:
        self.users: dict[str, ProviderUser] = {}
        self.passwords: dict[str, str] = {}
        self.tokens: dict[str, VerifiedToken] = {}
        self.revoked: set[str] = set()
        self.expired: set[str] = set()
        self.unavailable = False
        self.deleted: list[str] = []
        self._ids = itertools.count(1)

    def add_user(
        self,
        uid: Optional[str] = None,
        email: Optional[str] = None,
        password: str = "secret123",
        display_name: Optional[str] = None,
        claims: Optional[dict[str, Any]] = None,
        disabled: bool = False,
    ) -> ProviderUser:
        uid = uid or f"uid-{next(self._ids)}"
        user = ProviderUser(
            uid=uid,
            email=email or f"{uid}@example.com",
            display_name=display_name,
            disabled=disabled,
            custom_claims=claims or {},
            provider="password",
        )
        self.users[uid] = user
        self.passwords[uid] = password
        return user

    def issue_token(self, uid: str, claims: Optional[dict[str, Any]] = None) -> str:
        token = f"id-token-{uid}-{next(self._ids)}"
        user = self.users.get(uid)
        token_claims = {"uid": uid, "sub": uid, "email": user.email if user else None}
        if user:
            token_claims.update(user.custom_claims)
        token_claims.update(claims or {})
        self.tokens[token] = VerifiedToken(subject_id=uid, claims=token_claims)
        return token

    async def verify_token(self, token: str) -> VerifiedToken:
        if self.unavailable:
            raise IdentityProviderError()
        if token in self.revoked:
            raise TokenRevokedError()
        if token in self.expired:
            raise ExpiredTokenError()
        if token not in self.tokens:
            raise InvalidTokenError()
        return self.tokens[token]

    def _by_email(self, email: str) -> Optional[ProviderUser]:
        return next((user for user in self.users.values() if (user.email or "").lower() == email.lower()), None)

    async def sign_in_with_password(self, email: str, password: str) -> SignInResult:
        user = self._by_email(email)
        if user is None or self.passwords.get(user.uid) != password:
            raise InvalidCredentialsError()
        if user.disabled:
            raise AccountDisabledError()
        return SignInResult(id_token=self.issue_token(user.uid), subject_id=user.uid, email=user.email)

    async def create_user(
        self,
        email: str,
        password: str,
        display_name: Optional[str] = None,
        phone_number: Optional[str] = None,
        photo_url: Optional[str] = None,
    ) -> ProviderUser:
        if self._by_email(email) is not None:
            raise EmailExistsError(email)
        user = self.add_user(email=email, password=password, display_name=display_name)
        if phone_number or photo_url:
            user = user.model_copy(update={"phone_number": phone_number, "photo_url": photo_url})
            self.users[user.uid] = user
        return user

    async def get_user(self, uid: str) -> Optional[ProviderUser]:
        return self.users.get(uid)

    async def get_user_by_email(self, email: str) -> Optional[ProviderUser]:
        return self._by_email(email)

    async def update_password(self, uid: str, password: str) -> None:
        self.passwords[uid] = password

    async def delete_user(self, uid: str) -> None:
        self.users.pop(uid, None)
        self.deleted.append(uid)

    async def set_custom_claims(self, uid: str, claims: dict[str, Any]) -> None:
        self.users[uid] = self.users[uid].model_copy(update={"custom_claims": claims})


class RecordingMailer:
    """IMailer that remembers what it was asked to send."""

    def __init__(self) -> None:
        self.resets: list[tuple[str, str]] = []
        self.confirmations: list[str] = []

    async def send_password_reset(self, email: str, reset_link: str) -> None:
        self.resets.append((email, reset_link))

    async def send_password_reset_confirmation(self, email: str) -> None:
        self.confirmations.append(email)
