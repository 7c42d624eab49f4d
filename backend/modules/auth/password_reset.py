"""
Password reset tokens.

Only the SHA-256 hash of a reset token is stored. Redemption is a single
conditional update, so of any number of concurrent attempts with the
same token at most one succeeds.
"""

import hashlib
import secrets
from datetime import datetime, timedelta
from typing import Optional

from shared.repository import BaseRepository, utc_now

TABLE = "password_reset_tokens"
TOKEN_BYTES = 32


def generate_reset_token() -> str:
    """Random URL-safe plaintext token for a reset link."""
    return secrets.token_hex(TOKEN_BYTES)


def hash_reset_token(token: str) -> str:
    return hashlib.sha256(token.encode("utf-8")).hexdigest()


class PasswordResetRepository(BaseRepository[dict]):
    """Storage for hashed, single-use password reset tokens."""

    def create(self, email: str, token_hash: str, ttl: timedelta, now: Optional[datetime] = None) -> None:
        issued_at = now or utc_now()
        self._execute(
            self._db.table(TABLE).insert(
                {
                    "email": email,
                    "token_hash": token_hash,
                    "expires_at": (issued_at + ttl).isoformat(),
                    "used": False,
                    "created_at": issued_at.isoformat(),
                }
            )
        )

    def consume(self, email: str, token_hash: str, now: Optional[datetime] = None) -> bool:
        """
        Atomically mark a matching, unused, unexpired token as used.

        Returns True only for the caller whose update actually flipped
        the row; every other caller gets False.
        """
        at = (now or utc_now()).isoformat()
        result = self._execute(
            self._db.table(TABLE)
            .update({"used": True, "used_at": at})
            .eq("token_hash", token_hash)
            .eq("email", email)
            .eq("used", False)
            .gt("expires_at", at)
        )
        return bool(result.data)
