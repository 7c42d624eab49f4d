"""
Authorization decisions.

Pure access rules shared by the API guards and resource routes. The
stored role is looked up on every decision, even when the caller's
claims already assert admin: when a local record exists its role is
authoritative, and a claim-asserted admin only counts for identities
with no local record (and only while admin_claim_fallback is enabled).
"""

import hmac
from typing import Optional

from pydantic import BaseModel

from modules.users.models import User, UserRole
from modules.users.repository import UserRepository
from shared.models import Identity


class AccessContext(BaseModel):
    """The caller's stored record (if any) and whether they act as admin."""

    identity: Identity
    user: Optional[User] = None
    is_admin: bool = False

    model_config = {"frozen": True}

    def owns(self, owner_id: Optional[str]) -> bool:
        """Whether owner_id names the caller in any of its id shapes."""
        if not owner_id:
            return False
        if owner_id == self.identity.subject_id:
            return True
        return self.user is not None and self.user.has_identity_id(owner_id)


def resolve_access(
    identity: Identity,
    users: UserRepository,
    admin_claim_fallback: bool = True,
) -> AccessContext:
    """Look up the caller's record and decide admin status."""
    user = users.find_by_identity_id(identity.subject_id)
    if user is not None:
        is_admin = user.role == UserRole.ADMIN
    else:
        is_admin = admin_claim_fallback and identity.claims_admin
    return AccessContext(identity=identity, user=user, is_admin=is_admin)


def admin_secret_matches(provided: Optional[str], configured: str) -> bool:
    """Constant-time check of the x-admin-secret header. Never matches when unconfigured."""
    if not configured or not provided:
        return False
    return hmac.compare_digest(provided.encode("utf-8"), configured.encode("utf-8"))
