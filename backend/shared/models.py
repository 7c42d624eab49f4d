"""
Shared data models used across modules.

These models are shared infrastructure, not business logic.
Module-specific models should stay in their respective module directories.
"""

from datetime import datetime
from enum import Enum
from typing import Any, Optional
from pydantic import BaseModel, Field


class IdentitySource(str, Enum):
    """Which credential channel produced an identity."""

    BEARER = "bearer-verified"
    SESSION = "session-cookie"
    BOTH = "both"


class Identity(BaseModel):
    """
    The caller as resolved for a single request.

    Built by the identity resolution middleware from either a verified
    bearer token or a session cookie and never persisted. Session-derived
    identities carry no claims beyond the subject id.
    """

    subject_id: str = Field(..., description="External identity id (Firebase uid)")
    claims: dict[str, Any] = Field(default_factory=dict, description="Verified token claims")
    source: IdentitySource = Field(..., description="Credential channel that resolved it")

    model_config = {"frozen": True}

    @property
    def email(self) -> Optional[str]:
        return self.claims.get("email")

    @property
    def claims_admin(self) -> bool:
        """Whether the verified claims assert administrator status."""
        return self.claims.get("admin") is True or self.claims.get("role") == "admin"


class Timestamped(BaseModel):
    """Mixin for stored rows that carry creation and update times."""

    created_at: Optional[datetime] = Field(None, description="Creation time")
    updated_at: Optional[datetime] = Field(None, description="Last update time")
