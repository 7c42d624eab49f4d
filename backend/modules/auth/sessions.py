"""
Session credentials.

Issues and verifies the signed, stateless session token carried in the
`session` cookie, and sets/clears that cookie on responses.
"""

import logging
from datetime import datetime, timedelta, timezone
from typing import Optional

import jwt
from fastapi import Response

from shared.config import Settings, get_settings
from shared.exceptions import ConfigurationError

from .exceptions import ExpiredSessionError, InvalidSessionError

logger = logging.getLogger(__name__)

ALGORITHM = "HS256"
DEVELOPMENT_SECRET = "dev-secret"


def resolve_session_secret(settings: Settings) -> str:
    """
    Secret used to sign session tokens.

    Raises:
        ConfigurationError: If SESSION_SECRET is unset in production
    """
    if settings.session_secret:
        return settings.session_secret
    if settings.is_production:
        raise ConfigurationError(
            "SESSION_SECRET must be set in production",
            code="MISSING_SESSION_SECRET",
        )
    logger.warning(
        "SESSION_SECRET is not set; signing sessions with the insecure development secret"
    )
    return DEVELOPMENT_SECRET


class SessionManager:
    """
    Issuer and verifier for session tokens.

    A session token is an HS256 JWT holding the subject id and an expiry
    of session_ttl_days after issue. Nothing is stored server-side.
    """

    def __init__(self, settings: Optional[Settings] = None, secret: Optional[str] = None) -> None:
        self._settings = settings or get_settings()
        self._secret = secret or resolve_session_secret(self._settings)
        self._ttl = timedelta(days=self._settings.session_ttl_days)

    @property
    def cookie_name(self) -> str:
        return self._settings.session_cookie_name

    @property
    def max_age(self) -> int:
        return int(self._ttl.total_seconds())

    def issue(self, subject_id: str, now: Optional[datetime] = None) -> str:
        """Sign a session token for a subject id."""
        issued_at = now or datetime.now(timezone.utc)
        payload = {
            "uid": subject_id,
            "sub": subject_id,
            "iat": int(issued_at.timestamp()),
            "exp": int((issued_at + self._ttl).timestamp()),
        }
        return jwt.encode(payload, self._secret, algorithm=ALGORITHM)

    def verify(self, token: str) -> str:
        """
        Verify a session token and return its subject id.

        Raises:
            ExpiredSessionError: Token is past its expiry
            InvalidSessionError: Bad signature, malformed token or missing subject
        """
        try:
            payload = jwt.decode(
                token,
                self._secret,
                algorithms=[ALGORITHM],
                options={"require": ["exp", "iat"]},
            )
        except jwt.ExpiredSignatureError:
            raise ExpiredSessionError()
        except jwt.InvalidTokenError:
            raise InvalidSessionError()

        subject_id = payload.get("uid") or payload.get("sub")
        if not isinstance(subject_id, str) or not subject_id:
            raise InvalidSessionError()
        return subject_id

    def set_cookie(self, response: Response, subject_id: str) -> str:
        """Issue a session for a subject and attach it to the response."""
        token = self.issue(subject_id)
        response.set_cookie(
            key=self.cookie_name,
            value=token,
            max_age=self.max_age,
            path="/",
            httponly=True,
            secure=self._settings.is_production,
            samesite="lax",
        )
        return token

    def clear_cookie(self, response: Response) -> None:
        response.delete_cookie(
            key=self.cookie_name,
            path="/",
            httponly=True,
            secure=self._settings.is_production,
            samesite="lax",
        )
