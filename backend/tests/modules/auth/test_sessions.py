"""Tests for session token issue/verify and the session cookie."""

from datetime import datetime, timedelta, timezone

import jwt
import pytest
from fastapi import Response

from modules.auth.exceptions import ExpiredSessionError, InvalidSessionError
from modules.auth.sessions import DEVELOPMENT_SECRET, SessionManager, resolve_session_secret
from shared.config import Settings
from shared.exceptions import ConfigurationError


@pytest.fixture
def sessions() -> SessionManager:
    return SessionManager(secret="unit-secret")


class TestSessionTokens:
    def test_round_trip(self, sessions):
        token = sessions.issue("uid-123")
        assert sessions.verify(token) == "uid-123"

    def test_payload_shape(self, sessions):
        now = datetime(2026, 1, 1, tzinfo=timezone.utc)
        payload = jwt.decode(
            sessions.issue("uid-123", now=now),
            "unit-secret",
            algorithms=["HS256"],
            options={"verify_exp": False},
        )
        assert payload["uid"] == payload["sub"] == "uid-123"
        assert payload["exp"] - payload["iat"] == 7 * 24 * 3600

    def test_expired(self, sessions):
        token = sessions.issue("uid-123", now=datetime.now(timezone.utc) - timedelta(days=8))
        with pytest.raises(ExpiredSessionError):
            sessions.verify(token)

    def test_wrong_secret(self, sessions):
        token = SessionManager(secret="other-secret").issue("uid-123")
        with pytest.raises(InvalidSessionError):
            sessions.verify(token)

    def test_garbage(self, sessions):
        with pytest.raises(InvalidSessionError):
            sessions.verify("not-a-token")

    def test_missing_subject(self, sessions):
        now = datetime.now(timezone.utc)
        token = jwt.encode(
            {"iat": int(now.timestamp()), "exp": int((now + timedelta(hours=1)).timestamp())},
            "unit-secret",
            algorithm="HS256",
        )
        with pytest.raises(InvalidSessionError):
            sessions.verify(token)

    def test_missing_expiry_is_rejected(self, sessions):
        token = jwt.encode({"uid": "uid-123"}, "unit-secret", algorithm="HS256")
        with pytest.raises(InvalidSessionError):
            sessions.verify(token)


class TestSessionCookie:
    def test_set_cookie_attributes(self, sessions):
        response = Response()
        sessions.set_cookie(response, "uid-123")
        header = response.headers["set-cookie"]
        assert header.startswith("session=")
        assert "HttpOnly" in header
        assert "SameSite=lax" in header
        assert "Path=/" in header
        assert f"Max-Age={7 * 24 * 3600}" in header
        assert "Secure" not in header

    def test_secure_in_production(self):
        settings = Settings(environment="production", session_secret="prod-secret")
        response = Response()
        SessionManager(settings=settings).set_cookie(response, "uid-123")
        assert "Secure" in response.headers["set-cookie"]

    def test_clear_cookie(self, sessions):
        response = Response()
        sessions.clear_cookie(response)
        header = response.headers["set-cookie"]
        assert header.startswith('session="";') or header.startswith("session=;")
        assert "Max-Age=0" in header


class TestSessionSecret:
    def test_configured_secret(self):
        assert resolve_session_secret(Settings(session_secret="configured")) == "configured"

    def test_development_fallback(self):
        assert resolve_session_secret(Settings(session_secret="", environment="development")) == DEVELOPMENT_SECRET

    def test_production_requires_secret(self):
        with pytest.raises(ConfigurationError) as exc_info:
            resolve_session_secret(Settings(session_secret="", environment="production"))
        assert exc_info.value.code == "MISSING_SESSION_SECRET"
