"""
Shared test fixtures and utilities.

This module provides common test infrastructure used across all test modules:
environment-backed settings, an in-memory Supabase and identity provider
wired into the service container, and helpers to create signed-in callers.
"""

import api  # noqa: F401  (loads the app and every router before module-level imports)

import pytest
from fastapi.testclient import TestClient

from api.app import create_app
from api.dependencies import get_container, reset_container
from modules.auth.password_reset import PasswordResetRepository
from modules.auth.sessions import SessionManager
from modules.pricing.repository import PricingRepository
from modules.products.repository import ProductRepository
from modules.projects.repository import ProjectCategoryRepository
from modules.services.repository import ServiceRepository
from modules.team.repository import TeamRepository
from modules.users.repository import UserRepository
from shared.config import get_settings
from shared.database import reset_client_cache

from tests.fakes import (
    TEST_ADMIN_SECRET,
    TEST_SESSION_SECRET,
    FakeIdentityProvider,
    FakeSupabase,
    RecordingMailer,
)


@pytest.fixture(autouse=True)
def test_settings(monkeypatch):
    """Known settings for every test, with all cached singletons reset around it."""
    monkeypatch.setenv("ENVIRONMENT", "test")
    monkeypatch.setenv("SESSION_SECRET", TEST_SESSION_SECRET)
    monkeypatch.setenv("ADMIN_SECRET", TEST_ADMIN_SECRET)
    monkeypatch.setenv("FRONTEND_URL", "https://atelier.test")
    monkeypatch.setenv("SUPABASE_URL", "")
    monkeypatch.setenv("SUPABASE_SERVICE_ROLE_KEY", "")
    get_settings.cache_clear()
    reset_container()
    reset_client_cache()
    yield get_settings()
    reset_container()
    reset_client_cache()
    get_settings.cache_clear()


@pytest.fixture
def fake_db() -> FakeSupabase:
    return FakeSupabase()


@pytest.fixture
def provider() -> FakeIdentityProvider:
    return FakeIdentityProvider()


@pytest.fixture
def mailer() -> RecordingMailer:
    return RecordingMailer()


@pytest.fixture
def users(fake_db) -> UserRepository:
    return UserRepository(fake_db)


@pytest.fixture
def container(fake_db, provider, mailer, users):
    """Service container wired to the in-memory fakes."""
    container = get_container()
    container.override(
        identity_provider=provider,
        mailer=mailer,
        sessions=SessionManager(secret=TEST_SESSION_SECRET),
        users=users,
        password_resets=PasswordResetRepository(fake_db),
        products=ProductRepository(fake_db),
        pricing=PricingRepository(fake_db),
        projects=ProjectCategoryRepository(fake_db),
        services=ServiceRepository(fake_db),
        team=TeamRepository(fake_db),
    )
    return container


@pytest.fixture
def client(container):
    """TestClient for a fresh app using the faked container."""
    with TestClient(create_app()) as test_client:
        yield test_client


@pytest.fixture
def make_account(fake_db, provider):
    """
    Factory for a provider account with a local record.

    Returns (provider_user, stored_row). Pass store=False to create an
    identity that has no local record.
    """

    def factory(role: str = "user", store: bool = True, claims: dict | None = None, **fields):
        provider_user = provider.add_user(claims=claims, **fields)
        row = None
        if store:
            row = fake_db.seed(
                "users",
                firebase_uid=provider_user.uid,
                email=provider_user.email,
                display_name=provider_user.display_name,
                role=role,
            )
        return provider_user, row

    return factory


@pytest.fixture
def bearer(provider):
    """Authorization headers carrying a fresh ID token for a uid."""

    def factory(uid: str, claims: dict | None = None) -> dict[str, str]:
        return {"Authorization": f"Bearer {provider.issue_token(uid, claims)}"}

    return factory


@pytest.fixture
def admin_headers(make_account, bearer) -> dict[str, str]:
    provider_user, _ = make_account(role="admin")
    return bearer(provider_user.uid)


@pytest.fixture
def admin_secret_headers() -> dict[str, str]:
    return {"x-admin-secret": TEST_ADMIN_SECRET}
