"""Tests for shared/config.py."""

import os
from unittest.mock import patch

from shared.config import Settings, get_settings


class TestSettings:
    def test_default_values(self):
        """Settings should have sensible defaults."""
        with patch.dict(os.environ, {}, clear=True):
            settings = Settings(_env_file=None)
        assert settings.app_name == "Atelier API"
        assert settings.environment == "development"
        assert settings.port == 8000
        assert settings.session_cookie_name == "session"
        assert settings.session_ttl_days == 7
        assert settings.admin_secret == ""
        assert settings.admin_claim_fallback is True
        assert settings.password_reset_ttl_minutes == 60
        assert settings.is_production is False

    def test_loads_from_env(self):
        """Settings should load from environment variables."""
        with patch.dict(os.environ, {"DEBUG": "true", "PORT": "9000", "SESSION_TTL_DAYS": "1"}):
            settings = Settings()
            assert settings.debug is True
            assert settings.port == 9000
            assert settings.session_ttl_days == 1

    def test_loads_identity_config_from_env(self):
        with patch.dict(os.environ, {
            "FIREBASE_PROJECT_ID": "atelier-test",
            "FIREBASE_API_KEY": "web-key",
            "IDENTITY_VERIFY_TIMEOUT": "2.5",
        }):
            settings = Settings()
            assert settings.firebase_project_id == "atelier-test"
            assert settings.firebase_api_key == "web-key"
            assert settings.identity_verify_timeout == 2.5

    def test_production_detection_ignores_case(self):
        with patch.dict(os.environ, {"ENVIRONMENT": "Production"}):
            assert Settings().is_production is True


class TestGetSettings:
    def test_returns_cached_instance(self):
        get_settings.cache_clear()
        assert get_settings() is get_settings()

    def test_reads_test_environment(self, test_settings):
        """The autouse fixture configures secrets through the environment."""
        assert test_settings.session_secret
        assert test_settings.admin_secret
        assert test_settings.environment == "test"
