"""
Centralized configuration for the Atelier backend.

All settings are loaded from environment variables with sensible defaults.
Module-specific settings are namespaced (e.g., FIREBASE_*, SUPABASE_*, SESSION_*).
"""

from functools import lru_cache
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Application
    app_name: str = "Atelier API"
    app_version: str = "0.1.0"
    environment: str = "development"
    debug: bool = False
    log_level: str = "INFO"

    # Server
    host: str = "0.0.0.0"
    port: int = 8000
    reload: bool = False

    # CORS settings (credentials are required for the session cookie)
    cors_origins: list[str] = ["http://localhost:5173", "http://localhost:3000"]
    cors_allow_credentials: bool = True
    cors_allow_methods: list[str] = ["*"]
    cors_allow_headers: list[str] = ["*"]

    # Supabase
    supabase_url: str = ""
    supabase_service_role_key: str = ""
    supabase_db_url: str = ""

    # Firebase identity provider
    firebase_project_id: str = ""
    firebase_credentials_path: str = ""
    firebase_api_key: str = ""
    identity_verify_timeout: float = 5.0  # seconds

    # Session cookie
    session_secret: str = ""
    session_cookie_name: str = "session"
    session_ttl_days: int = 7

    # Administration
    admin_secret: str = ""
    admin_claim_fallback: bool = True

    # Password reset
    password_reset_ttl_minutes: int = 60

    # Frontend URLs (for reset links)
    frontend_url: str = "http://localhost:5173"

    @property
    def is_production(self) -> bool:
        """Whether the service runs in production mode."""
        return self.environment.lower() == "production"


@lru_cache
def get_settings() -> Settings:
    """
    Get cached settings instance.

    Uses lru_cache to ensure settings are only loaded once.
    """
    return Settings()
