"""
Shared infrastructure for the Atelier backend.

This package contains cross-cutting concerns that are used by multiple modules:
- config: Centralized settings management
- database: Supabase client factory
- firebase: Firebase Admin app factory
- exceptions: Base exception classes
- repository / catalog: Repository bases and storage helpers
- models: The per-request Identity

Note: Business logic should NOT go here. This is for infrastructure only.
"""

from .config import Settings, get_settings
from .database import get_supabase_client, reset_client_cache
from .exceptions import (
    AtelierError,
    NotFoundError,
    ValidationError,
    AuthenticationError,
    AuthorizationError,
    ConflictError,
    RateLimitedError,
    ConfigurationError,
    ExternalServiceError,
    StorageError,
)
from .models import Identity, IdentitySource

__all__ = [
    "Settings",
    "get_settings",
    "get_supabase_client",
    "reset_client_cache",
    "AtelierError",
    "NotFoundError",
    "ValidationError",
    "AuthenticationError",
    "AuthorizationError",
    "ConflictError",
    "RateLimitedError",
    "ConfigurationError",
    "ExternalServiceError",
    "StorageError",
    "Identity",
    "IdentitySource",
]
