"""
Database client factory for Supabase.

The backend talks to the document store exclusively through the
service-role client; access control happens in the API guards.
"""

from typing import Optional
from supabase import create_client, Client

from .config import get_settings

# Module-level client cache
_service_client: Optional[Client] = None


def get_supabase_client() -> Client:
    """
    Get Supabase client with service role (bypasses RLS).

    Returns:
        Supabase client configured with service role key

    Raises:
        RuntimeError: If the Supabase URL or key is not configured
    """
    global _service_client

    if _service_client is None:
        settings = get_settings()
        if not settings.supabase_url or not settings.supabase_service_role_key:
            raise RuntimeError(
                "Supabase configuration missing. "
                "Set SUPABASE_URL and SUPABASE_SERVICE_ROLE_KEY environment variables."
            )
        _service_client = create_client(
            settings.supabase_url,
            settings.supabase_service_role_key,
        )

    return _service_client


def reset_client_cache() -> None:
    """
    Reset the cached database client.

    Useful for testing or when configuration changes.
    """
    global _service_client
    _service_client = None
