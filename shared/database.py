"""
Database client factory for Supabase.

Provides the service-role client used by the user repository. The client is
created once and handed to repositories explicitly by the service container.
"""

from typing import Optional
from supabase import create_client, Client

from .config import get_settings
from .exceptions import ConfigurationError

# Module-level client cache
_service_client: Optional[Client] = None


def get_supabase_client() -> Client:
    """
    Get Supabase client with service role (bypasses RLS).

    The user store needs full table access: registration inserts rows
    before any user identity exists.

    Returns:
        Supabase client configured with service role key

    Raises:
        ConfigurationError: If the Supabase URL or key is not set
    """
    global _service_client

    if _service_client is None:
        settings = get_settings()
        if not settings.supabase_url or not settings.supabase_service_role_key:
            raise ConfigurationError(
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
