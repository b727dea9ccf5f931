"""
Shared infrastructure for the Splitwise backend.

This package contains cross-cutting concerns that are used by multiple modules:
- config: Centralized settings management
- database: Supabase client factory
- exceptions: Base exception classes
- logging: Root logger setup

Note: Business logic should NOT go here. This is for infrastructure only.
"""

from .config import Settings, get_settings
from .database import get_supabase_client, reset_client_cache
from .exceptions import (
    SplitwiseError,
    NotFoundError,
    ValidationError,
    ConflictError,
    AuthenticationError,
    ConfigurationError,
    ExternalServiceError,
)
from .logging import configure_logging
from .models import AuthenticatedIdentity

__all__ = [
    "Settings",
    "get_settings",
    "get_supabase_client",
    "reset_client_cache",
    "SplitwiseError",
    "NotFoundError",
    "ValidationError",
    "ConflictError",
    "AuthenticationError",
    "ConfigurationError",
    "ExternalServiceError",
    "configure_logging",
    "AuthenticatedIdentity",
]
