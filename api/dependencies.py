"""
Dependency injection setup for FastAPI.

This module provides the "container" that wires together all module
implementations. Every collaborator is passed to its consumer explicitly;
nothing looks up the store handle through ambient state.

Tests replace services through ``app.dependency_overrides`` on the
functions at the bottom of this file.
"""

from typing import TYPE_CHECKING, Optional

from shared.config import Settings, get_settings

# Type checking imports for interfaces (avoids circular imports)
if TYPE_CHECKING:
    from supabase import Client
    from modules.auth.interfaces import IAuthService, IUserRepository
    from modules.auth.password import PasswordHasher
    from modules.auth.resolver import IdentityResolver
    from modules.auth.tokens import TokenService


class ServiceContainer:
    """
    Container for all service instances.

    This class manages the lifecycle of service instances and their
    dependencies. Services are created lazily on first access.

    All services are cached as singletons within the container.
    Use reset() to clear all cached services for testing.
    """

    def __init__(self, settings: Optional[Settings] = None) -> None:
        self._settings = settings
        self._db: "Client | None" = None
        self._users: "IUserRepository | None" = None
        self._hasher: "PasswordHasher | None" = None
        self._tokens: "TokenService | None" = None
        self._auth_service: "IAuthService | None" = None
        self._identity_resolver: "IdentityResolver | None" = None

    @property
    def settings(self) -> Settings:
        if self._settings is None:
            self._settings = get_settings()
        return self._settings

    @property
    def db(self) -> "Client":
        """Get the Supabase client."""
        if self._db is None:
            from shared.database import get_supabase_client
            self._db = get_supabase_client()
        return self._db

    @property
    def users(self) -> "IUserRepository":
        """Get the user repository instance."""
        if self._users is None:
            from modules.auth.repository import SupabaseUserRepository
            self._users = SupabaseUserRepository(self.db, self.settings.users_table)
        return self._users

    @property
    def hasher(self) -> "PasswordHasher":
        """Get the password hasher instance."""
        if self._hasher is None:
            from modules.auth.password import PasswordHasher
            self._hasher = PasswordHasher(self.settings.bcrypt_rounds)
        return self._hasher

    @property
    def tokens(self) -> "TokenService":
        """Get the token service instance."""
        if self._tokens is None:
            from modules.auth.tokens import TokenService
            self._tokens = TokenService.from_settings(self.settings)
        return self._tokens

    @property
    def auth(self) -> "IAuthService":
        """Get the auth service instance."""
        if self._auth_service is None:
            from modules.auth.service import AuthService
            self._auth_service = AuthService(
                users=self.users,
                tokens=self.tokens,
                hasher=self.hasher,
            )
        return self._auth_service

    @property
    def identity_resolver(self) -> "IdentityResolver":
        """Get the identity resolver instance."""
        if self._identity_resolver is None:
            from modules.auth.resolver import IdentityResolver
            self._identity_resolver = IdentityResolver(
                tokens=self.tokens,
                users=self.users,
            )
        return self._identity_resolver

    def reset(self) -> None:
        """
        Reset all cached services.

        This is primarily for testing - allows tests to get fresh
        service instances with different mock dependencies.
        """
        self._db = None
        self._users = None
        self._hasher = None
        self._tokens = None
        self._auth_service = None
        self._identity_resolver = None


# Module-level container singleton
_container: ServiceContainer | None = None


def get_container() -> ServiceContainer:
    """Get the singleton service container."""
    global _container
    if _container is None:
        _container = ServiceContainer()
    return _container


def reset_container() -> None:
    """
    Reset the service container.

    This clears the cached container, so the next call to get_container()
    will create a fresh container with new service instances.

    Primarily used for testing.
    """
    global _container
    _container = None


# FastAPI dependency functions
# These are the functions that should be used in route Depends() calls


def get_auth_service() -> "IAuthService":
    """FastAPI dependency for auth service."""
    return get_container().auth


def get_identity_resolver() -> "IdentityResolver":
    """FastAPI dependency for identity resolver."""
    return get_container().identity_resolver


def get_user_repository() -> "IUserRepository":
    """FastAPI dependency for user repository."""
    return get_container().users
