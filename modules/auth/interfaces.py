"""
Authentication module interfaces.

Other modules should depend on these protocols, not the concrete
implementations. This enables testing with fakes and swapping the store.
"""

from typing import Protocol, Optional, runtime_checkable

from shared.models import AuthenticatedIdentity

from .models import AuthResponse, NewUser, UserProfile, UserRecord


@runtime_checkable
class IUserRepository(Protocol):
    """
    User store consumed by the auth module.

    The store must enforce uniqueness of the lowercased email.
    """

    def find_by_email(self, email: str) -> Optional[UserRecord]:
        """Return the user with this email (case-insensitive), or None."""
        ...

    def find_by_id(self, user_id: str) -> Optional[UserRecord]:
        """Return the user with this ID, or None."""
        ...

    def create(self, new_user: NewUser) -> UserRecord:
        """
        Insert a user and return it with its store-assigned ID.

        Raises:
            ConstraintViolationError: If the email is already present
        """
        ...

    def list_all(self) -> list[UserProfile]:
        """Return every user without password hashes, newest first."""
        ...

    def ping(self) -> bool:
        """Return True if the store answers a trivial query."""
        ...


@runtime_checkable
class IAuthService(Protocol):
    """
    Interface for account operations.

    This protocol defines the contract that the auth module exposes
    to the API layer. Implementations must provide all these methods.
    """

    async def register(
        self,
        first_name: str,
        last_name: str,
        email: str,
        password: str,
    ) -> AuthResponse:
        """
        Create an account and issue its first token.

        Raises:
            ValidationError: If any field is invalid (all violations listed)
            DuplicateEmailError: If the email is already registered
        """
        ...

    async def login(self, email: str, password: str) -> AuthResponse:
        """
        Check credentials and issue a token.

        Raises:
            InvalidCredentialsError: Unknown email or wrong password
        """
        ...

    async def get_profile(self, identity: AuthenticatedIdentity) -> UserProfile:
        """
        Re-read the caller's user record.

        Raises:
            UserNotFoundError: If the user was deleted after token issuance
        """
        ...

    async def list_users(self) -> list[UserProfile]:
        """Return all users without password hashes."""
        ...
