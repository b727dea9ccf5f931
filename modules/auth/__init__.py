"""
Authentication module.

Handles password hashing, JWT issuance and verification, bearer token
resolution, and account registration/login.

Public API:
- IAuthService, IUserRepository: Interfaces for auth operations and the user store
- AuthService: Registration, login and profile lookup
- PasswordHasher, TokenService, IdentityResolver: Credential primitives
- UserProfile, UserRecord, TokenClaims: Models
- Auth exceptions: TokenExpiredError, InvalidCredentialsError, etc.
"""

from .interfaces import IAuthService, IUserRepository
from .models import (
    AuthResponse,
    LoginRequest,
    NewUser,
    RegisterRequest,
    TokenClaims,
    UserProfile,
    UserRecord,
)
from .password import PasswordHasher
from .tokens import TokenService
from .resolver import IdentityResolver, extract_token
from .service import AuthService
from .exceptions import (
    HashingError,
    MalformedHashError,
    TokenExpiredError,
    TokenMalformedError,
    TokenInvalidSignatureError,
    TokenClaimMismatchError,
    MissingHeaderError,
    MalformedHeaderError,
    EmptyTokenError,
    InvalidCredentialsError,
    DuplicateEmailError,
    UserNotFoundError,
    ConstraintViolationError,
    StoreUnavailableError,
)

__all__ = [
    # Interfaces
    "IAuthService",
    "IUserRepository",
    # Models
    "AuthResponse",
    "LoginRequest",
    "NewUser",
    "RegisterRequest",
    "TokenClaims",
    "UserProfile",
    "UserRecord",
    # Services
    "PasswordHasher",
    "TokenService",
    "IdentityResolver",
    "extract_token",
    "AuthService",
    # Exceptions
    "HashingError",
    "MalformedHashError",
    "TokenExpiredError",
    "TokenMalformedError",
    "TokenInvalidSignatureError",
    "TokenClaimMismatchError",
    "MissingHeaderError",
    "MalformedHeaderError",
    "EmptyTokenError",
    "InvalidCredentialsError",
    "DuplicateEmailError",
    "UserNotFoundError",
    "ConstraintViolationError",
    "StoreUnavailableError",
]
