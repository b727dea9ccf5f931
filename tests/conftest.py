"""
Shared test fixtures and utilities.

This module provides common test infrastructure used across all test modules.
"""

import pytest
from datetime import datetime, timezone, timedelta
import jwt  # PyJWT

from api.dependencies import reset_container
from modules.auth.password import PasswordHasher
from modules.auth.resolver import IdentityResolver
from modules.auth.service import AuthService
from modules.auth.tokens import TokenService
from tests.fakes import InMemoryUserRepository


# Test JWT secret (only for testing)
TEST_JWT_SECRET = "test-secret-key-for-testing-only"
TEST_ISSUER = "splitwise-api"
TEST_AUDIENCE = "splitwise-client"
TEST_TTL_SECONDS = 3600


def create_test_token(
    user_id: str = "test-user-123",
    email: str = "test@example.com",
    expired: bool = False,
    secret: str = TEST_JWT_SECRET,
    issuer: str = TEST_ISSUER,
    audience: str = TEST_AUDIENCE,
) -> str:
    """
    Create a test JWT token for authentication.

    Args:
        user_id: User ID to include in the token
        email: Email to include in the token
        expired: If True, creates an expired token
        secret: Signing secret
        issuer: ``iss`` claim
        audience: ``aud`` claim

    Returns:
        JWT token string
    """
    now = datetime.now(timezone.utc)
    iat = now - timedelta(hours=2) if expired else now
    exp = now - timedelta(hours=1) if expired else now + timedelta(hours=1)

    payload = {
        "sub": user_id,
        "email": email,
        "iss": issuer,
        "aud": audience,
        "exp": int(exp.timestamp()),
        "iat": int(iat.timestamp()),
    }
    return jwt.encode(payload, secret, algorithm="HS256")


@pytest.fixture(autouse=True)
def reset_service_container():
    """Reset the service container before and after each test."""
    reset_container()
    yield
    reset_container()


@pytest.fixture
def token_service() -> TokenService:
    return TokenService(
        secret=TEST_JWT_SECRET,
        issuer=TEST_ISSUER,
        audience=TEST_AUDIENCE,
        expires_in_seconds=TEST_TTL_SECONDS,
    )


@pytest.fixture
def hasher() -> PasswordHasher:
    """Cheapest bcrypt cost so the suite stays fast."""
    return PasswordHasher(rounds=4)


@pytest.fixture
def user_repository() -> InMemoryUserRepository:
    return InMemoryUserRepository()


@pytest.fixture
def auth_service(user_repository, token_service, hasher) -> AuthService:
    return AuthService(users=user_repository, tokens=token_service, hasher=hasher)


@pytest.fixture
def identity_resolver(token_service, user_repository) -> IdentityResolver:
    return IdentityResolver(tokens=token_service, users=user_repository)


@pytest.fixture
def test_user_email() -> str:
    """Provide a consistent test user email."""
    return "jo@x.com"


@pytest.fixture
def registration(test_user_email) -> dict[str, str]:
    """Valid registration fields."""
    return {
        "first_name": "Jo",
        "last_name": "Li",
        "email": test_user_email,
        "password": "abcdef",
    }
