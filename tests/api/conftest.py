"""
API test fixtures.

The app is wired to the in-memory user store through
``app.dependency_overrides``; nothing talks to Supabase.
"""

import pytest
from fastapi.testclient import TestClient

from api import create_app
from api.dependencies import (
    get_auth_service,
    get_identity_resolver,
    get_user_repository,
)


@pytest.fixture
def app(auth_service, identity_resolver, user_repository):
    app = create_app()
    app.dependency_overrides[get_auth_service] = lambda: auth_service
    app.dependency_overrides[get_identity_resolver] = lambda: identity_resolver
    app.dependency_overrides[get_user_repository] = lambda: user_repository
    yield app
    app.dependency_overrides.clear()


@pytest.fixture
def client(app) -> TestClient:
    return TestClient(app)


@pytest.fixture
def register_payload() -> dict[str, str]:
    return {
        "firstName": "Jo",
        "lastName": "Li",
        "email": "jo@x.com",
        "password": "abcdef",
    }


@pytest.fixture
def auth_headers(client, register_payload) -> dict[str, str]:
    """Register the default user and return a Bearer header for it."""
    response = client.post("/api/auth/register", json=register_payload)
    return {"Authorization": f"Bearer {response.json()['token']}"}
