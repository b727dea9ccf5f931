"""Tests for auth module models."""

import pytest
from datetime import datetime, timezone
from pydantic import ValidationError

from modules.auth.models import (
    AuthResponse,
    LoginRequest,
    RegisterRequest,
    TokenClaims,
    UserProfile,
    UserRecord,
    normalize_email,
)


def _record(**overrides) -> UserRecord:
    now = datetime.now(timezone.utc)
    fields = {
        "id": "user-123",
        "email": "jo@x.com",
        "password_hash": "$2b$04$secret-hash-value",
        "first_name": "Jo",
        "last_name": "Li",
        "created_at": now,
        "updated_at": now,
    }
    fields.update(overrides)
    return UserRecord(**fields)


class TestNormalizeEmail:
    def test_trims_and_lowercases(self):
        assert normalize_email("  Jo@X.COM ") == "jo@x.com"


class TestRegisterRequest:
    def test_valid(self):
        request = RegisterRequest(
            first_name="Jo", last_name="Li", email="Jo@X.com", password="abcdef"
        )
        assert request.email == "jo@x.com"

    def test_accepts_camel_case(self):
        request = RegisterRequest.model_validate(
            {"firstName": "Jo", "lastName": "Li", "email": "jo@x.com", "password": "abcdef"}
        )
        assert request.first_name == "Jo"

    @pytest.mark.parametrize("name", ["J", "x" * 51, "   "])
    def test_name_length(self, name):
        with pytest.raises(ValidationError):
            RegisterRequest(first_name=name, last_name="Li", email="jo@x.com", password="abcdef")

    def test_name_bounds_inclusive(self):
        request = RegisterRequest(
            first_name="Jo", last_name="x" * 50, email="jo@x.com", password="abcdef"
        )
        assert len(request.last_name) == 50

    def test_short_password(self):
        with pytest.raises(ValidationError):
            RegisterRequest(first_name="Jo", last_name="Li", email="jo@x.com", password="abcde")

    def test_password_byte_limit(self):
        # 36 two-byte characters is 72 bytes; one more is too many
        RegisterRequest(first_name="Jo", last_name="Li", email="jo@x.com", password="é" * 36)
        with pytest.raises(ValidationError):
            RegisterRequest(first_name="Jo", last_name="Li", email="jo@x.com", password="é" * 37)

    def test_invalid_email(self):
        with pytest.raises(ValidationError):
            RegisterRequest(first_name="Jo", last_name="Li", email="jo", password="abcdef")

    def test_missing_fields_all_reported(self):
        with pytest.raises(ValidationError) as exc_info:
            RegisterRequest()
        assert len(exc_info.value.errors()) == 4


class TestLoginRequest:
    def test_lowercases_email(self):
        assert LoginRequest(email="JO@X.COM", password="x").email == "jo@x.com"

    def test_empty_password(self):
        with pytest.raises(ValidationError):
            LoginRequest(email="jo@x.com", password="")


class TestUserRecord:
    def test_to_profile_drops_hash(self):
        profile = _record().to_profile()

        assert isinstance(profile, UserProfile)
        assert "password_hash" not in profile.model_dump()
        assert profile.email == "jo@x.com"

    def test_repr_hides_hash(self):
        assert "secret-hash-value" not in repr(_record())

    def test_immutable(self):
        with pytest.raises(ValidationError):
            _record().email = "other@x.com"


class TestSerialization:
    def test_profile_uses_camel_case(self):
        data = _record().to_profile().model_dump(by_alias=True, mode="json")

        assert set(data) == {"id", "email", "firstName", "lastName", "createdAt", "updatedAt"}

    def test_auth_response_shape(self):
        response = AuthResponse(user=_record().to_profile(), token="abc", expires_in=43200)
        data = response.model_dump(by_alias=True)

        assert data["tokenType"] == "Bearer"
        assert data["expiresIn"] == 43200
        assert "passwordHash" not in data["user"]


class TestTokenClaims:
    def test_subject_id(self):
        claims = TokenClaims(
            sub="user-123", email="jo@x.com", iss="splitwise-api",
            aud="splitwise-client", iat=1, exp=2,
        )
        assert claims.subject_id == "user-123"

    def test_missing_claim(self):
        with pytest.raises(ValidationError):
            TokenClaims(sub="user-123", iss="i", aud="a", iat=1, exp=2)
