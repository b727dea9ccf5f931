"""
Authentication module data models.

These models define the data structures used by the auth module
and exposed to other modules through the interface.

Stored users and returned users are different types: ``UserRecord`` carries
the password hash and never leaves the module; ``UserProfile`` has no
password field at all.
"""

from datetime import datetime
from typing import Annotated
from pydantic import (
    BaseModel,
    ConfigDict,
    EmailStr,
    Field,
    StringConstraints,
    field_validator,
)
from pydantic.alias_generators import to_camel

# bcrypt only reads the first 72 bytes of its input.
MAX_PASSWORD_BYTES = 72
MIN_PASSWORD_LENGTH = 6


def normalize_email(email: str) -> str:
    """Canonical form used for storage and uniqueness checks."""
    return email.strip().lower()


PersonName = Annotated[
    str, StringConstraints(strip_whitespace=True, min_length=2, max_length=50)
]


class CamelModel(BaseModel):
    """Base for models exchanged with clients as camelCase JSON."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


# -----------------------------------------------------------------------------
# Requests
# -----------------------------------------------------------------------------


class RegisterRequest(CamelModel):
    """Registration input."""

    first_name: PersonName
    last_name: PersonName
    email: EmailStr
    password: str = Field(..., min_length=MIN_PASSWORD_LENGTH)

    @field_validator("email")
    @classmethod
    def lowercase_email(cls, value: str) -> str:
        return normalize_email(value)

    @field_validator("password")
    @classmethod
    def password_fits_hasher(cls, value: str) -> str:
        if len(value.encode("utf-8")) > MAX_PASSWORD_BYTES:
            raise ValueError(f"Password cannot exceed {MAX_PASSWORD_BYTES} bytes")
        return value


class LoginRequest(CamelModel):
    """Login input."""

    email: EmailStr
    password: str = Field(..., min_length=1)

    @field_validator("email")
    @classmethod
    def lowercase_email(cls, value: str) -> str:
        return normalize_email(value)


# -----------------------------------------------------------------------------
# Users
# -----------------------------------------------------------------------------


class UserProfile(CamelModel):
    """
    A user as returned to clients.

    There is no password field; a profile cannot leak a hash.
    """

    id: str = Field(..., description="User ID (UUID)")
    email: EmailStr = Field(..., description="Email address")
    first_name: str = Field(..., description="First name")
    last_name: str = Field(..., description="Last name")
    created_at: datetime = Field(..., description="Account creation time")
    updated_at: datetime = Field(..., description="Last update time")


class UserRecord(BaseModel):
    """A user row as held by the store, including the password hash."""

    id: str
    email: str
    password_hash: str = Field(..., repr=False)
    first_name: str
    last_name: str
    created_at: datetime
    updated_at: datetime

    model_config = {"frozen": True}

    def to_profile(self) -> UserProfile:
        """Drop the hash and return the client-facing view."""
        return UserProfile(
            id=self.id,
            email=self.email,
            first_name=self.first_name,
            last_name=self.last_name,
            created_at=self.created_at,
            updated_at=self.updated_at,
        )


class NewUser(BaseModel):
    """Fields the store needs to create a user."""

    email: str
    password_hash: str = Field(..., repr=False)
    first_name: str
    last_name: str


# -----------------------------------------------------------------------------
# Tokens
# -----------------------------------------------------------------------------


class TokenClaims(BaseModel):
    """
    Claims carried by an access token.

    Standard registered claim names are used so any JWT library can read them.
    """

    sub: str = Field(..., description="Subject (user ID)")
    email: str = Field(..., description="User's email")
    iss: str = Field(..., description="Issuer")
    aud: str = Field(..., description="Audience")
    iat: int = Field(..., description="Issued at timestamp")
    exp: int = Field(..., description="Expiration timestamp")

    model_config = {"frozen": True}

    @property
    def subject_id(self) -> str:
        return self.sub


# -----------------------------------------------------------------------------
# Responses
# -----------------------------------------------------------------------------


class AuthResponse(CamelModel):
    """A user together with a freshly issued access token."""

    user: UserProfile
    token: str
    token_type: str = "Bearer"
    expires_in: int = Field(..., description="Token lifetime in seconds")


class ProfileResponse(CamelModel):
    """Profile of the calling user."""

    user: UserProfile


class UserListResponse(CamelModel):
    """All registered users, newest first."""

    users: list[UserProfile]
    total: int
