"""
Shared data models used across modules.

These models are shared infrastructure, not business logic.
Module-specific models should stay in their respective module directories.
"""

from pydantic import BaseModel, EmailStr, Field


class AuthenticatedIdentity(BaseModel):
    """
    The caller behind a verified bearer token.

    Built from the token's claims once the subject has been confirmed to
    exist in the user store, and attached to that single request only.
    """

    id: str = Field(..., description="User ID (token subject)")
    email: EmailStr = Field(..., description="User's email address")

    model_config = {
        "frozen": True,  # Make immutable for safety
        "extra": "ignore",
    }
