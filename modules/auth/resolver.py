"""
Bearer token to identity resolution.

A token that verifies cryptographically is not enough: the subject must
still exist in the user store, so tokens for deleted accounts are refused.
"""

import logging
from typing import Optional

from shared.models import AuthenticatedIdentity

from .exceptions import (
    EmptyTokenError,
    MalformedHeaderError,
    MissingHeaderError,
    UserNotFoundError,
)
from .interfaces import IUserRepository
from .tokens import TokenService

logger = logging.getLogger(__name__)

BEARER_SCHEME = "Bearer"


def extract_token(header_value: Optional[str]) -> str:
    """
    Pull the token out of an ``Authorization`` header value.

    Raises:
        MissingHeaderError: Header absent or empty
        MalformedHeaderError: Not exactly ``Bearer <token>``
        EmptyTokenError: Scheme present, token blank
    """
    if not header_value:
        raise MissingHeaderError()

    parts = header_value.split(" ")
    if len(parts) != 2 or parts[0] != BEARER_SCHEME:
        raise MalformedHeaderError()

    if not parts[1].strip():
        raise EmptyTokenError()

    return parts[1]


class IdentityResolver:
    """Turns an ``Authorization`` header into a verified, existing user."""

    def __init__(self, tokens: TokenService, users: IUserRepository):
        self._tokens = tokens
        self._users = users

    async def resolve(self, header_value: Optional[str]) -> AuthenticatedIdentity:
        """
        Resolve the caller for a single request.

        Raises:
            AuthenticationError: Any header or token failure
            UserNotFoundError: Token is valid but its subject no longer exists
        """
        token = extract_token(header_value)
        claims = self._tokens.verify(token)

        if self._users.find_by_id(claims.sub) is None:
            raise UserNotFoundError(claims.sub)

        return AuthenticatedIdentity(id=claims.sub, email=claims.email)
