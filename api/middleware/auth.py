"""
Bearer authentication dependency.

Resolves the ``Authorization`` header to an existing user. Every failure
becomes the same 401; the specific reason is logged, never returned.
"""

import logging
from typing import Optional

from fastapi import Depends, Header, HTTPException, status

from modules.auth.exceptions import UserNotFoundError
from modules.auth.resolver import IdentityResolver
from shared.exceptions import AuthenticationError
from shared.models import AuthenticatedIdentity

from ..dependencies import get_identity_resolver

logger = logging.getLogger(__name__)


class AuthError(HTTPException):
    """Authentication error with consistent format."""
    def __init__(self, detail: str = "Unauthorized"):
        super().__init__(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=detail,
            headers={"WWW-Authenticate": "Bearer"},
        )


async def get_current_user(
    authorization: Optional[str] = Header(default=None),
    resolver: IdentityResolver = Depends(get_identity_resolver),
) -> AuthenticatedIdentity:
    """
    Dependency that requires authentication.

    Use this for endpoints that require a logged-in user.

    Usage:
        @router.get("/protected")
        async def protected_route(user: AuthenticatedIdentity = Depends(get_current_user)):
            return {"user_id": user.id}
    """
    try:
        return await resolver.resolve(authorization)
    except (AuthenticationError, UserNotFoundError) as e:
        logger.info("Rejected credentials: %s", e.code)
        raise AuthError()

