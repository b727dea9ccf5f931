"""
User-related endpoints.

Provides the user directory for authenticated callers.
"""

from fastapi import APIRouter, Depends

from modules.auth.interfaces import IAuthService
from modules.auth.models import UserListResponse
from shared.models import AuthenticatedIdentity

from ..dependencies import get_auth_service
from ..middleware.auth import get_current_user

router = APIRouter()


@router.get("", response_model=UserListResponse)
async def list_users(
    user: AuthenticatedIdentity = Depends(get_current_user),
    service: IAuthService = Depends(get_auth_service),
) -> UserListResponse:
    """
    List all registered users, newest first.

    Requires authentication. Password hashes are never included.
    """
    users = await service.list_users()
    return UserListResponse(users=users, total=len(users))
