"""
Auth API endpoints.

Route prefix: /api/auth
"""

from fastapi import APIRouter, Depends

from api.dependencies import get_auth_service
from api.middleware.auth import get_current_user
from api.models.errors import ErrorResponse, ValidationErrorResponse
from shared.models import AuthenticatedIdentity

from .interfaces import IAuthService
from .models import AuthResponse, LoginRequest, ProfileResponse, RegisterRequest

router = APIRouter()


@router.post(
    "/register",
    response_model=AuthResponse,
    status_code=201,
    responses={400: {"model": ValidationErrorResponse}, 409: {"model": ErrorResponse}},
)
async def register(
    request: RegisterRequest,
    service: IAuthService = Depends(get_auth_service),
) -> AuthResponse:
    """Register a new user and return it with an access token."""
    return await service.register(
        first_name=request.first_name,
        last_name=request.last_name,
        email=request.email,
        password=request.password,
    )


@router.post(
    "/login",
    response_model=AuthResponse,
    responses={400: {"model": ValidationErrorResponse}, 401: {"model": ErrorResponse}},
)
async def login(
    request: LoginRequest,
    service: IAuthService = Depends(get_auth_service),
) -> AuthResponse:
    """Login with email + password."""
    return await service.login(email=request.email, password=request.password)


@router.get(
    "/profile",
    response_model=ProfileResponse,
    responses={404: {"model": ErrorResponse}},
)
async def get_profile(
    identity: AuthenticatedIdentity = Depends(get_current_user),
    service: IAuthService = Depends(get_auth_service),
) -> ProfileResponse:
    """
    Get the current user's profile.

    Requires authentication.
    """
    return ProfileResponse(user=await service.get_profile(identity))
