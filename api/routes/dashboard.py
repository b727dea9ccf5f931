"""Protected dashboard endpoint."""

from datetime import datetime, timezone

from fastapi import APIRouter, Depends
from pydantic import BaseModel

from shared.models import AuthenticatedIdentity

from ..middleware.auth import get_current_user

router = APIRouter()


class DashboardResponse(BaseModel):
    user: AuthenticatedIdentity
    message: str
    timestamp: datetime


@router.get("/dashboard", response_model=DashboardResponse)
async def dashboard(
    user: AuthenticatedIdentity = Depends(get_current_user),
) -> DashboardResponse:
    return DashboardResponse(
        user=user,
        message=f"Hello {user.email}, you have successfully accessed a protected route!",
        timestamp=datetime.now(timezone.utc),
    )
