"""Session probe for the frontend."""

from typing import Optional

from fastapi import APIRouter, Depends

from web.auth import get_optional_user
from web.models import AuthUser, AuthUserResponse

router = APIRouter(prefix="/api/auth", tags=["auth"])


@router.get("/user", response_model=AuthUserResponse)
async def current_user(user: Optional[dict] = Depends(get_optional_user)):
    """Signed-in user, or ``null``. Never 401."""
    return AuthUserResponse(user=AuthUser(**user) if user else None)
