"""JWT validation for FastAPI routes.

Sessions are issued by the external identity provider; this module only
verifies the HS256 access token it hands the browser.
"""

import os
from typing import Optional

from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from jose import JWTError, jwt

ALGORITHM = "HS256"

security = HTTPBearer(auto_error=False)


def _get_jwt_secret() -> str:
    secret = os.getenv("AUTH_JWT_SECRET")
    if not secret:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="AUTH_JWT_SECRET not configured",
        )
    return secret


def _decode_user(token: str) -> Optional[dict]:
    """Return {id, email} from a valid token, None otherwise."""
    try:
        payload = jwt.decode(
            token,
            _get_jwt_secret(),
            algorithms=[ALGORITHM],
            options={"verify_aud": False},
        )
    except JWTError:
        return None
    user_id = payload.get("sub")
    if not user_id:
        return None
    return {"id": user_id, "email": payload.get("email")}


async def get_optional_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
) -> Optional[dict]:
    """Like get_current_user, but anonymous instead of an error."""
    if credentials is None or not os.getenv("AUTH_JWT_SECRET"):
        return None
    return _decode_user(credentials.credentials)


async def get_current_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
) -> dict:
    """Reject the request with 401 unless a valid bearer token is present."""
    if credentials is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Unauthorized - Please log in",
        )
    user = _decode_user(credentials.credentials)
    if user is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid or expired token",
        )
    return user
