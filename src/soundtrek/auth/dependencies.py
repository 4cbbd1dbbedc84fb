"""FastAPI authentication dependencies."""

from __future__ import annotations

from typing import Any

import jwt
from fastapi import Depends, HTTPException, Security
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from soundtrek.auth.jwt import verify_token
from soundtrek.config import Settings
from soundtrek.dependencies import get_app_settings

_bearer = HTTPBearer()


async def require_token(
    credentials: HTTPAuthorizationCredentials = Security(_bearer),
    settings: Settings = Depends(get_app_settings),
) -> dict[str, Any]:
    """
    Verify the bearer JWT and return its claims.

    Only the token itself is checked. Whether the holder may act on a given
    user is left to the caller.
    """
    try:
        return verify_token(settings, credentials.credentials)
    except jwt.InvalidTokenError as e:
        raise HTTPException(status_code=401, detail=str(e)) from e
