"""
HS256 JWT token management.

Tokens carry the user's id, username (``sub``) and email, and are bound to the
configured issuer and audience. There is no refresh token: once a token
expires the client logs in again.
"""

from __future__ import annotations

from datetime import datetime, timedelta, timezone
from typing import Any

import jwt

from soundtrek.config import Settings


def create_access_token(settings: Settings, user_id: int, username: str, email: str) -> str:
    """
    Create a signed bearer token valid for ``settings.jwt_expire_days``.

    Args:
        settings: Settings holding the shared secret, issuer and audience.
        user_id: The user's database ID.
        username: Stored as the ``sub`` claim.
        email: Stored as the ``email`` claim.

    Returns:
        Encoded JWT string.
    """
    now = datetime.now(timezone.utc)
    payload: dict[str, Any] = {
        "userId": str(user_id),
        "sub": username,
        "email": email,
        "iat": now,
        "exp": now + timedelta(days=settings.jwt_expire_days),
        "iss": settings.jwt_issuer,
        "aud": settings.jwt_audience,
    }
    return jwt.encode(payload, settings.jwt_secret, algorithm=settings.jwt_algorithm)


def verify_token(settings: Settings, token: str) -> dict[str, Any]:
    """
    Verify and decode a JWT token.

    Raises:
        jwt.InvalidTokenError: If the signature, expiry, issuer or audience is wrong.
    """
    try:
        payload: dict[str, Any] = jwt.decode(
            token,
            settings.jwt_secret,
            algorithms=[settings.jwt_algorithm],
            issuer=settings.jwt_issuer,
            audience=settings.jwt_audience,
            options={"require": ["exp", "iss", "aud", "sub"]},
        )
    except jwt.ExpiredSignatureError:
        msg = "Token has expired"
        raise jwt.InvalidTokenError(msg) from None

    if "userId" not in payload:
        msg = "Token is missing the userId claim"
        raise jwt.InvalidTokenError(msg)

    return payload
