"""Authentication router: /register and /login."""

from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession

from soundtrek.auth.jwt import create_access_token
from soundtrek.auth.schemas import LoginRequest, RegisterRequest, TokenResponse
from soundtrek.auth.service import authenticate_user, register_user
from soundtrek.config import Settings
from soundtrek.database import get_session
from soundtrek.db.models import User
from soundtrek.dependencies import get_app_settings
from soundtrek.errors import ConflictError, InvalidCredentialsError

router = APIRouter(tags=["Authentication"])


def _token_response(settings: Settings, user: User) -> TokenResponse:
    """Issue a token for the user."""
    token = create_access_token(settings, user.id, user.username, user.email)
    return TokenResponse(token=token, user_id=user.id)


@router.post("/register", response_model=TokenResponse, status_code=status.HTTP_201_CREATED)
async def register(
    body: RegisterRequest,
    db: AsyncSession = Depends(get_session),
    settings: Settings = Depends(get_app_settings),
) -> TokenResponse:
    """Create an account and return a bearer token."""
    try:
        user = await register_user(db, username=body.username, password=body.password, email=body.email)
    except ConflictError as e:
        raise HTTPException(status_code=400, detail=str(e)) from e

    await db.commit()
    return _token_response(settings, user)


@router.post("/login", response_model=TokenResponse)
async def login(
    body: LoginRequest,
    db: AsyncSession = Depends(get_session),
    settings: Settings = Depends(get_app_settings),
) -> TokenResponse:
    """Login with username + password."""
    try:
        user = await authenticate_user(db, body.username, body.password)
    except InvalidCredentialsError as e:
        raise HTTPException(status_code=401, detail=str(e)) from e

    await db.commit()
    return _token_response(settings, user)
