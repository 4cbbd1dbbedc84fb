"""
Authentication business logic.

Handles user lookup, registration and password login.
"""

from __future__ import annotations

from datetime import datetime, timezone
from typing import TYPE_CHECKING

import structlog
from sqlalchemy import select
from sqlalchemy.exc import IntegrityError

from soundtrek.auth.password import check_needs_rehash, hash_password, verify_password
from soundtrek.db.models import User
from soundtrek.errors import ConflictError, InvalidCredentialsError

if TYPE_CHECKING:
    from sqlalchemy.ext.asyncio import AsyncSession

logger = structlog.get_logger()


# ---------------------------------------------------------------------------
# User queries
# ---------------------------------------------------------------------------


async def get_user_by_username(db: AsyncSession, username: str) -> User | None:
    """Fetch a user by exact username."""
    result = await db.execute(select(User).where(User.username == username))
    return result.scalar_one_or_none()


async def get_user_by_email(db: AsyncSession, email: str) -> User | None:
    """Fetch a user by email (stored lowercase)."""
    result = await db.execute(select(User).where(User.email == email.lower()))
    return result.scalar_one_or_none()


# ---------------------------------------------------------------------------
# Registration
# ---------------------------------------------------------------------------


async def register_user(db: AsyncSession, username: str, password: str, email: str) -> User:
    """
    Register a new user with username, email and password.

    Raises:
        ConflictError: If the username or the email is already taken.
    """
    if await get_user_by_username(db, username) is not None:
        msg = "Username already exists."
        raise ConflictError(msg)

    if await get_user_by_email(db, email) is not None:
        msg = "Email already exists."
        raise ConflictError(msg)

    user = User(
        username=username,
        email=email.lower().strip(),
        password_hash=hash_password(password),
        created_at=datetime.now(timezone.utc),
    )
    db.add(user)
    try:
        await db.flush()
    except IntegrityError as e:
        # Lost a race with a concurrent registration
        await db.rollback()
        msg = "Username or email already exists."
        raise ConflictError(msg) from e

    logger.info("user_registered", user_id=user.id, username=username)
    return user


# ---------------------------------------------------------------------------
# Login
# ---------------------------------------------------------------------------


async def authenticate_user(db: AsyncSession, username: str, password: str) -> User:
    """
    Authenticate a user with username + password.

    Raises:
        InvalidCredentialsError: If the username is unknown or the password is wrong.
    """
    user = await get_user_by_username(db, username)
    if user is None or not verify_password(password, user.password_hash):
        logger.info("login_failed", username=username)
        msg = "Invalid username or password"
        raise InvalidCredentialsError(msg)

    if check_needs_rehash(user.password_hash):
        user.password_hash = hash_password(password)
        await db.flush()
        logger.info("password_rehashed", user_id=user.id)

    return user
