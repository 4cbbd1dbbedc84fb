"""User statistics: the UsersInfo read path, leaderboards and counter updates.

Every update reads the user row with ``SELECT ... FOR UPDATE`` so two
concurrent updates of the same user serialise on the row lock instead of
losing one of the max-tracking writes. The caller commits.
"""

from __future__ import annotations

from datetime import datetime, timedelta, timezone
from typing import TYPE_CHECKING, Any

import structlog
from sqlalchemy import Select, select

from soundtrek.db.models import User
from soundtrek.errors import NotFoundError
from soundtrek.stats.schemas import LeaderboardField, UsersInfo

if TYPE_CHECKING:
    from sqlalchemy.ext.asyncio import AsyncSession

logger = structlog.get_logger()

_LEADERBOARD_COLUMNS: dict[LeaderboardField, Any] = {
    LeaderboardField.SCORE: User.score,
    LeaderboardField.MAX_SCORE: User.max_score,
    LeaderboardField.STREAK: User.streak,
    LeaderboardField.ALL_TIME_STREAK: User.all_time_streak,
}


def month_label(now: datetime | None = None) -> str:
    """Month a record was set in, e.g. 'March-2024'."""
    if now is None:
        now = datetime.now(timezone.utc)
    return now.strftime("%B-%Y")


# ---------------------------------------------------------------------------
# Reads
# ---------------------------------------------------------------------------


def _users_info_query() -> Select[Any]:
    """SELECT producing UsersInfo rows. Never exposes email or password hash."""
    return select(
        User.id.label("user_id"),
        User.created_at,
        User.username,
        User.streak,
        User.all_time_streak,
        User.score,
        User.max_score,
        User.month_max_score,
        User.time_measured,
        User.max_time,
        User.month_max_time,
        User.all_time_measured,
    )


async def get_users_info(db: AsyncSession, user_id: int) -> UsersInfo:
    """
    Stats projection for one user.

    Raises:
        NotFoundError: If the user does not exist.
    """
    result = await db.execute(_users_info_query().where(User.id == user_id))
    row = result.mappings().one_or_none()
    if row is None:
        msg = "User not found."
        raise NotFoundError(msg)
    return UsersInfo.model_validate(dict(row))


async def get_leaderboard(db: AsyncSession, field: LeaderboardField, limit: int = 100) -> list[UsersInfo]:
    """
    Top ``limit`` users by ``field``, highest first. Ties go to the older account.

    Raises:
        NotFoundError: If there are no users at all.
    """
    column = _LEADERBOARD_COLUMNS[field]
    result = await db.execute(_users_info_query().order_by(column.desc(), User.id).limit(limit))
    rows = result.mappings().all()
    if not rows:
        msg = "No users found."
        raise NotFoundError(msg)
    return [UsersInfo.model_validate(dict(row)) for row in rows]


# ---------------------------------------------------------------------------
# Updates
# ---------------------------------------------------------------------------


async def _lock_user(db: AsyncSession, user_id: int) -> User:
    result = await db.execute(select(User).where(User.id == user_id).with_for_update())
    user = result.scalar_one_or_none()
    if user is None:
        msg = "User not found."
        raise NotFoundError(msg)
    return user


async def update_score(db: AsyncSession, user_id: int, delta: int, now: datetime | None = None) -> User:
    """Add ``delta`` to the score; a new personal best also stamps the month."""
    user = await _lock_user(db, user_id)
    user.score = user.score + delta
    if user.score > user.max_score:
        user.max_score = user.score
        user.month_max_score = month_label(now)
    await db.flush()
    logger.info("score_updated", user_id=user_id, delta=delta, score=user.score, max_score=user.max_score)
    return user


async def update_streak(db: AsyncSession, user_id: int, streak: int) -> User:
    """Set the current streak, raising the all-time streak if it was beaten."""
    user = await _lock_user(db, user_id)
    user.streak = streak
    if streak > user.all_time_streak:
        user.all_time_streak = streak
    await db.flush()
    logger.info("streak_updated", user_id=user_id, streak=streak, all_time_streak=user.all_time_streak)
    return user


async def update_time_measured(
    db: AsyncSession, user_id: int, time_measured: timedelta, now: datetime | None = None
) -> User:
    """Set the measured time; a new maximum also stamps the month."""
    user = await _lock_user(db, user_id)
    user.time_measured = time_measured
    if time_measured > user.max_time:
        user.max_time = time_measured
        user.month_max_time = month_label(now)
    await db.flush()
    logger.info("time_measured_updated", user_id=user_id, seconds=time_measured.total_seconds())
    return user


async def update_all_time_measured(db: AsyncSession, user_id: int, all_time_measured: timedelta) -> User:
    """Set the all-time measured total."""
    user = await _lock_user(db, user_id)
    user.all_time_measured = all_time_measured
    await db.flush()
    logger.info("all_time_measured_updated", user_id=user_id, seconds=all_time_measured.total_seconds())
    return user
