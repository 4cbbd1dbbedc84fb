"""User statistics router: /userInfo/*."""

from __future__ import annotations

from typing import Any

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from soundtrek.auth.dependencies import require_token
from soundtrek.config import Settings
from soundtrek.database import get_session
from soundtrek.dependencies import get_app_settings
from soundtrek.stats.schemas import (
    AllTimeMeasuredResponse,
    LeaderboardField,
    ScoreResponse,
    StreakResponse,
    TimeMeasuredResponse,
    UpdateAllTimeMeasuredRequest,
    UpdateScoreRequest,
    UpdateStreakRequest,
    UpdateTimeMeasuredRequest,
    UsersInfo,
)
from soundtrek.stats.service import (
    get_leaderboard,
    get_users_info,
    update_all_time_measured,
    update_score,
    update_streak,
    update_time_measured,
)

router = APIRouter(prefix="/userInfo", tags=["User stats"])


# ---------------------------------------------------------------------------
# Leaderboards (declared before /{user_id} so the literal paths win)
# ---------------------------------------------------------------------------


async def _leaderboard(db: AsyncSession, settings: Settings, field: LeaderboardField) -> list[UsersInfo]:
    return await get_leaderboard(db, field, limit=settings.leaderboard_limit)


@router.get("/score", response_model=list[UsersInfo])
async def top_by_score(
    db: AsyncSession = Depends(get_session),
    settings: Settings = Depends(get_app_settings),
) -> list[UsersInfo]:
    """Top users by current score."""
    return await _leaderboard(db, settings, LeaderboardField.SCORE)


@router.get("/maxScore", response_model=list[UsersInfo])
async def top_by_max_score(
    db: AsyncSession = Depends(get_session),
    settings: Settings = Depends(get_app_settings),
) -> list[UsersInfo]:
    """Top users by best-ever score."""
    return await _leaderboard(db, settings, LeaderboardField.MAX_SCORE)


@router.get("/streak", response_model=list[UsersInfo])
async def top_by_streak(
    db: AsyncSession = Depends(get_session),
    settings: Settings = Depends(get_app_settings),
) -> list[UsersInfo]:
    """Top users by current streak."""
    return await _leaderboard(db, settings, LeaderboardField.STREAK)


@router.get("/allTimeStreak", response_model=list[UsersInfo])
async def top_by_all_time_streak(
    db: AsyncSession = Depends(get_session),
    settings: Settings = Depends(get_app_settings),
) -> list[UsersInfo]:
    """Top users by longest-ever streak."""
    return await _leaderboard(db, settings, LeaderboardField.ALL_TIME_STREAK)


# ---------------------------------------------------------------------------
# Single user
# ---------------------------------------------------------------------------


@router.get("/{user_id}", response_model=UsersInfo)
async def user_info(user_id: int, db: AsyncSession = Depends(get_session)) -> UsersInfo:
    """Stats of one user."""
    return await get_users_info(db, user_id)


# TODO: decide whether the token's userId must match the path user_id; any valid token is accepted for now.
@router.put("/{user_id}/score", response_model=ScoreResponse)
async def put_score(
    user_id: int,
    body: UpdateScoreRequest,
    db: AsyncSession = Depends(get_session),
    _claims: dict[str, Any] = Depends(require_token),
) -> ScoreResponse:
    """Add ``newScore`` points to the user's score."""
    user = await update_score(db, user_id, body.new_score)
    await db.commit()
    return ScoreResponse(user_id=user.id, score=user.score)


@router.put("/{user_id}/streak", response_model=StreakResponse)
async def put_streak(
    user_id: int,
    body: UpdateStreakRequest,
    db: AsyncSession = Depends(get_session),
    _claims: dict[str, Any] = Depends(require_token),
) -> StreakResponse:
    """Set the user's current streak."""
    user = await update_streak(db, user_id, body.new_streak)
    await db.commit()
    return StreakResponse(user_id=user.id, streak=user.streak)


@router.put("/{user_id}/timeMeasured", response_model=TimeMeasuredResponse)
async def put_time_measured(
    user_id: int,
    body: UpdateTimeMeasuredRequest,
    db: AsyncSession = Depends(get_session),
    _claims: dict[str, Any] = Depends(require_token),
) -> TimeMeasuredResponse:
    """Set the user's measured time."""
    user = await update_time_measured(db, user_id, body.new_time_measured)
    await db.commit()
    return TimeMeasuredResponse(user_id=user.id, time_measured=user.time_measured)


@router.put("/{user_id}/allTimeMeasured", response_model=AllTimeMeasuredResponse)
async def put_all_time_measured(
    user_id: int,
    body: UpdateAllTimeMeasuredRequest,
    db: AsyncSession = Depends(get_session),
    _claims: dict[str, Any] = Depends(require_token),
) -> AllTimeMeasuredResponse:
    """Set the user's all-time measured total."""
    user = await update_all_time_measured(db, user_id, body.new_all_time_measured)
    await db.commit()
    return AllTimeMeasuredResponse(user_id=user.id, all_time_measured=user.all_time_measured)
