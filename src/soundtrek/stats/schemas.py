"""Request/response schemas for user statistics endpoints."""

from __future__ import annotations

from datetime import datetime, timedelta
from enum import Enum
from typing import Annotated

from pydantic import AfterValidator, BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

from soundtrek.noise.schemas import to_utc


class CamelModel(BaseModel):
    """Serialises as camelCase, accepts either spelling on input."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class LeaderboardField(str, Enum):
    """Counters a leaderboard can be sorted by."""

    SCORE = "score"
    MAX_SCORE = "maxScore"
    STREAK = "streak"
    ALL_TIME_STREAK = "allTimeStreak"


# ---------------------------------------------------------------------------
# UsersInfo
# ---------------------------------------------------------------------------


class UsersInfo(CamelModel):
    """Public identity plus gamification counters of one user."""

    user_id: int
    created_at: datetime
    username: str
    streak: int
    all_time_streak: int
    score: int
    max_score: int
    month_max_score: str
    time_measured: timedelta
    max_time: timedelta
    month_max_time: str
    all_time_measured: timedelta

    @field_validator("created_at")
    @classmethod
    def normalize_created_at(cls, v: datetime) -> datetime:
        return to_utc(v)


# ---------------------------------------------------------------------------
# Updates
# ---------------------------------------------------------------------------


def _non_negative(v: timedelta) -> timedelta:
    if v < timedelta(0):
        msg = "Duration must not be negative"
        raise ValueError(msg)
    return v


NonNegativeDuration = Annotated[timedelta, AfterValidator(_non_negative)]


class UpdateScoreRequest(CamelModel):
    """Points to add to the current score (may be negative)."""

    new_score: int


class UpdateStreakRequest(CamelModel):
    """New absolute streak length."""

    new_streak: int = Field(..., ge=0)


class UpdateTimeMeasuredRequest(CamelModel):
    """New absolute measured time."""

    new_time_measured: NonNegativeDuration


class UpdateAllTimeMeasuredRequest(CamelModel):
    """New absolute all-time measured time."""

    new_all_time_measured: NonNegativeDuration


class ScoreResponse(CamelModel):
    user_id: int
    score: int


class StreakResponse(CamelModel):
    user_id: int
    streak: int


class TimeMeasuredResponse(CamelModel):
    user_id: int
    time_measured: timedelta


class AllTimeMeasuredResponse(CamelModel):
    user_id: int
    all_time_measured: timedelta
