"""ORM models for the users and noise_levels tables."""

from __future__ import annotations

from datetime import datetime, timedelta

from sqlalchemy import DateTime, Double, Integer, Interval, String, text
from sqlalchemy.orm import Mapped, mapped_column

from soundtrek.db.base import Base

NO_SCORE_MONTH = "noScore"
NO_TIME_MONTH = "noRecord"


# ---------------------------------------------------------------------------
# Users
# ---------------------------------------------------------------------------


class User(Base):
    """Maps to the 'users' table: identity plus gamification counters."""

    __tablename__ = "users"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    username: Mapped[str] = mapped_column(String(64), unique=True, nullable=False)
    email: Mapped[str] = mapped_column(String(320), unique=True, nullable=False)
    password_hash: Mapped[str] = mapped_column(String(256), nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, server_default=text("CURRENT_TIMESTAMP")
    )

    # --- Gamification ---
    streak: Mapped[int] = mapped_column(Integer, default=0, server_default="0")
    all_time_streak: Mapped[int] = mapped_column(Integer, default=0, server_default="0")
    score: Mapped[int] = mapped_column(Integer, default=0, server_default="0")
    max_score: Mapped[int] = mapped_column(Integer, default=0, server_default="0")
    month_max_score: Mapped[str] = mapped_column(String(32), default=NO_SCORE_MONTH, server_default=NO_SCORE_MONTH)
    time_measured: Mapped[timedelta] = mapped_column(Interval, default=timedelta(0))
    max_time: Mapped[timedelta] = mapped_column(Interval, default=timedelta(0))
    month_max_time: Mapped[str] = mapped_column(String(32), default=NO_TIME_MONTH, server_default=NO_TIME_MONTH)
    all_time_measured: Mapped[timedelta] = mapped_column(Interval, default=timedelta(0))


# ---------------------------------------------------------------------------
# Noise levels
# ---------------------------------------------------------------------------


class NoiseLevel(Base):
    """A single noise reading. Keyed by exact coordinates and UTC time."""

    __tablename__ = "noise_levels"

    latitude: Mapped[float] = mapped_column(Double, primary_key=True)
    longitude: Mapped[float] = mapped_column(Double, primary_key=True)
    time: Mapped[datetime] = mapped_column(DateTime(timezone=True), primary_key=True)
    laeq: Mapped[float] = mapped_column(Double, default=0.0)
    la50: Mapped[float] = mapped_column(Double, default=0.0)
    measurements_count: Mapped[int] = mapped_column(Integer, default=0)
