"""Noise-level persistence and queries.

Coordinates are matched by exact float equality: callers must send back the
same values that were used when the reading was stored.
"""

from __future__ import annotations

from datetime import datetime
from typing import TYPE_CHECKING

import structlog
from sqlalchemy import and_, func, select
from sqlalchemy.exc import IntegrityError

from soundtrek.db.models import NoiseLevel
from soundtrek.errors import ConflictError, NotFoundError
from soundtrek.noise.ranges import Bucket, bucket_range
from soundtrek.noise.schemas import NoiseLevelCreate

if TYPE_CHECKING:
    from sqlalchemy.ext.asyncio import AsyncSession

logger = structlog.get_logger()


async def record_noise_level(db: AsyncSession, data: NoiseLevelCreate) -> NoiseLevel:
    """
    Insert a new reading. ``data.time`` is already UTC.

    Raises:
        ConflictError: If a reading already exists at the same coordinates and time.
    """
    reading = NoiseLevel(
        latitude=data.latitude,
        longitude=data.longitude,
        time=data.time,
        laeq=data.laeq,
        la50=data.la50,
        measurements_count=data.measurements_count,
    )
    db.add(reading)
    try:
        await db.flush()
    except IntegrityError as e:
        await db.rollback()
        logger.info("noise_level_conflict", latitude=data.latitude, longitude=data.longitude, time=data.time.isoformat())
        msg = "A noise level reading already exists for these coordinates and time."
        raise ConflictError(msg) from e

    logger.info("noise_level_recorded", latitude=data.latitude, longitude=data.longitude, time=data.time.isoformat())
    return reading


async def get_latest_noise_level(db: AsyncSession, latitude: float, longitude: float) -> NoiseLevel:
    """
    Most recent reading at exactly (latitude, longitude).

    Raises:
        NotFoundError: If nothing was ever recorded there.
    """
    result = await db.execute(
        select(NoiseLevel)
        .where(NoiseLevel.latitude == latitude, NoiseLevel.longitude == longitude)
        .order_by(NoiseLevel.time.desc())
        .limit(1)
    )
    reading = result.scalar_one_or_none()
    if reading is None:
        msg = "No noise level data found for the given coordinates."
        raise NotFoundError(msg)
    return reading


async def get_latest_map(db: AsyncSession) -> list[NoiseLevel]:
    """One reading per distinct location: the most recent one."""
    latest = (
        select(
            NoiseLevel.latitude,
            NoiseLevel.longitude,
            func.max(NoiseLevel.time).label("max_time"),
        )
        .group_by(NoiseLevel.latitude, NoiseLevel.longitude)
        .subquery()
    )
    result = await db.execute(
        select(NoiseLevel)
        .join(
            latest,
            and_(
                NoiseLevel.latitude == latest.c.latitude,
                NoiseLevel.longitude == latest.c.longitude,
                NoiseLevel.time == latest.c.max_time,
            ),
        )
        .order_by(NoiseLevel.latitude, NoiseLevel.longitude)
    )
    return list(result.scalars().all())


async def get_noise_levels_between(
    db: AsyncSession,
    latitude: float,
    longitude: float,
    start: datetime,
    end: datetime,
) -> list[NoiseLevel]:
    """Readings at exactly (latitude, longitude) with ``start <= time < end``, oldest first."""
    result = await db.execute(
        select(NoiseLevel)
        .where(
            NoiseLevel.latitude == latitude,
            NoiseLevel.longitude == longitude,
            NoiseLevel.time >= start,
            NoiseLevel.time < end,
        )
        .order_by(NoiseLevel.time)
    )
    return list(result.scalars().all())


async def get_noise_levels_for_bucket(
    db: AsyncSession,
    latitude: float,
    longitude: float,
    bucket: Bucket,
    day: datetime,
) -> list[NoiseLevel]:
    """
    Readings in the day/week/month/year around ``day``.

    Raises:
        NotFoundError: If the bucket holds no readings.
    """
    start, end = bucket_range(bucket, day)
    readings = await get_noise_levels_between(db, latitude, longitude, start, end)
    if not readings:
        msg = f"No noise level data found for the given coordinates and {bucket.value}."
        raise NotFoundError(msg)
    return readings
