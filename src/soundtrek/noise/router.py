"""Noise-level router: /noiseLevel, /latestMap and the bucketed range queries."""

from __future__ import annotations

from datetime import datetime
from urllib.parse import quote

from fastapi import APIRouter, Depends, Query, Response, status
from sqlalchemy.ext.asyncio import AsyncSession

from soundtrek.database import get_session
from soundtrek.noise.ranges import Bucket
from soundtrek.noise.schemas import NoiseLevelCreate, NoiseLevelRead
from soundtrek.noise.service import (
    get_latest_map,
    get_latest_noise_level,
    get_noise_levels_for_bucket,
    record_noise_level,
)

router = APIRouter(tags=["Noise levels"])


async def _bucket_readings(
    db: AsyncSession, latitude: float, longitude: float, bucket: Bucket, day: datetime
) -> list[NoiseLevelRead]:
    readings = await get_noise_levels_for_bucket(db, latitude, longitude, bucket, day)
    return [NoiseLevelRead.model_validate(r) for r in readings]


@router.get("/noiseLevel", response_model=NoiseLevelRead)
async def latest_noise_level(
    latitude: float = Query(...),
    longitude: float = Query(...),
    db: AsyncSession = Depends(get_session),
) -> NoiseLevelRead:
    """Most recent reading at the exact coordinates."""
    reading = await get_latest_noise_level(db, latitude, longitude)
    return NoiseLevelRead.model_validate(reading)


@router.post("/noiseLevel", response_model=NoiseLevelRead, status_code=status.HTTP_201_CREATED)
async def create_noise_level(
    body: NoiseLevelCreate,
    response: Response,
    db: AsyncSession = Depends(get_session),
) -> NoiseLevelRead:
    """Store a new reading. Its time is normalised to UTC."""
    reading = await record_noise_level(db, body)
    await db.commit()
    result = NoiseLevelRead.model_validate(reading)
    response.headers["Location"] = (
        f"/noiseLevels/{result.latitude}/{result.longitude}/{quote(result.time.isoformat(), safe='')}"
    )
    return result


@router.get("/latestMap", response_model=list[NoiseLevelRead])
async def latest_map(db: AsyncSession = Depends(get_session)) -> list[NoiseLevelRead]:
    """Latest reading for every location that has one."""
    readings = await get_latest_map(db)
    return [NoiseLevelRead.model_validate(r) for r in readings]


@router.get("/noiseLevelsByDay", response_model=list[NoiseLevelRead])
async def noise_levels_by_day(
    latitude: float = Query(...),
    longitude: float = Query(...),
    day: datetime = Query(...),
    db: AsyncSession = Depends(get_session),
) -> list[NoiseLevelRead]:
    """Readings on the calendar day of ``day`` (UTC)."""
    return await _bucket_readings(db, latitude, longitude, Bucket.DAY, day)


@router.get("/noiseLevelsByWeek", response_model=list[NoiseLevelRead])
async def noise_levels_by_week(
    latitude: float = Query(...),
    longitude: float = Query(...),
    day: datetime = Query(...),
    db: AsyncSession = Depends(get_session),
) -> list[NoiseLevelRead]:
    """Readings in the Monday-to-Sunday week containing ``day``."""
    return await _bucket_readings(db, latitude, longitude, Bucket.WEEK, day)


@router.get("/noiseLevelsByMonth", response_model=list[NoiseLevelRead])
async def noise_levels_by_month(
    latitude: float = Query(...),
    longitude: float = Query(...),
    day: datetime = Query(...),
    db: AsyncSession = Depends(get_session),
) -> list[NoiseLevelRead]:
    """Readings in the calendar month containing ``day``."""
    return await _bucket_readings(db, latitude, longitude, Bucket.MONTH, day)


@router.get("/noiseLevelsByYear", response_model=list[NoiseLevelRead])
async def noise_levels_by_year(
    latitude: float = Query(...),
    longitude: float = Query(...),
    day: datetime = Query(...),
    db: AsyncSession = Depends(get_session),
) -> list[NoiseLevelRead]:
    """Readings in the calendar year containing ``day``."""
    return await _bucket_readings(db, latitude, longitude, Bucket.YEAR, day)
