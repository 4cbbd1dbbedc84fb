"""Service-level tests for recording noise readings."""

from datetime import datetime, timezone

import pytest
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from soundtrek.db.models import NoiseLevel
from soundtrek.errors import ConflictError
from soundtrek.noise.schemas import NoiseLevelCreate
from soundtrek.noise.service import get_latest_noise_level, record_noise_level

AT_TEN = datetime(2024, 3, 5, 10, tzinfo=timezone.utc)


def make_reading(laeq: float = 55.0) -> NoiseLevelCreate:
    return NoiseLevelCreate(
        latitude=44.43,
        longitude=26.10,
        time=AT_TEN,
        laeq=laeq,
        la50=laeq - 5,
        measurements_count=3,
    )


class TestRecordNoiseLevel:
    async def test_duplicate_key_raises_conflict(self, db_session: AsyncSession):
        await record_noise_level(db_session, make_reading())
        await db_session.commit()
        db_session.expunge_all()

        with pytest.raises(ConflictError):
            await record_noise_level(db_session, make_reading(laeq=70.0))

    async def test_session_usable_after_conflict(self, db_session: AsyncSession):
        await record_noise_level(db_session, make_reading())
        await db_session.commit()
        db_session.expunge_all()

        with pytest.raises(ConflictError):
            await record_noise_level(db_session, make_reading(laeq=70.0))

        stored = (await db_session.scalars(select(NoiseLevel))).all()
        assert [r.laeq for r in stored] == [55.0]
        latest = await get_latest_noise_level(db_session, 44.43, 26.10)
        assert latest.laeq == 55.0
