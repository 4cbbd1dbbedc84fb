"""Request/response schemas for noise-level endpoints."""

from __future__ import annotations

from datetime import datetime, timezone

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel


def to_utc(value: datetime) -> datetime:
    """Convert to an aware UTC datetime. Naive values are taken to be UTC already."""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


class NoiseLevelBase(BaseModel):
    """Fields shared by incoming and outgoing readings."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, from_attributes=True)

    latitude: float = Field(..., ge=-90, le=90)
    longitude: float = Field(..., ge=-180, le=180)
    time: datetime
    laeq: float = 0.0
    la50: float = 0.0
    measurements_count: int = Field(0, ge=0)

    @field_validator("time")
    @classmethod
    def normalize_time(cls, v: datetime) -> datetime:
        """Store and compare every timestamp in UTC."""
        return to_utc(v)


class NoiseLevelCreate(NoiseLevelBase):
    """A reading submitted by a client."""


class NoiseLevelRead(NoiseLevelBase):
    """A stored reading."""
