from __future__ import annotations

from datetime import datetime, timezone
from typing import Annotated
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field, StringConstraints, field_validator


def _ensure_tzaware(value: datetime | None) -> datetime | None:
    if value is None:
        return value
    if value.tzinfo is None or value.tzinfo.utcoffset(value) is None:
        raise ValueError("datetime must be timezone-aware")
    return value.astimezone(timezone.utc)


def as_utc(value: datetime | None) -> datetime | None:
    # Some backends (SQLite) hand back naive values; everything is stored as UTC
    if value is None:
        return value
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


# Whitespace is stripped before the length checks run
Title = Annotated[str, StringConstraints(strip_whitespace=True, min_length=1, max_length=200)]
Location = Annotated[str, StringConstraints(strip_whitespace=True, min_length=1, max_length=300)]


class SchemaBase(BaseModel):
    model_config = ConfigDict(from_attributes=True, extra="ignore")


class StoredTimestampsMixin(BaseModel):
    @field_validator("date_time", "created_at", "updated_at", mode="after", check_fields=False)
    @classmethod
    def _normalize_utc(cls, value: datetime | None) -> datetime | None:
        return as_utc(value)


class EventCreate(SchemaBase):
    title: Title
    date_time: datetime
    location: Location
    description: str | None = None
    hours_value: int = Field(default=1, ge=0)

    @field_validator("date_time", mode="after")
    @classmethod
    def _validate_tzaware(cls, value: datetime) -> datetime:
        return _ensure_tzaware(value)


class EventUpdate(SchemaBase):
    title: Title | None = None
    date_time: datetime | None = None
    location: Location | None = None
    description: str | None = None
    hours_value: int | None = Field(default=None, ge=0)

    @field_validator("date_time", mode="after")
    @classmethod
    def _validate_tzaware(cls, value: datetime | None) -> datetime | None:
        return _ensure_tzaware(value)


class EventOut(StoredTimestampsMixin, SchemaBase):
    id: UUID
    title: str
    date_time: datetime
    location: str
    description: str | None = None
    hours_value: int
    created_by: UUID
    created_at: datetime
    updated_at: datetime
