from __future__ import annotations

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, Field

from servicehours.api.v1.schemas.events import EventOut, SchemaBase, StoredTimestampsMixin
from servicehours.api.v1.schemas.profiles import ProfileSummaryOut
from servicehours.models.attendance import AttendanceStatus


class AttendanceCreate(BaseModel):
    # Optional and only ever allowed to name the caller
    user_id: UUID | None = None


class AttendanceStatusUpdate(BaseModel):
    status: AttendanceStatus


class AttendanceHoursUpdate(BaseModel):
    hours_awarded: int = Field(ge=0)


class AttendanceOut(StoredTimestampsMixin, SchemaBase):
    id: UUID
    event_id: UUID
    user_id: UUID
    status: AttendanceStatus
    hours_awarded: int
    verified_by: UUID | None = None
    created_at: datetime
    updated_at: datetime


class AttendanceWithEventOut(AttendanceOut):
    event: EventOut


class AttendanceReviewOut(AttendanceOut):
    profile: ProfileSummaryOut | None = None
