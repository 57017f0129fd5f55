from __future__ import annotations

from datetime import datetime
from typing import Annotated
from uuid import UUID

from pydantic import BaseModel, StringConstraints

from servicehours.api.v1.schemas.events import SchemaBase, StoredTimestampsMixin
from servicehours.models.profile import UserRole


class ProfileOut(StoredTimestampsMixin, SchemaBase):
    id: UUID
    user_id: UUID
    name: str
    email: str
    role: UserRole
    total_hours: int
    created_at: datetime
    updated_at: datetime


class ProfileSummaryOut(SchemaBase):
    user_id: UUID
    name: str
    email: str


class ProfileUpdate(BaseModel):
    name: Annotated[str, StringConstraints(strip_whitespace=True, min_length=1, max_length=200)]


class RoleUpdate(BaseModel):
    role: UserRole


class StatsOut(BaseModel):
    total_events: int
    pending_reviews: int
    total_users: int
    officers: int
    total_hours: int
