from __future__ import annotations

import uuid

from fastapi import APIRouter, Query, Response

from servicehours.api.v1.schemas import (
    AttendanceCreate,
    AttendanceOut,
    EventCreate,
    EventOut,
    EventUpdate,
)
from servicehours.auth.deps import AdminUser, CurrentUser, DBSession
from servicehours.services import attendance_service, events_service

router = APIRouter(prefix="/events", tags=["events"])


@router.get("", response_model=list[EventOut])
def list_events(
    user: CurrentUser,
    db: DBSession,
    upcoming: bool = Query(default=False),
):
    return events_service.list_events(db, upcoming=upcoming)


@router.get("/{event_id}", response_model=EventOut)
def get_event(event_id: uuid.UUID, user: CurrentUser, db: DBSession):
    return events_service.get_event(db, event_id)


@router.post("", response_model=EventOut, status_code=201)
def create_event(payload: EventCreate, admin: AdminUser, db: DBSession):
    return events_service.create_event(db, admin, payload)


@router.patch("/{event_id}", response_model=EventOut)
def update_event(event_id: uuid.UUID, payload: EventUpdate, admin: AdminUser, db: DBSession):
    return events_service.update_event(db, admin, event_id, payload)


@router.delete("/{event_id}", status_code=204)
def delete_event(event_id: uuid.UUID, admin: AdminUser, db: DBSession):
    events_service.delete_event(db, admin, event_id)
    return Response(status_code=204)


@router.post("/{event_id}/attendance", response_model=AttendanceOut, status_code=201)
def sign_up(
    event_id: uuid.UUID,
    user: CurrentUser,
    db: DBSession,
    payload: AttendanceCreate | None = None,
):
    return attendance_service.sign_up(
        db,
        user,
        event_id,
        user_id=payload.user_id if payload else None,
    )
