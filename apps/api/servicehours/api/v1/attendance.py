from __future__ import annotations

import uuid

from fastapi import APIRouter, Query

from servicehours.api.v1.schemas import (
    AttendanceHoursUpdate,
    AttendanceOut,
    AttendanceReviewOut,
    AttendanceStatusUpdate,
    AttendanceWithEventOut,
    ProfileSummaryOut,
)
from servicehours.auth.deps import CurrentUser, DBSession, StaffUser
from servicehours.models.attendance import AttendanceStatus
from servicehours.services import attendance_service

router = APIRouter(prefix="/attendance", tags=["attendance"])


@router.get("/me", response_model=list[AttendanceWithEventOut])
def list_my_attendance(user: CurrentUser, db: DBSession):
    return attendance_service.list_my_attendance(db, user)


@router.get("", response_model=list[AttendanceReviewOut])
def list_attendance(
    staff: StaffUser,
    db: DBSession,
    status: AttendanceStatus | None = Query(default=AttendanceStatus.PENDING),
    all_statuses: bool = Query(default=False),
    event_id: uuid.UUID | None = Query(default=None),
):
    rows = attendance_service.list_attendance(
        db,
        staff,
        status=None if all_statuses else status,
        event_id=event_id,
    )
    return [
        AttendanceReviewOut.model_validate(record).model_copy(
            update={
                "profile": ProfileSummaryOut.model_validate(profile) if profile else None,
            }
        )
        for record, profile in rows
    ]


@router.get("/{attendance_id}", response_model=AttendanceOut)
def get_attendance(attendance_id: uuid.UUID, user: CurrentUser, db: DBSession):
    return attendance_service.get_attendance(db, user, attendance_id)


@router.patch("/{attendance_id}/status", response_model=AttendanceOut)
def update_status(
    attendance_id: uuid.UUID,
    payload: AttendanceStatusUpdate,
    staff: StaffUser,
    db: DBSession,
):
    return attendance_service.set_status(db, staff, attendance_id, payload.status)


@router.patch("/{attendance_id}/hours", response_model=AttendanceOut)
def update_hours(
    attendance_id: uuid.UUID,
    payload: AttendanceHoursUpdate,
    staff: StaffUser,
    db: DBSession,
):
    return attendance_service.set_hours_awarded(db, staff, attendance_id, payload.hours_awarded)
