from __future__ import annotations

import uuid
from typing import Any

import structlog
from sqlalchemy import select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session, selectinload

from servicehours.models import Attendance, Event, Profile, User
from servicehours.models.attendance import AttendanceStatus
from servicehours.services import access
from servicehours.services.accounting import apply_hours_delta, hours_delta
from servicehours.services.error_codes import ErrorCode
from servicehours.services.exceptions import ConflictError, NotFoundError, PermissionDeniedError

logger = structlog.get_logger(__name__)


def _attendance_not_found() -> NotFoundError:
    return NotFoundError(ErrorCode.ATTENDANCE_NOT_FOUND, "attendance record not found")


def sign_up(
    db: Session,
    actor: User,
    event_id: Any,
    user_id: uuid.UUID | None = None,
) -> Attendance:
    if user_id is not None and user_id != actor.id:
        raise PermissionDeniedError(
            ErrorCode.SIGNUP_FOR_OTHER_USER, "can only sign up yourself"
        )

    event = db.get(Event, event_id)
    if not event:
        raise NotFoundError(ErrorCode.EVENT_NOT_FOUND, "event not found")

    existing = db.scalar(
        select(Attendance.id).where(
            Attendance.event_id == event.id,
            Attendance.user_id == actor.id,
        )
    )
    if existing:
        raise ConflictError(ErrorCode.ATTENDANCE_ALREADY_EXISTS, "already signed up for this event")

    record = Attendance(
        event_id=event.id,
        user_id=actor.id,
        status=AttendanceStatus.PENDING,
        hours_awarded=event.hours_value,
    )
    event_pk = event.id
    db.add(record)
    try:
        db.commit()
    except IntegrityError as exc:
        db.rollback()
        # The event may have been deleted since it was loaded
        if db.scalar(select(Event.id).where(Event.id == event_pk)) is None:
            raise NotFoundError(ErrorCode.EVENT_NOT_FOUND, "event not found") from exc
        raise ConflictError(
            ErrorCode.ATTENDANCE_ALREADY_EXISTS, "already signed up for this event"
        ) from exc

    db.refresh(record)
    logger.info(
        "attendance_signed_up",
        attendance_id=str(record.id),
        event_id=str(event.id),
        user_id=str(actor.id),
        hours_awarded=record.hours_awarded,
    )
    return record


def get_attendance(db: Session, actor: User, attendance_id: Any) -> Attendance:
    record = db.get(Attendance, attendance_id)
    # Records the caller may not read are indistinguishable from missing ones
    if not record:
        raise _attendance_not_found()
    if record.user_id != actor.id and not access.has_role(db, actor.id, access.STAFF_ROLES):
        raise _attendance_not_found()
    return record


def list_my_attendance(db: Session, actor: User) -> list[Attendance]:
    stmt = (
        select(Attendance)
        .options(selectinload(Attendance.event))
        .where(Attendance.user_id == actor.id)
        .order_by(Attendance.created_at.desc())
    )
    return list(db.scalars(stmt))


def list_attendance(
    db: Session,
    actor: User,
    status: AttendanceStatus | None = AttendanceStatus.PENDING,
    event_id: uuid.UUID | None = None,
) -> list[tuple[Attendance, Profile | None]]:
    """Review queue: records oldest first, each paired with its owner's profile."""
    access.require_role(db, actor.id, access.STAFF_ROLES)

    stmt = (
        select(Attendance, Profile)
        .outerjoin(Profile, Profile.user_id == Attendance.user_id)
        .order_by(Attendance.created_at.asc())
    )
    if status is not None:
        stmt = stmt.where(Attendance.status == status)
    if event_id is not None:
        stmt = stmt.where(Attendance.event_id == event_id)

    return [(record, profile) for record, profile in db.execute(stmt).all()]


def set_status(
    db: Session,
    actor: User,
    attendance_id: Any,
    new_status: AttendanceStatus,
) -> Attendance:
    """Move a record to ``new_status`` and settle the owner's total hours.

    The row is locked, the delta is computed from the stored status, and the
    status, verifier and counter are committed together.
    """
    access.require_role(db, actor.id, access.STAFF_ROLES)

    try:
        record = db.scalar(
            select(Attendance).where(Attendance.id == attendance_id).with_for_update()
        )
        if not record:
            raise _attendance_not_found()

        previous = record.status
        delta = hours_delta(previous, new_status, record.hours_awarded)

        record.status = new_status
        record.verified_by = actor.id
        db.add(record)
        db.flush()

        apply_hours_delta(db, record.user_id, delta)
        db.commit()
    except (SQLAlchemyError, NotFoundError):
        db.rollback()
        raise

    db.refresh(record)
    logger.info(
        "attendance_status_changed",
        attendance_id=str(record.id),
        user_id=str(record.user_id),
        previous=previous.value,
        new=new_status.value,
        hours_delta=delta,
        verified_by=str(actor.id),
    )
    return record


def set_hours_awarded(db: Session, actor: User, attendance_id: Any, hours_awarded: int) -> Attendance:
    """Edit the hours credited by a record.

    The owner's total is left untouched even if the record is already
    approved; only status transitions move the counter.
    """
    access.require_role(db, actor.id, access.STAFF_ROLES)

    record = db.get(Attendance, attendance_id)
    if not record:
        raise _attendance_not_found()

    previous = record.hours_awarded
    record.hours_awarded = hours_awarded
    db.add(record)
    db.commit()
    db.refresh(record)

    logger.info(
        "attendance_hours_edited",
        attendance_id=str(record.id),
        status=record.status.value,
        previous=previous,
        new=hours_awarded,
        edited_by=str(actor.id),
    )
    return record
