from __future__ import annotations

from datetime import datetime, timezone
from typing import Any

import structlog
from sqlalchemy import select
from sqlalchemy.orm import Session

from servicehours.api.v1.schemas.events import EventCreate, EventUpdate
from servicehours.models import Event, User
from servicehours.services import access
from servicehours.services.error_codes import ErrorCode
from servicehours.services.exceptions import NotFoundError, ValidationError

logger = structlog.get_logger(__name__)

# Columns that are NOT NULL and so cannot be cleared by a patch
REQUIRED_FIELDS = ("title", "date_time", "location", "hours_value")


def get_event(db: Session, event_id: Any) -> Event:
    event = db.get(Event, event_id)
    if not event:
        raise NotFoundError(ErrorCode.EVENT_NOT_FOUND, "event not found")
    return event


def list_events(db: Session, upcoming: bool = False, now: datetime | None = None) -> list[Event]:
    stmt = select(Event)
    if upcoming:
        now = now or datetime.now(timezone.utc)
        stmt = stmt.where(Event.date_time >= now).order_by(Event.date_time.asc())
    else:
        stmt = stmt.order_by(Event.date_time.desc())
    return list(db.scalars(stmt))


def create_event(db: Session, actor: User, payload: EventCreate) -> Event:
    access.require_role(db, actor.id, access.ADMIN_ROLES)

    event = Event(
        title=payload.title,
        date_time=payload.date_time,
        location=payload.location,
        description=payload.description,
        hours_value=payload.hours_value,
        created_by=actor.id,
    )
    db.add(event)
    db.commit()
    db.refresh(event)

    logger.info("event_created", event_id=str(event.id), created_by=str(actor.id))
    return event


def update_event(db: Session, actor: User, event_id: Any, patch: EventUpdate) -> Event:
    access.require_role(db, actor.id, access.ADMIN_ROLES)
    event = get_event(db, event_id)

    patch_data = patch.model_dump(exclude_unset=True)
    if not patch_data:
        raise ValidationError(ErrorCode.NO_CHANGES, "no changes provided")

    for key in REQUIRED_FIELDS:
        if key in patch_data and patch_data[key] is None:
            raise ValidationError(ErrorCode.FIELD_REQUIRED, f"{key} cannot be cleared")

    for key, value in patch_data.items():
        setattr(event, key, value)

    db.add(event)
    db.commit()
    db.refresh(event)

    logger.info("event_updated", event_id=str(event.id), fields=sorted(patch_data))
    return event


def delete_event(db: Session, actor: User, event_id: Any) -> None:
    """Remove an event and, through the FK cascade, its attendance records.

    Profiles keep any hours already credited from those records.
    """
    access.require_role(db, actor.id, access.ADMIN_ROLES)
    event = get_event(db, event_id)

    db.delete(event)
    db.commit()

    logger.info("event_deleted", event_id=str(event_id), deleted_by=str(actor.id))
