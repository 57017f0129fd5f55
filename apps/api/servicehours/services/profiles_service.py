from __future__ import annotations

import uuid

import structlog
from sqlalchemy import func, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from servicehours.models import Attendance, Event, Profile, User
from servicehours.models.attendance import AttendanceStatus
from servicehours.models.profile import UserRole
from servicehours.services import access
from servicehours.services.error_codes import ErrorCode
from servicehours.services.exceptions import (
    ConflictError,
    NotFoundError,
    PermissionDeniedError,
    ValidationError,
)

logger = structlog.get_logger(__name__)


def provision_user(
    db: Session,
    email: str,
    name: str | None = None,
    password_hash: str | None = None,
) -> tuple[User, Profile]:
    """Create an identity together with its member profile.

    Both rows are flushed in the caller's transaction; the caller commits.
    """
    email = email.strip().lower()
    user = User(email=email, password_hash=password_hash)
    db.add(user)
    try:
        db.flush()
    except IntegrityError as exc:
        db.rollback()
        raise ConflictError(ErrorCode.EMAIL_ALREADY_REGISTERED, "email already registered") from exc

    profile = Profile(
        user_id=user.id,
        name=(name or "").strip(),
        email=email,
        role=UserRole.MEMBER,
        total_hours=0,
    )
    db.add(profile)
    db.flush()

    logger.info("user_provisioned", user_id=str(user.id))
    return user, profile


def get_profile_for_user(db: Session, user_id: uuid.UUID) -> Profile:
    profile = db.scalar(select(Profile).where(Profile.user_id == user_id))
    if not profile:
        raise NotFoundError(ErrorCode.PROFILE_NOT_FOUND, "profile not found")
    return profile


def get_profile(db: Session, actor: User, user_id: uuid.UUID) -> Profile:
    if user_id != actor.id and not access.has_role(db, actor.id, access.STAFF_ROLES):
        raise PermissionDeniedError(
            ErrorCode.PROFILE_NOT_VISIBLE, "only officers and admins can view other profiles"
        )
    return get_profile_for_user(db, user_id)


def list_profiles(db: Session, actor: User) -> list[Profile]:
    access.require_role(db, actor.id, access.STAFF_ROLES)
    return list(db.scalars(select(Profile).order_by(Profile.name.asc(), Profile.email.asc())))


def update_own_name(db: Session, actor: User, name: str) -> Profile:
    profile = get_profile_for_user(db, actor.id)
    profile.name = name
    db.add(profile)
    db.commit()
    db.refresh(profile)
    return profile


def update_role(db: Session, actor: User, user_id: uuid.UUID, role: UserRole) -> Profile:
    access.require_role(db, actor.id, access.ADMIN_ROLES)

    if user_id == actor.id:
        raise ValidationError(ErrorCode.CANNOT_CHANGE_OWN_ROLE, "cannot change own role")

    profile = get_profile_for_user(db, user_id)
    previous = profile.role
    if previous == role:
        return profile

    profile.role = role
    db.add(profile)
    db.commit()
    db.refresh(profile)

    logger.info(
        "profile_role_changed",
        user_id=str(user_id),
        previous=previous.value,
        new=role.value,
        changed_by=str(actor.id),
    )
    return profile


def dashboard_stats(db: Session, actor: User) -> dict[str, int]:
    access.require_role(db, actor.id, access.STAFF_ROLES)

    def _count(stmt) -> int:
        return int(db.scalar(stmt) or 0)

    return {
        "total_events": _count(select(func.count()).select_from(Event)),
        "pending_reviews": _count(
            select(func.count())
            .select_from(Attendance)
            .where(Attendance.status == AttendanceStatus.PENDING)
        ),
        "total_users": _count(select(func.count()).select_from(Profile)),
        "officers": _count(
            select(func.count()).select_from(Profile).where(Profile.role == UserRole.OFFICER)
        ),
        "total_hours": _count(select(func.coalesce(func.sum(Profile.total_hours), 0))),
    }
