"""Role lookups for the authorization gate.

The acting role always comes from the stored profile row, never from the
request payload or a token claim. ``current_role`` is a single direct query
so that gating reads of the profiles table never re-enters the gate itself.
"""

from __future__ import annotations

import uuid

from sqlalchemy import select
from sqlalchemy.orm import Session

from servicehours.models import Profile
from servicehours.models.profile import UserRole
from servicehours.services.error_codes import ErrorCode
from servicehours.services.exceptions import PermissionDeniedError

STAFF_ROLES = frozenset({UserRole.OFFICER, UserRole.ADMIN})
ADMIN_ROLES = frozenset({UserRole.ADMIN})


def current_role(db: Session, user_id: uuid.UUID) -> UserRole | None:
    return db.scalar(select(Profile.role).where(Profile.user_id == user_id))


def has_role(db: Session, user_id: uuid.UUID, allowed: frozenset[UserRole]) -> bool:
    return current_role(db, user_id) in allowed


def require_role(db: Session, user_id: uuid.UUID, allowed: frozenset[UserRole]) -> UserRole:
    role = current_role(db, user_id)
    if role not in allowed:
        wanted = " or ".join(sorted(r.value for r in allowed))
        raise PermissionDeniedError(ErrorCode.ROLE_REQUIRED, f"requires role {wanted}")
    return role
