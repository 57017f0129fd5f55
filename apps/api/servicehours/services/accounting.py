from __future__ import annotations

import uuid

from sqlalchemy import case, update
from sqlalchemy.orm import Session

from servicehours.models import Profile
from servicehours.models.attendance import AttendanceStatus


def hours_delta(previous: AttendanceStatus, new: AttendanceStatus, hours_awarded: int) -> int:
    """Change to apply to a profile's total when a record moves ``previous`` -> ``new``.

    ``hours_awarded`` is the record's value before the write. Only crossing the
    approved boundary moves the counter; edits of hours on an already approved
    record are not reconciled here.
    """
    if new == AttendanceStatus.APPROVED and previous != AttendanceStatus.APPROVED:
        return hours_awarded
    if previous == AttendanceStatus.APPROVED and new != AttendanceStatus.APPROVED:
        return -hours_awarded
    return 0


def apply_hours_delta(db: Session, user_id: uuid.UUID, delta: int) -> None:
    """Adjust ``total_hours`` in place, floored at zero.

    Runs as one UPDATE inside the caller's transaction so it commits or rolls
    back together with the status write.
    """
    if delta == 0:
        return

    adjusted = Profile.total_hours + delta
    db.execute(
        update(Profile)
        .where(Profile.user_id == user_id)
        .values(total_hours=case((adjusted < 0, 0), else_=adjusted))
        .execution_options(synchronize_session="fetch")
    )
