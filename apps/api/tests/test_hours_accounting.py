from __future__ import annotations

import uuid
from datetime import datetime, timedelta, timezone

import pytest
from sqlalchemy.exc import OperationalError

from servicehours.api.v1.schemas.events import EventCreate
from servicehours.models import Attendance, Profile
from servicehours.models.attendance import AttendanceStatus
from servicehours.models.profile import UserRole
from servicehours.services import attendance_service, events_service
from servicehours.services.accounting import apply_hours_delta, hours_delta
from servicehours.services.exceptions import PermissionDeniedError
from servicehours.services.profiles_service import provision_user

PENDING = AttendanceStatus.PENDING
APPROVED = AttendanceStatus.APPROVED
DENIED = AttendanceStatus.DENIED


@pytest.mark.parametrize(
    ("previous", "new", "expected"),
    [
        (PENDING, APPROVED, 4),
        (DENIED, APPROVED, 4),
        (APPROVED, DENIED, -4),
        (APPROVED, PENDING, -4),
        (APPROVED, APPROVED, 0),
        (PENDING, DENIED, 0),
        (DENIED, PENDING, 0),
        (PENDING, PENDING, 0),
    ],
)
def test_hours_delta_only_moves_on_approved_boundary(previous, new, expected):
    assert hours_delta(previous, new, 4) == expected


def _setup(db_session, hours_value: int = 3):
    admin, admin_profile = provision_user(db_session, "svc-admin@example.com", name="Admin")
    admin_profile.role = UserRole.ADMIN
    officer, officer_profile = provision_user(db_session, "svc-officer@example.com", name="Officer")
    officer_profile.role = UserRole.OFFICER
    member, _ = provision_user(db_session, "svc-member@example.com", name="Member")
    db_session.commit()

    event = events_service.create_event(
        db_session,
        admin,
        EventCreate(
            title="Food Bank",
            date_time=datetime.now(timezone.utc) + timedelta(days=1),
            location="Warehouse 4",
            hours_value=hours_value,
        ),
    )
    record = attendance_service.sign_up(db_session, member, event.id)
    return officer, member, record


def _total(db_session, user_id: uuid.UUID) -> int:
    db_session.expire_all()
    return db_session.query(Profile).filter(Profile.user_id == user_id).one().total_hours


def test_floor_at_zero_when_total_already_lower(db_session):
    officer, member, record = _setup(db_session, hours_value=5)
    attendance_service.set_status(db_session, officer, record.id, APPROVED)
    assert _total(db_session, member.id) == 5

    # Drift the counter below what the record credited
    apply_hours_delta(db_session, member.id, -3)
    db_session.commit()
    assert _total(db_session, member.id) == 2

    attendance_service.set_status(db_session, officer, record.id, DENIED)
    assert _total(db_session, member.id) == 0


def test_random_walk_never_goes_negative(db_session):
    officer, member, record = _setup(db_session, hours_value=2)
    walk = [APPROVED, DENIED, PENDING, APPROVED, APPROVED, PENDING, DENIED, APPROVED, DENIED]
    for status in walk:
        attendance_service.set_status(db_session, officer, record.id, status)
        total = _total(db_session, member.id)
        assert total >= 0
        assert total == (2 if status == APPROVED else 0)


def test_failed_counter_update_rolls_back_status(db_session, monkeypatch):
    officer, member, record = _setup(db_session)

    def _boom(*args, **kwargs):
        raise OperationalError("UPDATE profiles", {}, Exception("disk I/O error"))

    monkeypatch.setattr(attendance_service, "apply_hours_delta", _boom)

    with pytest.raises(OperationalError):
        attendance_service.set_status(db_session, officer, record.id, APPROVED)

    db_session.expire_all()
    stored = db_session.get(Attendance, record.id)
    assert stored.status == PENDING
    assert stored.verified_by is None
    assert _total(db_session, member.id) == 0


def test_member_rejected_at_service_layer(db_session):
    _, member, record = _setup(db_session)
    with pytest.raises(PermissionDeniedError):
        attendance_service.set_status(db_session, member, record.id, APPROVED)
    assert _total(db_session, member.id) == 0
