from servicehours.api.v1.schemas.attendance import (
    AttendanceCreate,
    AttendanceHoursUpdate,
    AttendanceOut,
    AttendanceReviewOut,
    AttendanceStatusUpdate,
    AttendanceWithEventOut,
)
from servicehours.api.v1.schemas.events import EventCreate, EventOut, EventUpdate
from servicehours.api.v1.schemas.profiles import (
    ProfileOut,
    ProfileSummaryOut,
    ProfileUpdate,
    RoleUpdate,
    StatsOut,
)

__all__ = [
    "AttendanceCreate",
    "AttendanceHoursUpdate",
    "AttendanceOut",
    "AttendanceReviewOut",
    "AttendanceStatusUpdate",
    "AttendanceWithEventOut",
    "EventCreate",
    "EventUpdate",
    "EventOut",
    "ProfileOut",
    "ProfileSummaryOut",
    "ProfileUpdate",
    "RoleUpdate",
    "StatsOut",
]
