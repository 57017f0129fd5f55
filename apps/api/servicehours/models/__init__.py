from servicehours.models.attendance import Attendance
from servicehours.models.base import Base
from servicehours.models.event import Event
from servicehours.models.profile import Profile
from servicehours.models.user import User

__all__ = ["Base", "User", "Profile", "Event", "Attendance"]
