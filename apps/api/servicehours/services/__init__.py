from servicehours.services.attendance_service import set_hours_awarded, set_status, sign_up
from servicehours.services.events_service import create_event, delete_event, update_event
from servicehours.services.profiles_service import provision_user, update_role

__all__ = [
    "create_event",
    "update_event",
    "delete_event",
    "sign_up",
    "set_status",
    "set_hours_awarded",
    "provision_user",
    "update_role",
]
