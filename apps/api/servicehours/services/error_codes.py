from enum import Enum


class ErrorCode(str, Enum):
    ROLE_REQUIRED = "ROLE_REQUIRED"
    PROFILE_NOT_VISIBLE = "PROFILE_NOT_VISIBLE"
    SIGNUP_FOR_OTHER_USER = "SIGNUP_FOR_OTHER_USER"

    EVENT_NOT_FOUND = "EVENT_NOT_FOUND"
    ATTENDANCE_NOT_FOUND = "ATTENDANCE_NOT_FOUND"
    PROFILE_NOT_FOUND = "PROFILE_NOT_FOUND"

    ATTENDANCE_ALREADY_EXISTS = "ATTENDANCE_ALREADY_EXISTS"
    EMAIL_ALREADY_REGISTERED = "EMAIL_ALREADY_REGISTERED"

    NO_CHANGES = "NO_CHANGES"
    FIELD_REQUIRED = "FIELD_REQUIRED"
    CANNOT_CHANGE_OWN_ROLE = "CANNOT_CHANGE_OWN_ROLE"
