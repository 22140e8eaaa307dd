from __future__ import annotations

from enum import Enum


class Role(str, Enum):
    """Account role used for authorization checks."""

    STUDENT = "student"
    TEACHER = "teacher"
    ADMIN = "admin"


STAFF_ROLES = frozenset({Role.TEACHER, Role.ADMIN})


class AttendanceStatus(str, Enum):
    PRESENT = "present"
    ABSENT = "absent"
    LATE = "late"


class NotificationType(str, Enum):
    ANNOUNCEMENT = "announcement"
    ALERT = "alert"
    REMINDER = "reminder"
    EMERGENCY = "emergency"


class Priority(str, Enum):
    LOW = "low"
    NORMAL = "normal"
    HIGH = "high"
    URGENT = "urgent"


class BroadcastTarget(str, Enum):
    """Audience of a broadcast notification."""

    ALL = "all"
    STUDENTS = "students"
    TEACHERS = "teachers"
    ADMINS = "admins"


class ProctorContext(str, Enum):
    EXAM = "exam"
    LIVE_CLASS = "live_class"


class ProctorStatus(str, Enum):
    ACTIVE = "active"
    AUTO_SUBMITTED = "auto_submitted"
    SUBMITTED = "submitted"
    LIMIT_REACHED = "limit_reached"


class SubmitReason(str, Enum):
    MANUAL = "manual"
    TIME_UP = "time_up"
    TAB_SWITCH_LIMIT = "tab_switch_limit"


class ProctorAction(str, Enum):
    NONE = "none"
    WARN = "warn"
    AUTO_SUBMIT = "auto_submit"
    LIMIT_REACHED = "limit_reached"
