"""
Enumerations and constants for the SchoolDesk state layer.
"""

from enum import Enum


class Role(str, Enum):
    """Account roles; each one maps to a dashboard view."""
    ADMIN = "admin"
    TEACHER = "teacher"
    STUDENT = "student"


class ScheduleKind(str, Enum):
    """Kinds of schedule entries."""
    ASSIGNMENT = "assignment"
    EXAM = "exam"
    MEETING = "meeting"


class StorageKey(str, Enum):
    """Keys used in the durable backing store."""
    USERS = "users"
    SESSION = "user"
    ANNOUNCEMENTS = "announcements"
    SCHEDULE = "schedule"
    ATTENDANCE = "attendance"


class StorageType(str, Enum):
    """Supported backing store implementations."""
    SQLITE = "sqlite"
    FILE = "file"
    MEMORY = "memory"
