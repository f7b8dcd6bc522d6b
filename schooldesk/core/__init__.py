"""
Core module containing the entity model, enums, interfaces and exceptions.
"""

from .entities import *
from .interfaces import *
from .exceptions import *
from .enums import *

__all__ = [
    # Entities
    "StoredModel",
    "Account",
    "SanitizedAccount",
    "Announcement",
    "ScheduleItem",
    "AttendanceRecord",
    "RosterStudent",
    "ClassAttendance",
    "attendance_key",
    "new_id",
    "utc_now",
    "as_utc",

    # Interfaces
    "KeyValueStore",

    # Enums
    "Role",
    "ScheduleKind",
    "StorageKey",
    "StorageType",

    # Exceptions
    "SchoolDeskException",
    "PersistenceError",
    "ConfigurationError",
]
