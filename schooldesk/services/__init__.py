"""
Services module: the stores the presentation layer talks to.
"""

from .credential_service import CredentialStore
from .session_service import SessionManager, SessionState
from .announcement_service import AnnouncementStore, is_visible
from .schedule_service import ScheduleStore
from .attendance_service import AttendanceStore
from .roster_service import ClassRoster

__all__ = [
    "CredentialStore",
    "SessionManager",
    "SessionState",
    "AnnouncementStore",
    "is_visible",
    "ScheduleStore",
    "AttendanceStore",
    "ClassRoster",
]
