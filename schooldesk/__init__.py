"""
SchoolDesk: local persistent state for a role-scoped school-management client.

Authenticates users against a locally stored credential set, keeps a
restorable session, and maintains the announcement, schedule and attendance
collections that the administrator, teacher and student views read.
"""

__version__ = "1.0.0"
__author__ = "SchoolDesk Development Team"
__description__ = "Local persistent state layer for a school-management client"
