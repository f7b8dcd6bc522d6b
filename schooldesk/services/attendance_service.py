"""
Attendance store: presence sets keyed by (date, class).
"""

import logging
from datetime import date, datetime
from typing import List, Optional, Tuple, Union

from ..core.entities import AttendanceRecord, ClassAttendance, attendance_key
from ..core.enums import StorageKey
from ..core.interfaces import KeyValueStore
from ..persistence.collection import PersistentCollection
from .roster_service import ClassRoster

logger = logging.getLogger(__name__)


def _as_date(value: Union[date, str]) -> date:
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    return date.fromisoformat(value.strip())


class AttendanceStore:
    """One record per (date, class); toggling flips a student's presence."""

    def __init__(self, backend: KeyValueStore):
        self._collection = PersistentCollection(backend, StorageKey.ATTENDANCE.value, AttendanceRecord)

    @property
    def records(self) -> Tuple[AttendanceRecord, ...]:
        return self._collection.items

    def find(self, day: Union[date, str], class_name: str) -> Optional[AttendanceRecord]:
        """The record for ``(day, class_name)``; ``None`` means nobody marked present."""
        key = attendance_key(_as_date(day), class_name)
        for record in self._collection:
            if record.id == key:
                return record
        return None

    def is_present(self, day: Union[date, str], class_name: str, student_id: str) -> bool:
        record = self.find(day, class_name)
        return record is not None and student_id in record.present_student_ids

    def toggle(self, day: Union[date, str], class_name: str, student_id: str) -> AttendanceRecord:
        """Flip ``student_id``'s presence for the class on ``day``.

        Creates the record (appended) when the pair has none yet. Calling it
        twice with the same arguments restores the previous presence set.
        """
        day = _as_date(day)
        key = attendance_key(day, class_name)
        existing = self.find(day, class_name)

        if existing is None:
            record = AttendanceRecord(
                id=key, date=day, class_name=class_name,
                present_student_ids=frozenset([student_id]),
            )
            self._collection.update(lambda items: items + (record,))
        else:
            present = existing.present_student_ids ^ {student_id}
            record = existing.model_copy(update={"present_student_ids": frozenset(present)})
            self._collection.update(
                lambda items: [record if r.id == key else r for r in items]
            )

        logger.debug("Toggled %s in %s (%d present)", student_id, key, len(record.present_student_ids))
        return record

    def summary(self, day: Union[date, str], roster: ClassRoster) -> List[ClassAttendance]:
        """Present/total counts per roster class on ``day``."""
        day = _as_date(day)
        result = []
        for class_name in roster.class_names():
            record = self.find(day, class_name)
            result.append(ClassAttendance(
                class_name=class_name,
                date=day,
                present=len(record.present_student_ids) if record else 0,
                total=len(roster.students(class_name)),
            ))
        return result
