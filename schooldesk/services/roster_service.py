"""
Read-only class roster used for attendance totals.
"""

from typing import Iterable, List, Optional

from ..core.entities import RosterStudent


class ClassRoster:
    def __init__(self, students: Iterable[RosterStudent]):
        self._students = tuple(students)

    def students(self, class_name: Optional[str] = None) -> List[RosterStudent]:
        if class_name is None:
            return list(self._students)
        return [s for s in self._students if s.class_name == class_name]

    def class_names(self) -> List[str]:
        return sorted({s.class_name for s in self._students})

    def get(self, student_id: str) -> Optional[RosterStudent]:
        for student in self._students:
            if student.id == student_id:
                return student
        return None
