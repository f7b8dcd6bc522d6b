"""
Schedule store: dated assignments, exams and meetings.
"""

import logging
from datetime import date, datetime
from typing import List, Optional, Tuple, Union

from ..core.entities import ScheduleItem, new_id
from ..core.enums import ScheduleKind, StorageKey
from ..core.interfaces import KeyValueStore
from ..persistence.collection import PersistentCollection

logger = logging.getLogger(__name__)


def _parse_date(value: Union[date, str, None]) -> Optional[date]:
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    value = (value or "").strip()
    if not value:
        return None
    try:
        return date.fromisoformat(value)
    except ValueError:
        return None


def _parse_kind(value: Union[ScheduleKind, str]) -> Optional[ScheduleKind]:
    try:
        return ScheduleKind(value)
    except ValueError:
        return None


def _optional_text(value: Optional[str]) -> Optional[str]:
    value = (value or "").strip()
    return value or None


class ScheduleStore:
    """Schedule entries, newest created first.

    Sorting by date is left to the reader; :meth:`upcoming` is the view the
    dashboards use.
    """

    def __init__(self, backend: KeyValueStore):
        self._collection = PersistentCollection(backend, StorageKey.SCHEDULE.value, ScheduleItem)

    @property
    def items(self) -> Tuple[ScheduleItem, ...]:
        return self._collection.items

    def create(self, title: str, date: Union[date, str], kind: Union[ScheduleKind, str],
               created_by: str, class_name: Optional[str] = None,
               subject: Optional[str] = None) -> Optional[ScheduleItem]:
        """Prepend a new entry. ``None`` for a blank title, bad date or unknown kind."""
        title = (title or "").strip()
        parsed_date = _parse_date(date)
        parsed_kind = _parse_kind(kind)
        if not title or parsed_date is None or parsed_kind is None:
            return None

        item = ScheduleItem(
            id=new_id(),
            title=title,
            date=parsed_date,
            kind=parsed_kind,
            class_name=_optional_text(class_name),
            subject=_optional_text(subject),
            created_by=created_by,
        )
        self._collection.update(lambda items: (item,) + items)
        logger.debug("Created %s entry %s for %s", item.kind.value, item.id, item.date)
        return item

    def upcoming(self, today: Optional[date] = None, limit: Optional[int] = None) -> List[ScheduleItem]:
        """Entries dated today or later, earliest first."""
        today = today or date.today()
        result = sorted((s for s in self._collection if s.date >= today), key=lambda s: s.date)
        if limit is not None:
            result = result[:limit]
        return result
