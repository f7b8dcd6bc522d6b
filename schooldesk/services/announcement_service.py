"""
Announcement store: time-windowed broadcast messages.
"""

import logging
from datetime import datetime
from typing import List, Optional, Tuple

from ..core.entities import Announcement, as_utc, new_id, utc_now
from ..core.enums import StorageKey
from ..core.interfaces import KeyValueStore
from ..persistence.collection import PersistentCollection

logger = logging.getLogger(__name__)


def is_visible(announcement: Announcement, now: datetime) -> bool:
    """Check whether ``now`` falls inside the announcement's window.

    Both ends are inclusive and a missing bound is open.
    """
    now = as_utc(now)
    if announcement.publish_at is not None and announcement.publish_at > now:
        return False
    if announcement.expires_at is not None and announcement.expires_at < now:
        return False
    return True


class AnnouncementStore:
    """Announcements, newest first."""

    def __init__(self, backend: KeyValueStore):
        self._collection = PersistentCollection(backend, StorageKey.ANNOUNCEMENTS.value, Announcement)

    @property
    def announcements(self) -> Tuple[Announcement, ...]:
        return self._collection.items

    def get(self, announcement_id: str) -> Optional[Announcement]:
        for announcement in self._collection:
            if announcement.id == announcement_id:
                return announcement
        return None

    def create(self, title: str, body: str, created_by: str,
               publish_at: Optional[datetime] = None,
               expires_at: Optional[datetime] = None) -> Optional[Announcement]:
        """Prepend a new announcement. ``None`` if title or body is blank."""
        title = (title or "").strip()
        body = (body or "").strip()
        if not title or not body:
            return None

        announcement = Announcement(
            id=new_id(),
            title=title,
            body=body,
            created_at=utc_now(),
            publish_at=publish_at,
            expires_at=expires_at,
            created_by=created_by,
        )
        self._collection.update(lambda items: (announcement,) + items)
        logger.debug("Created announcement %s", announcement.id)
        return announcement

    def remove(self, announcement_id: str) -> bool:
        """Drop an announcement by id. Unknown ids are a no-op."""
        if self.get(announcement_id) is None:
            return False
        self._collection.update(lambda items: [a for a in items if a.id != announcement_id])
        return True

    is_visible = staticmethod(is_visible)

    def visible(self, now: Optional[datetime] = None) -> List[Announcement]:
        """Announcements whose window contains ``now``, in stored order."""
        now = now or utc_now()
        return [a for a in self._collection if is_visible(a, now)]
