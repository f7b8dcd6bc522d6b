"""
Domain entities for the SchoolDesk state layer.

Entities are frozen pydantic models. Stores never edit an entity in place;
they build a new one and replace the whole collection snapshot. The durable
JSON form uses camelCase keys (``createdAt``, ``presentStudentIds`` ...) and
omits optional fields that are unset.
"""

import datetime as dt
import uuid
from typing import Any, Dict, FrozenSet, List, Optional

from pydantic import BaseModel, ConfigDict, field_serializer, field_validator, model_validator
from pydantic.alias_generators import to_camel

from .enums import Role, ScheduleKind


def new_id() -> str:
    """Generate a fresh entity id."""
    return str(uuid.uuid4())


def utc_now() -> dt.datetime:
    return dt.datetime.now(dt.timezone.utc)


def as_utc(value: dt.datetime) -> dt.datetime:
    """Interpret naive datetimes as UTC so that comparisons never mix kinds."""
    if value.tzinfo is None:
        return value.replace(tzinfo=dt.timezone.utc)
    return value


def attendance_key(date: dt.date, class_name: str) -> str:
    """Composite key of an attendance record: ``<ISO date>:<class>``."""
    return f"{date.isoformat()}:{class_name}"


class StoredModel(BaseModel):
    """Base class for everything that is written to the backing store."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to the JSON-compatible dict used on disk and over HTTP."""
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)


class SanitizedAccount(StoredModel):
    """Account projection without the password; safe to keep in a session."""
    id: str
    username: str
    role: Role
    display_name: str
    email: Optional[str] = None


class Account(StoredModel):
    """A login account as held by the credential store."""
    id: str
    username: str
    password: str
    role: Role
    display_name: str
    email: Optional[str] = None

    def sanitized(self) -> SanitizedAccount:
        return SanitizedAccount(**self.model_dump(exclude={"password"}))

    def matches_username(self, username: str) -> bool:
        return self.username.lower() == username.strip().lower()


class Announcement(StoredModel):
    """A broadcast message shown inside its ``[publish_at, expires_at]`` window."""
    id: str
    title: str
    body: str
    created_at: dt.datetime
    publish_at: Optional[dt.datetime] = None
    expires_at: Optional[dt.datetime] = None
    created_by: str

    @field_validator("created_at", "publish_at", "expires_at")
    @classmethod
    def _normalize_timezone(cls, value: Optional[dt.datetime]) -> Optional[dt.datetime]:
        if value is None:
            return None
        return as_utc(value)


class ScheduleItem(StoredModel):
    """A dated assignment, exam or meeting."""
    id: str
    title: str
    date: dt.date
    kind: ScheduleKind
    class_name: Optional[str] = None
    subject: Optional[str] = None
    created_by: str


class AttendanceRecord(StoredModel):
    """Presence set for one class on one day."""
    id: str
    date: dt.date
    class_name: str
    present_student_ids: FrozenSet[str] = frozenset()

    @model_validator(mode="after")
    def _check_composite_id(self) -> "AttendanceRecord":
        if self.id != attendance_key(self.date, self.class_name):
            raise ValueError(f"id {self.id!r} does not match date and class")
        return self

    @field_serializer("present_student_ids")
    def _serialize_present(self, value: FrozenSet[str]) -> List[str]:
        return sorted(value)


class RosterStudent(StoredModel):
    """A student as listed in the class roster."""
    id: str
    name: str
    class_name: str


class ClassAttendance(StoredModel):
    """Present/total counts for one class on one day."""
    class_name: str
    date: dt.date
    present: int
    total: int
