"""
Schedule store: creation rules and the upcoming view.
"""
from __future__ import annotations

import json
from datetime import date

import pytest

from schooldesk.core.enums import ScheduleKind
from schooldesk.services import ScheduleStore

TODAY = date(2024, 5, 10)


@pytest.fixture
def store(backend):
    return ScheduleStore(backend)


def test_create_prepends_and_persists(store, backend):
    first = store.create("PR Matematika", "2024-05-12", "assignment", created_by="Guru",
                         class_name="XII-A", subject="Matematika")
    second = store.create("Rapat", date(2024, 5, 11), ScheduleKind.MEETING, created_by="Admin")

    assert [s.id for s in store.items] == [second.id, first.id]
    assert first.kind is ScheduleKind.ASSIGNMENT
    assert first.date == date(2024, 5, 12)

    stored = json.loads(backend.get("schedule"))
    assert stored[1]["className"] == "XII-A"
    assert stored[1]["date"] == "2024-05-12"
    assert "className" not in stored[0]


@pytest.mark.parametrize("title, day, kind", [
    ("", "2024-05-12", "exam"),
    ("  ", "2024-05-12", "exam"),
    ("Exam", "", "exam"),
    ("Exam", "12/05/2024", "exam"),
    ("Exam", "2024-05-12", "quiz"),
])
def test_create_rejects_invalid_input(store, backend, title, day, kind):
    assert store.create(title, day, kind, created_by="Guru") is None
    assert store.items == ()
    assert backend.get("schedule") is None


def test_blank_optional_fields_are_dropped(store):
    item = store.create("Exam", "2024-05-12", "exam", created_by="Guru", class_name="  ", subject="")
    assert item.class_name is None
    assert item.subject is None


def test_upcoming_sorts_by_date_and_skips_past(store):
    store.create("Past", "2024-05-09", "exam", created_by="Guru")
    store.create("Later", "2024-05-20", "exam", created_by="Guru")
    store.create("Today", "2024-05-10", "meeting", created_by="Guru")
    store.create("Soon", "2024-05-11", "assignment", created_by="Guru")

    assert [s.title for s in store.upcoming(TODAY)] == ["Today", "Soon", "Later"]
    assert [s.title for s in store.upcoming(TODAY, limit=2)] == ["Today", "Soon"]
    # the stored order is untouched
    assert [s.title for s in store.items] == ["Soon", "Today", "Later", "Past"]


def test_schedule_reloads_in_new_store(store, backend):
    item = store.create("Exam", "2024-05-12", "exam", created_by="Guru", subject="IPA")
    assert ScheduleStore(backend).items == (item,)
