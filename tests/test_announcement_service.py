"""
Announcement store: creation, removal and the inclusive visibility window.
"""
from __future__ import annotations

import json
from datetime import datetime, timedelta, timezone

import pytest

from schooldesk.core.entities import Announcement
from schooldesk.services import AnnouncementStore, is_visible

NOW = datetime(2024, 5, 1, 12, 0, tzinfo=timezone.utc)


def _announcement(publish_at=None, expires_at=None):
    return Announcement(id="a", title="t", body="b", created_by="Admin",
                        created_at=NOW - timedelta(days=1),
                        publish_at=publish_at, expires_at=expires_at)


@pytest.fixture
def store(backend):
    return AnnouncementStore(backend)


def test_create_prepends_and_persists(store, backend):
    first = store.create("First", "body one", created_by="Admin")
    second = store.create("Second", "body two", created_by="Admin")

    assert [a.id for a in store.announcements] == [second.id, first.id]
    stored = json.loads(backend.get("announcements"))
    assert [a["id"] for a in stored] == [second.id, first.id]
    assert stored[0]["createdAt"]
    assert "publishAt" not in stored[0]


def test_create_assigns_id_and_timestamp(store):
    before = datetime.now(timezone.utc)
    announcement = store.create("  Title ", "  Body  ", created_by="Admin")

    assert announcement.id
    assert announcement.title == "Title"
    assert announcement.body == "Body"
    assert announcement.created_at >= before


@pytest.mark.parametrize("title, body", [("", "body"), ("title", ""), ("   ", "body"), ("title", "\n\t")])
def test_create_rejects_blank_input(store, backend, title, body):
    store.create("Existing", "kept", created_by="Admin")
    before = backend.get("announcements")

    assert store.create(title, body, created_by="Admin") is None
    assert len(store.announcements) == 1
    assert backend.get("announcements") == before


def test_remove_by_id(store):
    keep = store.create("Keep", "b", created_by="Admin")
    drop = store.create("Drop", "b", created_by="Admin")

    assert store.remove(drop.id) is True
    assert [a.id for a in store.announcements] == [keep.id]


def test_remove_unknown_id_is_noop(store, backend):
    store.create("Keep", "b", created_by="Admin")
    before = backend.get("announcements")

    assert store.remove("does-not-exist") is False
    assert store.remove("does-not-exist") is False
    assert backend.get("announcements") == before


def test_visibility_window_is_inclusive():
    assert is_visible(_announcement(publish_at=NOW), NOW)
    assert is_visible(_announcement(expires_at=NOW), NOW)
    assert not is_visible(_announcement(expires_at=NOW - timedelta(seconds=1)), NOW)
    assert not is_visible(_announcement(publish_at=NOW + timedelta(seconds=1)), NOW)


def test_open_bounds_are_always_visible():
    assert is_visible(_announcement(), NOW)
    assert is_visible(_announcement(publish_at=NOW - timedelta(days=2), expires_at=NOW + timedelta(days=2)), NOW)


def test_naive_datetimes_are_treated_as_utc():
    announcement = _announcement(publish_at=datetime(2024, 5, 1, 12, 0))
    assert announcement.publish_at.tzinfo is not None
    assert is_visible(announcement, datetime(2024, 5, 1, 12, 0))


def test_visible_view_filters_in_stored_order(store):
    later = store.create("Later", "b", created_by="Admin", publish_at=NOW + timedelta(hours=1))
    current = store.create("Current", "b", created_by="Admin", expires_at=NOW + timedelta(hours=1))
    expired = store.create("Expired", "b", created_by="Admin", expires_at=NOW - timedelta(hours=1))
    always = store.create("Always", "b", created_by="Admin")

    assert [a.id for a in store.visible(NOW)] == [always.id, current.id]
    assert store.is_visible(later, NOW + timedelta(hours=1))
    assert not store.is_visible(expired, NOW)


def test_announcements_reload_in_new_store(store, backend):
    created = store.create("Persisted", "b", created_by="Admin", publish_at=NOW)
    assert AnnouncementStore(backend).announcements == (created,)
