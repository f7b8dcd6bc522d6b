"""
Sample-data client script, with requests stubbed out.
"""
from __future__ import annotations

from datetime import date
from types import SimpleNamespace

import requests

import add_data


def _response(status_code, payload=None, text=""):
    return SimpleNamespace(status_code=status_code, json=lambda: payload, text=text)


def test_create_announcement_posts_json(monkeypatch):
    calls = []

    def fake_post(url, json=None):
        calls.append((url, json))
        return _response(201, {"id": "a1", **json})

    monkeypatch.setattr(add_data, "BASE_URL", "http://test")
    monkeypatch.setattr(add_data.requests, "post", fake_post)

    result = add_data.create_announcement("Judul", "Isi")

    assert result["id"] == "a1"
    assert calls[0][0] == "http://test/announcements"
    assert calls[0][1]["title"] == "Judul"


def test_create_schedule_item_serializes_date(monkeypatch):
    captured = {}

    def fake_post(url, json=None):
        captured.update(json)
        return _response(400, text="bad")

    monkeypatch.setattr(add_data.requests, "post", fake_post)

    assert add_data.create_schedule_item("Exam", date(2024, 5, 1), "exam") is None
    assert captured["date"] == "2024-05-01"


def test_check_server_handles_connection_errors(monkeypatch, capsys):
    def fake_get(url, timeout=None):
        raise requests.exceptions.ConnectionError("refused")

    monkeypatch.setattr(add_data.requests, "get", fake_get)

    assert add_data.check_server() is False
    assert "not running" in capsys.readouterr().out


def test_detect_base_url_prefers_environment(monkeypatch):
    monkeypatch.setenv("SCHOOLDESK_BASE_URL", "http://school.local:9000")
    assert add_data._detect_base_url() == "http://school.local:9000"
