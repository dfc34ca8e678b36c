"""Tests for the remote memos API client."""

import json

import httpx
import pytest

from memos_web.exceptions import ConfigurationError, PersistenceError
from memos_web.services.filter_session import FilterSession
from memos_web.services.memos_client import MemosClient, get_memos_client

SHORTCUTS = [
    {"id": 1, "title": "Old", "payload": "[]", "rowStatus": "NORMAL", "createdTs": 1700000000},
    {"id": 2, "title": "Pinned", "payload": "[]", "rowStatus": "ARCHIVED", "createdTs": 1600000000},
]


def make_client(handler) -> MemosClient:
    return MemosClient(
        "https://memos.example.com/",
        access_token="secret",
        transport=httpx.MockTransport(handler),
    )


def test_list_shortcuts():
    requests = []

    def handler(request: httpx.Request) -> httpx.Response:
        requests.append(request)
        return httpx.Response(200, json=SHORTCUTS)

    shortcuts = make_client(handler).list_shortcuts()
    assert [s.title for s in shortcuts] == ["Old", "Pinned"]
    assert shortcuts[1].pinned is True
    assert requests[0].url.path == "/api/v1/shortcut"
    assert requests[0].headers["Authorization"] == "Bearer secret"


def test_update_shortcut_sends_row_status():
    sent = {}

    def handler(request: httpx.Request) -> httpx.Response:
        sent["method"] = request.method
        sent["path"] = request.url.path
        sent["body"] = json.loads(request.content)
        return httpx.Response(200, json={**SHORTCUTS[0], "rowStatus": "ARCHIVED"})

    shortcut = make_client(handler).update_shortcut(1, pinned=True)
    assert sent == {
        "method": "PATCH",
        "path": "/api/v1/shortcut/1",
        "body": {"id": 1, "rowStatus": "ARCHIVED"},
    }
    assert shortcut.pinned is True


def test_delete_shortcut_with_empty_body():
    def handler(request: httpx.Request) -> httpx.Response:
        assert request.method == "DELETE"
        return httpx.Response(200)

    make_client(handler).delete_shortcut(1)


def test_list_tags_sorted():
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, json=["work", "books", "work"])

    assert make_client(handler).list_tags() == ["books", "work"]


def test_delete_tag_posts_name():
    def handler(request: httpx.Request) -> httpx.Response:
        assert request.url.path == "/api/v1/tag/delete"
        assert json.loads(request.content) == {"name": "old"}
        return httpx.Response(200)

    make_client(handler).delete_tag("old")


def test_error_carries_server_message():
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(400, json={"message": "Shortcut title is too long"})

    with pytest.raises(PersistenceError) as exc_info:
        make_client(handler).create_shortcut("x" * 500, "[]")
    assert exc_info.value.message == "Shortcut title is too long"
    assert exc_info.value.status_code == 400


def test_error_without_json_body():
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(500, text="boom")

    with pytest.raises(PersistenceError) as exc_info:
        make_client(handler).list_tags()
    assert exc_info.value.message == "boom"


def test_transport_error():
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    with pytest.raises(PersistenceError) as exc_info:
        make_client(handler).list_shortcuts()
    assert "connection refused" in exc_info.value.message


def test_pin_toggle_rolls_back_against_remote_failure():
    def handler(request: httpx.Request) -> httpx.Response:
        if request.method == "GET":
            return httpx.Response(200, json=SHORTCUTS)
        return httpx.Response(500, json={"message": "database is locked"})

    client = make_client(handler)
    session = FilterSession(1)
    session.fetch_shortcuts(client)
    with pytest.raises(PersistenceError):
        session.toggle_pin(client, 1)
    assert [s.id for s in session.shortcuts] == [2, 1]
    assert session.get_shortcut(1).pinned is False


def test_get_memos_client_requires_url(monkeypatch):
    from memos_web.config import get_settings

    get_settings.cache_clear()
    monkeypatch.setenv("MEMOS_API_URL", "")
    try:
        with pytest.raises(ConfigurationError):
            get_memos_client()
    finally:
        get_settings.cache_clear()
