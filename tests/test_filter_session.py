"""Tests for the per-user filter session and shortcut ordering."""

from concurrent.futures import ThreadPoolExecutor
from dataclasses import replace
from datetime import datetime

import pytest

from memos_web.exceptions import NotFoundError, PersistenceError, ValidationError
from memos_web.services.clause_editor import Clause
from memos_web.services.clause_registry import FilterDimension, Operator
from memos_web.services.filter_session import (
    FilterSession,
    get_session,
    reset_sessions,
    sort_shortcuts,
)
from memos_web.services.shortcut_payload import ShortcutData, serialize


class FakePersistence:
    """In-memory PersistenceAPI; ``fail`` makes every write raise."""

    def __init__(self, shortcuts: list[ShortcutData] | None = None):
        self.shortcuts = {s.id: s for s in shortcuts or []}
        self.tags: set[str] = set()
        self.fail = False
        self.calls: list[str] = []
        self._next_id = 100

    def _write(self, name: str) -> None:
        self.calls.append(name)
        if self.fail:
            raise PersistenceError("server unavailable")

    def list_shortcuts(self):
        return list(self.shortcuts.values())

    def create_shortcut(self, title, payload):
        self._write("create")
        self._next_id += 1
        shortcut = ShortcutData(
            id=self._next_id, title=title, payload=payload, created_at=datetime.now()
        )
        self.shortcuts[shortcut.id] = shortcut
        return shortcut

    def update_shortcut(self, shortcut_id, title=None, payload=None, pinned=None):
        self._write("update")
        shortcut = self.shortcuts[shortcut_id]
        changes = {k: v for k, v in (("title", title), ("payload", payload), ("pinned", pinned)) if v is not None}
        shortcut = replace(shortcut, **changes)
        self.shortcuts[shortcut_id] = shortcut
        return shortcut

    def delete_shortcut(self, shortcut_id):
        self._write("delete")
        del self.shortcuts[shortcut_id]

    def list_tags(self):
        return list(self.tags)

    def upsert_tag(self, name):
        self._write("upsert_tag")
        self.tags.add(name)

    def delete_tag(self, name):
        self._write("delete_tag")
        self.tags.discard(name)


def make_shortcut(id: int, pinned: bool, ts: int, title: str = "") -> ShortcutData:
    return ShortcutData(
        id=id,
        title=title or f"s{id}",
        payload="[]",
        pinned=pinned,
        created_at=datetime.fromtimestamp(1_700_000_000 + ts),
    )


TEXT_A = Clause(FilterDimension.TEXT, Operator.CONTAIN, "a")


def test_sort_pinned_first_then_newest():
    a = make_shortcut(1, pinned=False, ts=1)
    b = make_shortcut(2, pinned=True, ts=0)
    c = make_shortcut(3, pinned=True, ts=2)
    assert [s.id for s in sort_shortcuts([a, b, c])] == [3, 2, 1]


def test_sort_normal_group_by_time():
    shortcuts = [make_shortcut(i, pinned=False, ts=i) for i in range(4)]
    assert [s.id for s in sort_shortcuts(shortcuts)] == [3, 2, 1, 0]


def test_fetch_shortcuts_returns_display_order():
    api = FakePersistence([make_shortcut(1, False, 5), make_shortcut(2, True, 1)])
    session = FilterSession(1)
    assert [s.id for s in session.fetch_shortcuts(api)] == [2, 1]


def test_create_shortcut_validates_before_persisting():
    api = FakePersistence()
    session = FilterSession(1)
    with pytest.raises(ValidationError) as exc_info:
        session.create_shortcut(api, "", [TEXT_A])
    assert exc_info.value.code == "title-required"
    with pytest.raises(ValidationError):
        session.create_shortcut(api, "Title", [Clause(FilterDimension.TEXT, Operator.CONTAIN, "")])
    assert api.calls == []
    assert session.shortcuts == []


def test_create_shortcut_reflects_locally():
    api = FakePersistence()
    session = FilterSession(1)
    shortcut = session.create_shortcut(api, "Work", [TEXT_A])
    assert shortcut.payload == serialize((TEXT_A,))
    assert session.get_shortcut(shortcut.id) == shortcut


def test_failed_create_leaves_state_unchanged():
    api = FakePersistence()
    api.fail = True
    session = FilterSession(1)
    with pytest.raises(PersistenceError):
        session.create_shortcut(api, "Work", [TEXT_A])
    assert session.shortcuts == []


def test_update_shortcut():
    api = FakePersistence([make_shortcut(1, False, 0, "Old")])
    session = FilterSession(1)
    session.fetch_shortcuts(api)
    session.update_shortcut(api, 1, "New", [TEXT_A])
    shortcut = session.get_shortcut(1)
    assert shortcut.title == "New"
    assert shortcut.clauses == (TEXT_A,)


def test_toggle_pin():
    api = FakePersistence([make_shortcut(1, False, 0), make_shortcut(2, False, 5)])
    session = FilterSession(1)
    session.fetch_shortcuts(api)
    session.toggle_pin(api, 1)
    assert [s.id for s in session.shortcuts] == [1, 2]
    assert api.shortcuts[1].pinned is True
    session.toggle_pin(api, 1)
    assert [s.id for s in session.shortcuts] == [2, 1]


def test_toggle_pin_rolls_back_on_failure():
    api = FakePersistence([make_shortcut(1, False, 0), make_shortcut(2, False, 5)])
    session = FilterSession(1)
    session.fetch_shortcuts(api)
    before = session.shortcuts
    api.fail = True
    with pytest.raises(PersistenceError):
        session.toggle_pin(api, 1)
    assert session.shortcuts == before
    assert session.get_shortcut(1).pinned is False


def test_toggle_pin_unknown_shortcut():
    session = FilterSession(1)
    with pytest.raises(NotFoundError):
        session.toggle_pin(FakePersistence(), 99)


def test_delete_active_shortcut_clears_reference():
    api = FakePersistence([make_shortcut(1, False, 0)])
    session = FilterSession(1)
    session.fetch_shortcuts(api)
    session.set_tag("keep")
    session.set_shortcut(1)
    session.delete_shortcut(api, 1)
    assert session.filter.shortcut_id is None
    assert session.filter.tag == "keep"
    assert session.shortcuts == []


def test_failed_delete_keeps_shortcut():
    api = FakePersistence([make_shortcut(1, False, 0)])
    session = FilterSession(1)
    session.fetch_shortcuts(api)
    session.set_shortcut(1)
    api.fail = True
    with pytest.raises(PersistenceError):
        session.delete_shortcut(api, 1)
    assert session.get_shortcut(1) is not None
    assert session.filter.shortcut_id == 1


def test_active_clauses_resolve_from_shortcut():
    payload = serialize((TEXT_A,))
    api = FakePersistence([replace(make_shortcut(1, False, 0), payload=payload)])
    session = FilterSession(1)
    session.fetch_shortcuts(api)
    assert session.active_clauses() == ()
    session.set_shortcut(1)
    assert session.active_clauses() == (TEXT_A,)
    session.set_shortcut(42)
    assert session.active_clauses() == ()


def test_clear_filter_on_route_change():
    session = FilterSession(1)
    session.set_tag("x")
    session.set_text("y")
    state = session.clear_filter()
    assert not state.is_active
    assert session.filter.tag is None


def test_tags():
    api = FakePersistence()
    session = FilterSession(1)
    session.upsert_tag(api, "work")
    session.upsert_tag(api, "books")
    assert session.tags == ["books", "work"]
    assert session.delete_tag(api, "work") == ["books"]
    assert session.fetch_tags(api) == ["books"]


def test_session_registry():
    reset_sessions()
    assert get_session(1) is get_session(1)
    assert get_session(1) is not get_session(2)
    reset_sessions()


def test_session_registry_from_many_threads():
    reset_sessions()
    with ThreadPoolExecutor(max_workers=8) as pool:
        sessions = list(pool.map(lambda _: get_session(9), range(64)))
    assert all(s is sessions[0] for s in sessions)
    reset_sessions()
