"""Per-user filter session: active filter, shortcut collection and known tags.

A FilterSession is the single owner of a user's filter state. Reads go
through accessors; each mutation returns the new state. Operations that
write go through a PersistenceAPI passed in by the caller and are reflected
locally only once the write succeeded, except pin toggling, which is applied
first and restored from a snapshot if the write fails.
"""

import logging
import threading
from collections.abc import Iterable
from dataclasses import replace

from memos_web.exceptions import NotFoundError, PersistenceError
from memos_web.services.clause_editor import Clause, ClauseSequence, validate_for_save
from memos_web.services.memo_filter import ActiveFilterState, Duration
from memos_web.services.persistence import PersistenceAPI
from memos_web.services.shortcut_payload import ShortcutData, serialize

logger = logging.getLogger(__name__)


def sort_shortcuts(shortcuts: Iterable[ShortcutData]) -> list[ShortcutData]:
    """Pinned shortcuts first, then the rest; each group most recent first."""
    newest_first = sorted(
        shortcuts,
        key=lambda s: s.created_at.timestamp() if s.created_at else 0.0,
        reverse=True,
    )
    # sorted() is stable, so the time order survives inside each group
    return sorted(newest_first, key=lambda s: not s.pinned)


class FilterSession:
    def __init__(self, user_id: int):
        self.user_id = user_id
        self._filter = ActiveFilterState()
        self._shortcuts: list[ShortcutData] = []
        self._tags: list[str] = []

    # Read accessors

    @property
    def filter(self) -> ActiveFilterState:
        return self._filter

    @property
    def shortcuts(self) -> list[ShortcutData]:
        return sort_shortcuts(self._shortcuts)

    @property
    def tags(self) -> list[str]:
        return list(self._tags)

    def get_shortcut(self, shortcut_id: int) -> ShortcutData | None:
        return next((s for s in self._shortcuts if s.id == shortcut_id), None)

    def active_shortcut(self) -> ShortcutData | None:
        if self._filter.shortcut_id is None:
            return None
        return self.get_shortcut(self._filter.shortcut_id)

    def active_clauses(self) -> ClauseSequence:
        """Decoded clauses of the referenced shortcut, empty if none resolves."""
        shortcut = self.active_shortcut()
        return shortcut.clauses if shortcut else ()

    # Active filter

    def set_tag(self, tag: str | None) -> ActiveFilterState:
        return self._set_filter(self._filter.with_tag(tag))

    def set_duration(self, duration: Duration | None) -> ActiveFilterState:
        return self._set_filter(self._filter.with_duration(duration))

    def set_memo_type(self, memo_type: str | None) -> ActiveFilterState:
        return self._set_filter(self._filter.with_memo_type(memo_type))

    def set_text(self, text: str | None) -> ActiveFilterState:
        return self._set_filter(self._filter.with_text(text))

    def set_shortcut(self, shortcut_id: int | None) -> ActiveFilterState:
        return self._set_filter(self._filter.with_shortcut(shortcut_id))

    def set_visibility(self, visibility: str | None) -> ActiveFilterState:
        return self._set_filter(self._filter.with_visibility(visibility))

    def clear_filter(self) -> ActiveFilterState:
        """Reset every criterion; called on each route change."""
        return self._set_filter(self._filter.cleared())

    def _set_filter(self, state: ActiveFilterState) -> ActiveFilterState:
        self._filter = state
        return state

    # Shortcut collection

    def fetch_shortcuts(self, api: PersistenceAPI) -> list[ShortcutData]:
        self._shortcuts = list(api.list_shortcuts())
        return self.shortcuts

    def create_shortcut(
        self, api: PersistenceAPI, title: str, clauses: Iterable[Clause]
    ) -> ShortcutData:
        clauses = tuple(clauses)
        validate_for_save(title, clauses)
        shortcut = api.create_shortcut(title, serialize(clauses))
        self._shortcuts = [*self._shortcuts, shortcut]
        logger.info("User %s created shortcut %s", self.user_id, shortcut.id)
        return shortcut

    def update_shortcut(
        self, api: PersistenceAPI, shortcut_id: int, title: str, clauses: Iterable[Clause]
    ) -> ShortcutData:
        clauses = tuple(clauses)
        validate_for_save(title, clauses)
        shortcut = api.update_shortcut(shortcut_id, title=title, payload=serialize(clauses))
        self._replace_shortcut(shortcut)
        logger.info("User %s updated shortcut %s", self.user_id, shortcut_id)
        return shortcut

    def toggle_pin(self, api: PersistenceAPI, shortcut_id: int) -> ShortcutData:
        """Flip the pin locally, persist it, and restore the snapshot on failure."""
        current = self.get_shortcut(shortcut_id)
        if current is None:
            raise NotFoundError("Shortcut", shortcut_id)

        snapshot = list(self._shortcuts)
        pinned = not current.pinned
        self._replace_shortcut(replace(current, pinned=pinned))
        try:
            shortcut = api.update_shortcut(shortcut_id, pinned=pinned)
        except PersistenceError:
            logger.warning("Pin toggle of shortcut %s failed, restoring", shortcut_id)
            self._shortcuts = snapshot
            raise
        self._replace_shortcut(shortcut)
        return shortcut

    def delete_shortcut(self, api: PersistenceAPI, shortcut_id: int) -> None:
        api.delete_shortcut(shortcut_id)
        self._shortcuts = [s for s in self._shortcuts if s.id != shortcut_id]
        if self._filter.shortcut_id == shortcut_id:
            self.set_shortcut(None)
        logger.info("User %s deleted shortcut %s", self.user_id, shortcut_id)

    def _replace_shortcut(self, shortcut: ShortcutData) -> None:
        if self.get_shortcut(shortcut.id) is None:
            self._shortcuts = [*self._shortcuts, shortcut]
            return
        self._shortcuts = [shortcut if s.id == shortcut.id else s for s in self._shortcuts]

    # Tags

    def fetch_tags(self, api: PersistenceAPI) -> list[str]:
        self._tags = sorted(set(api.list_tags()))
        return self.tags

    def upsert_tag(self, api: PersistenceAPI, name: str) -> list[str]:
        api.upsert_tag(name)
        self._tags = sorted({*self._tags, name})
        return self.tags

    def delete_tag(self, api: PersistenceAPI, name: str) -> list[str]:
        api.delete_tag(name)
        self._tags = [t for t in self._tags if t != name]
        return self.tags


_sessions: dict[int, FilterSession] = {}
_sessions_lock = threading.Lock()


def get_session(user_id: int) -> FilterSession:
    """Get (or start) the filter session for a user."""
    with _sessions_lock:
        session = _sessions.get(user_id)
        if session is None:
            session = _sessions[user_id] = FilterSession(user_id)
        return session


def reset_sessions() -> None:
    """Drop every session."""
    with _sessions_lock:
        _sessions.clear()
