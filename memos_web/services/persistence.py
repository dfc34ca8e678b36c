"""Persistence API used by the filter session, and its database implementation."""

import logging
from collections.abc import Iterator
from contextlib import contextmanager
from typing import Protocol

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from memos_web.exceptions import PersistenceError
from memos_web.services import shortcut_service, tag_service
from memos_web.services.shortcut_payload import ShortcutData

logger = logging.getLogger(__name__)


class PersistenceAPI(Protocol):
    """Shortcut and tag storage for a single owner.

    Every method may raise PersistenceError carrying a human-readable message.
    """

    def list_shortcuts(self) -> list[ShortcutData]: ...

    def create_shortcut(self, title: str, payload: str) -> ShortcutData: ...

    def update_shortcut(
        self,
        shortcut_id: int,
        title: str | None = None,
        payload: str | None = None,
        pinned: bool | None = None,
    ) -> ShortcutData: ...

    def delete_shortcut(self, shortcut_id: int) -> None: ...

    def list_tags(self) -> list[str]: ...

    def upsert_tag(self, name: str) -> None: ...

    def delete_tag(self, name: str) -> None: ...


class DatabasePersistence:
    """PersistenceAPI over the local SQLAlchemy session."""

    def __init__(self, db: Session, creator_id: int):
        self.db = db
        self.creator_id = creator_id

    def list_shortcuts(self) -> list[ShortcutData]:
        with self._errors("list shortcuts"):
            shortcuts = shortcut_service.get_shortcuts(self.db, self.creator_id)
        return [ShortcutData.from_model(s) for s in shortcuts]

    def create_shortcut(self, title: str, payload: str) -> ShortcutData:
        with self._errors("create shortcut"):
            shortcut = shortcut_service.create_shortcut(
                self.db, self.creator_id, title, payload
            )
        return ShortcutData.from_model(shortcut)

    def update_shortcut(
        self,
        shortcut_id: int,
        title: str | None = None,
        payload: str | None = None,
        pinned: bool | None = None,
    ) -> ShortcutData:
        with self._errors("update shortcut"):
            shortcut = shortcut_service.update_shortcut(
                self.db, self.creator_id, shortcut_id, title=title, payload=payload, pinned=pinned
            )
        if shortcut is None:
            raise PersistenceError(f"Shortcut {shortcut_id} not found", status_code=404)
        return ShortcutData.from_model(shortcut)

    def delete_shortcut(self, shortcut_id: int) -> None:
        with self._errors("delete shortcut"):
            deleted = shortcut_service.delete_shortcut(self.db, self.creator_id, shortcut_id)
        if not deleted:
            raise PersistenceError(f"Shortcut {shortcut_id} not found", status_code=404)

    def list_tags(self) -> list[str]:
        with self._errors("list tags"):
            return tag_service.get_tag_names(self.db, self.creator_id)

    def upsert_tag(self, name: str) -> None:
        with self._errors("upsert tag"):
            tag_service.upsert_tag(self.db, self.creator_id, name)

    def delete_tag(self, name: str) -> None:
        with self._errors("delete tag"):
            tag_service.delete_tag(self.db, self.creator_id, name)

    @contextmanager
    def _errors(self, action: str) -> Iterator[None]:
        """Roll back and re-raise SQLAlchemy failures as PersistenceError."""
        try:
            yield
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error("Failed to %s: %s", action, e)
            raise PersistenceError(f"Failed to {action}") from e
