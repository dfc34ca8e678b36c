import logging

from sqlalchemy.orm import Session

from memos_web.models import Shortcut
from memos_web.services import base

logger = logging.getLogger(__name__)


def get_shortcuts(db: Session, creator_id: int) -> list[Shortcut]:
    """Get a user's shortcuts, pinned first, each group newest first."""
    return base.list_owned(
        db,
        Shortcut,
        creator_id,
        Shortcut.pinned.desc(),
        Shortcut.created_at.desc(),
        Shortcut.id.desc(),
    )


def get_shortcut_by_id(db: Session, creator_id: int, shortcut_id: int) -> Shortcut | None:
    """Get a user's shortcut by ID."""
    return base.get_owned(db, Shortcut, shortcut_id, creator_id)


def create_shortcut(
    db: Session, creator_id: int, title: str, payload: str, pinned: bool = False
) -> Shortcut:
    """Create a new shortcut. ``payload`` is the serialized clause list."""
    shortcut = base.create(
        db, Shortcut, creator_id=creator_id, title=title, payload=payload, pinned=pinned
    )
    logger.info("Created shortcut %s for user %s", shortcut.id, creator_id)
    return shortcut


def update_shortcut(
    db: Session,
    creator_id: int,
    shortcut_id: int,
    title: str | None = None,
    payload: str | None = None,
    pinned: bool | None = None,
) -> Shortcut | None:
    """Update the given fields of a shortcut. Returns None if not found."""
    shortcut = get_shortcut_by_id(db, creator_id, shortcut_id)
    if not shortcut:
        return None
    shortcut = base.update(db, shortcut, title=title, payload=payload, pinned=pinned)
    logger.info("Updated shortcut %s for user %s", shortcut_id, creator_id)
    return shortcut


def delete_shortcut(db: Session, creator_id: int, shortcut_id: int) -> bool:
    """Delete a shortcut. Returns True if deleted, False if not found."""
    shortcut = get_shortcut_by_id(db, creator_id, shortcut_id)
    if not shortcut:
        return False
    base.delete(db, shortcut)
    logger.info("Deleted shortcut %s for user %s", shortcut_id, creator_id)
    return True
