import logging

from sqlalchemy.orm import Session

from memos_web.models import Tag
from memos_web.services import base

logger = logging.getLogger(__name__)


def get_all_tags(db: Session, creator_id: int) -> list[Tag]:
    """Get a user's tags ordered by name."""
    return base.list_owned(db, Tag, creator_id, Tag.name)


def get_tag_names(db: Session, creator_id: int) -> list[str]:
    return [tag.name for tag in get_all_tags(db, creator_id)]


def get_tag_by_name(db: Session, creator_id: int, name: str) -> Tag | None:
    """Get a single tag by name."""
    return db.query(Tag).filter(Tag.creator_id == creator_id, Tag.name == name).first()


def upsert_tag(db: Session, creator_id: int, name: str) -> Tag:
    """Create a tag unless the user already has one with this name."""
    existing = get_tag_by_name(db, creator_id, name)
    if existing:
        return existing
    tag = base.create(db, Tag, creator_id=creator_id, name=name)
    logger.info("Created tag %r for user %s", name, creator_id)
    return tag


def delete_tag(db: Session, creator_id: int, name: str) -> bool:
    """Delete a tag by name. Returns True if deleted, False if not found."""
    tag = get_tag_by_name(db, creator_id, name)
    if not tag:
        return False
    base.delete(db, tag)
    logger.info("Deleted tag %r for user %s", name, creator_id)
    return True
