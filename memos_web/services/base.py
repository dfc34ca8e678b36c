"""Owner-scoped CRUD helpers shared by the database-backed services."""

from typing import Any, TypeVar

from sqlalchemy.orm import Session

T = TypeVar("T")


def get_owned(db: Session, model: type[T], id: int, creator_id: int) -> T | None:
    """Get a record by ID, only if it belongs to ``creator_id``."""
    return (
        db.query(model)
        .filter(model.id == id, model.creator_id == creator_id)  # type: ignore[attr-defined]
        .first()
    )


def list_owned(
    db: Session, model: type[T], creator_id: int, *order_by: Any
) -> list[T]:
    """Get all records owned by ``creator_id``, optionally ordered."""
    query = db.query(model).filter(model.creator_id == creator_id)  # type: ignore[attr-defined]
    if order_by:
        query = query.order_by(*order_by)
    return query.all()


def create(db: Session, model: type[T], **kwargs) -> T:
    """Create a new record."""
    obj = model(**kwargs)
    db.add(obj)
    db.commit()
    db.refresh(obj)
    return obj


def update(db: Session, obj: T, **kwargs) -> T:
    """Apply the non-None fields to ``obj`` and commit."""
    for key, value in kwargs.items():
        if value is not None:
            setattr(obj, key, value)
    db.commit()
    db.refresh(obj)
    return obj


def delete(db: Session, obj: Any) -> None:
    db.delete(obj)
    db.commit()
