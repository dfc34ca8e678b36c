"""Shared FastAPI dependencies: request owner, persistence backend, filter session."""

from collections.abc import Generator

from fastapi import Depends, Header
from sqlalchemy.orm import Session

from memos_web.config import get_settings
from memos_web.database import get_db
from memos_web.services.filter_session import FilterSession, get_session
from memos_web.services.memos_client import get_memos_client
from memos_web.services.persistence import DatabasePersistence, PersistenceAPI


def get_current_user_id(x_user_id: int | None = Header(default=None)) -> int:
    """Owner of the request. Authentication happens upstream of this app."""
    if x_user_id is None:
        return get_settings().default_user_id
    return x_user_id


def get_persistence(
    db: Session = Depends(get_db),
    user_id: int = Depends(get_current_user_id),
) -> Generator[PersistenceAPI, None, None]:
    """Remote memos server when configured, otherwise the local database."""
    if not get_settings().memos_api_url:
        yield DatabasePersistence(db, user_id)
        return

    client = get_memos_client()
    try:
        yield client
    finally:
        client.close()


def get_filter_session(user_id: int = Depends(get_current_user_id)) -> FilterSession:
    return get_session(user_id)
