from fastapi import APIRouter, Depends

from memos_web.dependencies import get_filter_session, get_persistence
from memos_web.schemas import TagIn
from memos_web.services.filter_session import FilterSession
from memos_web.services.persistence import PersistenceAPI

router = APIRouter()


@router.get("/")
def list_tags(
    session: FilterSession = Depends(get_filter_session),
    api: PersistenceAPI = Depends(get_persistence),
) -> list[str]:
    """List the user's tags, sorted."""
    return session.fetch_tags(api)


@router.post("/")
def upsert_tag(
    body: TagIn,
    session: FilterSession = Depends(get_filter_session),
    api: PersistenceAPI = Depends(get_persistence),
) -> list[str]:
    """Create a tag if it doesn't exist yet."""
    session.upsert_tag(api, body.name)
    return session.fetch_tags(api)


@router.delete("/{name}")
def delete_tag(
    name: str,
    session: FilterSession = Depends(get_filter_session),
    api: PersistenceAPI = Depends(get_persistence),
) -> list[str]:
    """Delete a tag."""
    session.delete_tag(api, name)
    return session.fetch_tags(api)
