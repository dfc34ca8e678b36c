from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from memos_web.database import get_db
from memos_web.dependencies import get_current_user_id, get_filter_session, get_persistence
from memos_web.exceptions import ValidationError
from memos_web.models import Memo
from memos_web.schemas import MemoIn
from memos_web.services import memo_service
from memos_web.services.filter_session import FilterSession
from memos_web.services.persistence import PersistenceAPI

router = APIRouter()


def _memo_to_dict(memo: Memo) -> dict:
    return {
        "id": memo.id,
        "content": memo.content,
        "visibility": memo.visibility,
        "pinned": memo.pinned,
        "createdTs": int(memo.created_at.timestamp()),
    }


@router.get("/")
def list_memos(
    db: Session = Depends(get_db),
    user_id: int = Depends(get_current_user_id),
    session: FilterSession = Depends(get_filter_session),
    api: PersistenceAPI = Depends(get_persistence),
) -> list[dict]:
    """Memos matching the active filter and the applied shortcut's clauses."""
    if session.filter.shortcut_id is not None and session.active_shortcut() is None:
        session.fetch_shortcuts(api)
    memos = memo_service.list_memos(db, user_id, session.filter, session.active_clauses())
    return [_memo_to_dict(m) for m in memos]


@router.post("/", status_code=201)
def create_memo(
    body: MemoIn,
    db: Session = Depends(get_db),
    user_id: int = Depends(get_current_user_id),
) -> dict:
    """Create a memo."""
    try:
        memo = memo_service.create_memo(db, user_id, body.content, body.visibility, body.pinned)
    except ValueError as e:
        raise ValidationError("value-invalid", field="visibility") from e
    return _memo_to_dict(memo)
