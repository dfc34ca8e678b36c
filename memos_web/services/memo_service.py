from collections.abc import Iterable
from datetime import datetime

from sqlalchemy.orm import Session

from memos_web.models import Memo, RowStatus, Visibility
from memos_web.services import base
from memos_web.services.clause_editor import Clause
from memos_web.services.memo_filter import ActiveFilterState
from memos_web.services.memo_query import clauses_match, filter_matches


def create_memo(
    db: Session,
    creator_id: int,
    content: str,
    visibility: Visibility | str = Visibility.PRIVATE,
    pinned: bool = False,
) -> Memo:
    """Create a new memo."""
    return base.create(
        db,
        Memo,
        creator_id=creator_id,
        content=content,
        visibility=Visibility(visibility).value,
        pinned=pinned,
    )


def list_memos(
    db: Session,
    creator_id: int,
    state: ActiveFilterState | None = None,
    clauses: Iterable[Clause] = (),
) -> list[Memo]:
    """
    Get a user's active memos narrowed by the filter state and shortcut clauses.

    Ordered pinned first, then newest first. Visibility and the time range are
    applied in SQL; content-based criteria and the clause fold in Python.
    """
    state = state or ActiveFilterState()
    clauses = tuple(clauses)

    query = db.query(Memo).filter(
        Memo.creator_id == creator_id,
        Memo.row_status == RowStatus.NORMAL.value,
    )
    if state.visibility:
        query = query.filter(Memo.visibility == state.visibility.value)
    duration = state.active_duration
    if duration:
        query = query.filter(
            Memo.created_at >= datetime.fromtimestamp(duration.start),
            Memo.created_at < datetime.fromtimestamp(duration.end),
        )
    query = query.order_by(Memo.pinned.desc(), Memo.created_at.desc(), Memo.id.desc())

    return [
        memo
        for memo in query.all()
        if filter_matches(memo, state) and clauses_match(memo, clauses)
    ]
