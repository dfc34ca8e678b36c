"""Evaluate filter clauses and active filter criteria against memos."""

import logging
import re
from collections.abc import Iterable
from datetime import datetime

from memos_web.models import Memo
from memos_web.services.clause_editor import Clause
from memos_web.services.clause_registry import FilterDimension, MemoType, Operator, Relation
from memos_web.services.memo_filter import ActiveFilterState

logger = logging.getLogger(__name__)

TAG_PATTERN = re.compile(r"(?:^|\s)#([^\s#,]+)")
LINK_PATTERN = re.compile(r"https?://[^\s]+")
IMAGE_PATTERN = re.compile(r"!\[.*?\]\(.+?\)")


def extract_tags(content: str) -> set[str]:
    return set(TAG_PATTERN.findall(content or ""))


def has_tag(memo: Memo, tag: str) -> bool:
    """True if the memo carries ``tag`` or one of its sub-tags (``tag/...``)."""
    return any(t == tag or t.startswith(f"{tag}/") for t in extract_tags(memo.content))


def parse_display_time(value: str) -> datetime | None:
    """
    Parse a DISPLAY_TIME value as a naive local datetime.

    Accepts any ISO 8601 form (date only, minutes, seconds); an offset is
    converted to local time. Returns None when the value cannot be parsed.
    """
    try:
        moment = datetime.fromisoformat(value)
    except (TypeError, ValueError):
        return None
    if moment.tzinfo is not None:
        moment = moment.astimezone().replace(tzinfo=None)
    return moment


def has_memo_type(memo: Memo, memo_type: MemoType | str) -> bool:
    """True if the memo is of ``memo_type``; an unknown type matches nothing."""
    try:
        memo_type = MemoType(memo_type)
    except ValueError:
        logger.warning("Unknown memo type in filter: %r", memo_type)
        return False
    content = memo.content or ""
    if memo_type == MemoType.NOT_TAGGED:
        return not extract_tags(content)
    if memo_type == MemoType.LINKED:
        return bool(LINK_PATTERN.search(content))
    return bool(IMAGE_PATTERN.search(content))


def contains_text(memo: Memo, text: str) -> bool:
    return text.lower() in (memo.content or "").lower()


def clause_matches(memo: Memo, clause: Clause) -> bool:
    """Evaluate a single clause. Negated operators invert the positive test."""
    dimension = clause.dimension
    if dimension == FilterDimension.TAG:
        matched = has_tag(memo, clause.value)
    elif dimension == FilterDimension.TYPE:
        matched = has_memo_type(memo, clause.value)
    elif dimension == FilterDimension.TEXT:
        matched = contains_text(memo, clause.value)
    elif dimension == FilterDimension.VISIBILITY:
        matched = memo.visibility == clause.value
    else:
        anchor = parse_display_time(clause.value)
        if anchor is None:
            logger.warning("Unparseable display time in filter: %r", clause.value)
            return False
        if clause.operator == Operator.BEFORE:
            return memo.created_at < anchor
        return memo.created_at > anchor

    if clause.operator in (Operator.NOT_CONTAIN, Operator.IS_NOT):
        return not matched
    return matched


def clauses_match(memo: Memo, clauses: Iterable[Clause]) -> bool:
    """
    Fold clauses left to right in document order.

    ``A AND B OR C`` means ``(A AND B) OR C``. The first clause's relation is
    ignored and an empty sequence matches every memo.
    """
    result: bool | None = None
    for clause in clauses:
        matched = clause_matches(memo, clause)
        if result is None:
            result = matched
        elif clause.relation == Relation.OR:
            result = result or matched
        else:
            result = result and matched
    return True if result is None else result


def filter_matches(memo: Memo, state: ActiveFilterState) -> bool:
    """Check every present ad-hoc criterion of the active filter."""
    if state.tag and not has_tag(memo, state.tag):
        return False
    if state.text and not contains_text(memo, state.text):
        return False
    if state.memo_type and not has_memo_type(memo, state.memo_type):
        return False
    if state.visibility and memo.visibility != state.visibility.value:
        return False
    duration = state.active_duration
    if duration:
        ts = memo.created_at.timestamp()
        if not duration.start <= ts < duration.end:
            return False
    return True
