"""Shortcut payload encoding and the shortcut value type shared by all backends.

The payload is a JSON array, one object per clause, in evaluation order:

    [{"type": "TAG", "value": {"operator": "CONTAIN", "value": "work"}, "relation": "AND"}]

This is the only durable format the filter subsystem defines, and it matches
what memos servers store, so shortcuts move between backends unchanged.
"""

import json
import logging
from dataclasses import dataclass
from datetime import datetime
from typing import TYPE_CHECKING, Any

from memos_web.exceptions import ValidationError
from memos_web.models.memo import RowStatus
from memos_web.services.clause_editor import Clause, ClauseSequence
from memos_web.services.clause_registry import (
    FilterDimension,
    Operator,
    Relation,
    get_value_domain,
    is_valid_value,
)

if TYPE_CHECKING:
    from memos_web.models import Shortcut

logger = logging.getLogger(__name__)


def clause_to_dict(clause: Clause) -> dict[str, Any]:
    return {
        "type": clause.dimension.value,
        "value": {"operator": clause.operator.value, "value": clause.value},
        "relation": clause.relation.value,
    }


def clause_from_dict(data: Any) -> Clause:
    """Build a Clause from its payload object. Raises ValueError when malformed."""
    if not isinstance(data, dict) or not isinstance(data.get("value"), dict):
        raise ValueError(f"malformed clause: {data!r}")
    value = data["value"].get("value", "")
    if not isinstance(value, str):
        raise ValueError(f"clause value must be a string: {value!r}")
    try:
        clause = Clause(
            dimension=FilterDimension(data.get("type")),
            operator=Operator(data["value"].get("operator")),
            value=value,
            relation=Relation(data.get("relation") or Relation.AND.value),
        )
    except ValidationError as e:
        raise ValueError(f"invalid clause {data!r}: {e.code}") from e
    # TAG values are checked against the user's tags at save time only
    has_fixed_domain = (
        clause.dimension != FilterDimension.TAG
        and get_value_domain(clause.dimension) is not None
    )
    if has_fixed_domain and not is_valid_value(clause.dimension, value):
        raise ValueError(f"value {value!r} is not allowed for {clause.dimension.value}")
    return clause


def serialize(clauses: ClauseSequence) -> str:
    """Encode clauses as the compact JSON payload stored on a shortcut."""
    return json.dumps([clause_to_dict(c) for c in clauses], separators=(",", ":"))


def deserialize(payload: str | None) -> ClauseSequence:
    """
    Decode a shortcut payload.

    Anything that is not a list of well-formed clauses decodes to an empty
    sequence; a corrupt payload must never break the editor or the memo list.
    """
    if not payload:
        return ()
    try:
        data = json.loads(payload)
    except (ValueError, TypeError, RecursionError):
        logger.warning("Shortcut payload is not valid JSON: %.80r", payload)
        return ()
    if not isinstance(data, list):
        logger.warning("Shortcut payload is not a clause list: %.80r", payload)
        return ()
    try:
        return tuple(clause_from_dict(item) for item in data)
    except ValueError as e:
        logger.warning("Discarding shortcut payload: %s", e)
        return ()


@dataclass(frozen=True)
class ShortcutData:
    """Backend-independent snapshot of a shortcut."""

    id: int
    title: str
    payload: str
    pinned: bool = False
    created_at: datetime | None = None
    creator_id: int | None = None

    @property
    def row_status(self) -> RowStatus:
        # memos encodes "pinned" as the ARCHIVED row status
        return RowStatus.ARCHIVED if self.pinned else RowStatus.NORMAL

    @property
    def clauses(self) -> ClauseSequence:
        return deserialize(self.payload)

    @classmethod
    def from_model(cls, shortcut: "Shortcut") -> "ShortcutData":
        return cls(
            id=shortcut.id,
            title=shortcut.title,
            payload=shortcut.payload,
            pinned=bool(shortcut.pinned),
            created_at=shortcut.created_at,
            creator_id=shortcut.creator_id,
        )

    @classmethod
    def from_api(cls, data: dict[str, Any]) -> "ShortcutData":
        """Build from a memos API object (camelCase, createdTs in epoch seconds)."""
        created_ts = data.get("createdTs")
        return cls(
            id=int(data["id"]),
            title=data.get("title", ""),
            payload=data.get("payload") or "[]",
            pinned=data.get("rowStatus") == RowStatus.ARCHIVED.value,
            created_at=datetime.fromtimestamp(created_ts) if created_ts else None,
            creator_id=data.get("creatorId"),
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "title": self.title,
            "payload": self.payload,
            "rowStatus": self.row_status.value,
            "pinned": self.pinned,
            "createdTs": int(self.created_at.timestamp()) if self.created_at else None,
        }
