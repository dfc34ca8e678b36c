"""Active filter state: what currently narrows the visible memo list."""

from dataclasses import dataclass, replace
from typing import Any

from memos_web.models.memo import Visibility
from memos_web.services.clause_registry import MemoType


@dataclass(frozen=True)
class Duration:
    """Time range in epoch seconds, ``start`` inclusive, ``end`` exclusive."""

    start: int
    end: int

    @property
    def is_valid(self) -> bool:
        return self.start < self.end


@dataclass(frozen=True)
class ActiveFilterState:
    """
    Ad-hoc criteria plus at most one referenced shortcut.

    Instances are immutable; each ``with_*`` method returns a new state with
    exactly one field changed. Passing None (or an empty string) clears it.
    The referenced shortcut composes with the ad-hoc criteria, it never
    replaces them, and its clauses are not interpreted here.
    """

    tag: str | None = None
    duration: Duration | None = None
    memo_type: MemoType | None = None
    text: str | None = None
    shortcut_id: int | None = None
    visibility: Visibility | None = None

    def with_tag(self, tag: str | None) -> "ActiveFilterState":
        return replace(self, tag=tag or None)

    def with_duration(self, duration: Duration | None) -> "ActiveFilterState":
        return replace(self, duration=duration)

    def with_memo_type(self, memo_type: MemoType | str | None) -> "ActiveFilterState":
        return replace(self, memo_type=MemoType(memo_type) if memo_type else None)

    def with_text(self, text: str | None) -> "ActiveFilterState":
        return replace(self, text=text or None)

    def with_shortcut(self, shortcut_id: int | None) -> "ActiveFilterState":
        return replace(self, shortcut_id=shortcut_id)

    def with_visibility(self, visibility: Visibility | str | None) -> "ActiveFilterState":
        return replace(self, visibility=Visibility(visibility) if visibility else None)

    def cleared(self) -> "ActiveFilterState":
        return ActiveFilterState()

    @property
    def active_duration(self) -> Duration | None:
        """The duration, if it is a usable range; equal or inverted ranges count as absent."""
        if self.duration is not None and self.duration.is_valid:
            return self.duration
        return None

    @property
    def is_active(self) -> bool:
        return bool(
            self.tag
            or self.active_duration
            or self.memo_type
            or self.text
            or self.shortcut_id is not None
            or self.visibility
        )

    def to_dict(self) -> dict[str, Any]:
        duration = self.active_duration
        return {
            "tag": self.tag,
            "duration": {"from": duration.start, "to": duration.end} if duration else None,
            "type": self.memo_type.value if self.memo_type else None,
            "text": self.text,
            "shortcutId": self.shortcut_id,
            "visibility": self.visibility.value if self.visibility else None,
            "isActive": self.is_active,
        }
