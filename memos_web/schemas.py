"""Request bodies for the JSON API."""

from pydantic import BaseModel, Field

from memos_web.services.clause_editor import Clause
from memos_web.services.clause_registry import FilterDimension, Operator, Relation


class ClauseValueIn(BaseModel):
    operator: Operator
    value: str = ""


class ClauseIn(BaseModel):
    """A clause in the same shape as the stored shortcut payload."""

    type: FilterDimension
    value: ClauseValueIn
    relation: Relation = Relation.AND

    def to_clause(self) -> Clause:
        return Clause(
            dimension=self.type,
            operator=self.value.operator,
            value=self.value.value,
            relation=self.relation,
        )


class ClauseListIn(BaseModel):
    clauses: list[ClauseIn] = Field(default_factory=list)

    def to_clauses(self) -> tuple[Clause, ...]:
        return tuple(c.to_clause() for c in self.clauses)


class ChangeDimensionIn(ClauseListIn):
    index: int
    dimension: FilterDimension


class ShortcutIn(ClauseListIn):
    title: str = ""


class TagIn(BaseModel):
    name: str = Field(min_length=1, max_length=100)


class FilterValueIn(BaseModel):
    value: str | None = None


class ShortcutRefIn(BaseModel):
    shortcut_id: int | None = Field(default=None, alias="shortcutId")


class DurationIn(BaseModel):
    start: int = Field(alias="from")
    end: int = Field(alias="to")


class MemoIn(BaseModel):
    content: str
    visibility: str = "PRIVATE"
    pinned: bool = False
