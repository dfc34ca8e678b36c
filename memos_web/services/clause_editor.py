"""Immutable editing operations over a sequence of filter clauses.

Every edit returns a new tuple; the sequence passed in is never mutated, so a
refused edit leaves the caller's sequence exactly as it was.
"""

from collections.abc import Iterable
from dataclasses import dataclass, replace
from datetime import datetime

from memos_web.exceptions import IncompleteClauseError, ValidationError
from memos_web.services.clause_registry import (
    FilterDimension,
    Operator,
    Relation,
    get_dimension_spec,
    is_valid_operator,
    is_valid_value,
)

DEFAULT_DIMENSION = FilterDimension.TEXT
DISPLAY_TIME_FORMAT = "%Y-%m-%dT%H:%M"


@dataclass(frozen=True)
class Clause:
    """One predicate plus how it combines with the clauses before it."""

    dimension: FilterDimension
    operator: Operator
    value: str = ""
    relation: Relation = Relation.AND

    def __post_init__(self) -> None:
        if not is_valid_operator(self.dimension, self.operator):
            raise ValidationError("operator-invalid", field="operator")


ClauseSequence = tuple[Clause, ...]


def default_clause(dimension: FilterDimension = DEFAULT_DIMENSION) -> Clause:
    """A fresh clause: first operator of the dimension, empty value, AND."""
    spec = get_dimension_spec(dimension)
    return Clause(dimension=spec.dimension, operator=spec.default_operator)


def format_display_time(moment: datetime | None = None) -> str:
    """Local timestamp in the editor's datetime format (minute precision)."""
    return (moment or datetime.now()).strftime(DISPLAY_TIME_FORMAT)


def append_clause(clauses: ClauseSequence) -> ClauseSequence:
    """Append a default clause. Refused while the last clause has no value."""
    if clauses and not clauses[-1].value:
        raise IncompleteClauseError()
    return (*clauses, default_clause())


def replace_clause(clauses: ClauseSequence, index: int, clause: Clause) -> ClauseSequence:
    _check_index(clauses, index)
    return (*clauses[:index], clause, *clauses[index + 1 :])


def remove_clause(clauses: ClauseSequence, index: int) -> ClauseSequence:
    _check_index(clauses, index)
    return (*clauses[:index], *clauses[index + 1 :])


def change_dimension(
    clauses: ClauseSequence,
    index: int,
    dimension: FilterDimension,
    now: datetime | None = None,
) -> ClauseSequence:
    """
    Switch a clause to another dimension.

    Operator resets to the new dimension's first operator and the value is
    cleared; DISPLAY_TIME is anchored to the current local time instead.
    """
    _check_index(clauses, index)
    current = clauses[index]
    if current.dimension == dimension:
        return clauses

    spec = get_dimension_spec(dimension)
    value = format_display_time(now) if spec.dimension == FilterDimension.DISPLAY_TIME else ""
    updated = Clause(
        dimension=spec.dimension,
        operator=spec.default_operator,
        value=value,
        relation=current.relation,
    )
    return replace_clause(clauses, index, updated)


def change_operator(clauses: ClauseSequence, index: int, operator: Operator) -> ClauseSequence:
    _check_index(clauses, index)
    return replace_clause(clauses, index, replace(clauses[index], operator=Operator(operator)))


def change_value(clauses: ClauseSequence, index: int, value: str) -> ClauseSequence:
    _check_index(clauses, index)
    return replace_clause(clauses, index, replace(clauses[index], value=value))


def change_relation(clauses: ClauseSequence, index: int, relation: Relation) -> ClauseSequence:
    _check_index(clauses, index)
    return replace_clause(clauses, index, replace(clauses[index], relation=Relation(relation)))


def validate_for_save(
    title: str, clauses: Iterable[Clause], tags: Iterable[str] | None = None
) -> None:
    """
    Check a shortcut before it is persisted.

    Raises ValidationError with ``title-required``, ``value-required`` or
    ``value-invalid``. Values of TYPE/VISIBILITY clauses are checked against
    their fixed domains; TAG values only when the user's ``tags`` are given.
    """
    if not title or not title.strip():
        raise ValidationError("title-required", field="title")
    clauses = tuple(clauses)
    for clause in clauses:
        if not clause.value:
            raise ValidationError("value-required", field="value")
    tag_set = None if tags is None else set(tags)
    for clause in clauses:
        if not is_valid_value(clause.dimension, clause.value, tag_set):
            raise ValidationError("value-invalid", field="value")


def _check_index(clauses: ClauseSequence, index: int) -> None:
    if not 0 <= index < len(clauses):
        raise IndexError(f"clause index {index} out of range for {len(clauses)} clauses")
