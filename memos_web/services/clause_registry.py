"""Catalog of filter dimensions, their operators and value domains."""

from collections.abc import Callable, Iterable
from dataclasses import dataclass
from enum import Enum

from memos_web.models.memo import Visibility


class FilterDimension(str, Enum):
    TAG = "TAG"
    TYPE = "TYPE"
    TEXT = "TEXT"
    DISPLAY_TIME = "DISPLAY_TIME"
    VISIBILITY = "VISIBILITY"


class Operator(str, Enum):
    CONTAIN = "CONTAIN"
    NOT_CONTAIN = "NOT_CONTAIN"
    IS = "IS"
    IS_NOT = "IS_NOT"
    BEFORE = "BEFORE"
    AFTER = "AFTER"


class Relation(str, Enum):
    AND = "AND"
    OR = "OR"


class MemoType(str, Enum):
    NOT_TAGGED = "NOT_TAGGED"
    LINKED = "LINKED"
    IMAGED = "IMAGED"


# Resolves a dimension's value domain from the user's current tag set.
# None means the domain is unconstrained (free text or a timestamp).
ValueDomain = Callable[[Iterable[str]], tuple[str, ...]] | None


@dataclass(frozen=True)
class DimensionSpec:
    """One filter dimension: its operators (first is the default) and value domain."""

    dimension: FilterDimension
    operators: tuple[Operator, ...]
    value_domain: ValueDomain = None

    @property
    def default_operator(self) -> Operator:
        return self.operators[0]


def _tag_domain(tags: Iterable[str]) -> tuple[str, ...]:
    return tuple(sorted(set(tags)))


def _fixed_domain(values: Iterable[str]) -> Callable[[Iterable[str]], tuple[str, ...]]:
    frozen = tuple(values)
    return lambda _tags: frozen


DIMENSION_SPECS: dict[FilterDimension, DimensionSpec] = {
    FilterDimension.TAG: DimensionSpec(
        FilterDimension.TAG,
        (Operator.CONTAIN, Operator.NOT_CONTAIN),
        _tag_domain,
    ),
    FilterDimension.TYPE: DimensionSpec(
        FilterDimension.TYPE,
        (Operator.IS, Operator.IS_NOT),
        _fixed_domain(t.value for t in MemoType),
    ),
    FilterDimension.TEXT: DimensionSpec(
        FilterDimension.TEXT,
        (Operator.CONTAIN, Operator.NOT_CONTAIN),
    ),
    FilterDimension.DISPLAY_TIME: DimensionSpec(
        FilterDimension.DISPLAY_TIME,
        (Operator.BEFORE, Operator.AFTER),
    ),
    FilterDimension.VISIBILITY: DimensionSpec(
        FilterDimension.VISIBILITY,
        (Operator.IS, Operator.IS_NOT),
        _fixed_domain(v.value for v in Visibility),
    ),
}

_missing = set(FilterDimension) - set(DIMENSION_SPECS)
if _missing:
    raise RuntimeError(f"Filter dimensions without a spec: {sorted(_missing)}")


def get_dimension_spec(dimension: FilterDimension) -> DimensionSpec:
    """Look up a dimension. Unknown dimensions are a programming error (KeyError)."""
    return DIMENSION_SPECS[FilterDimension(dimension)]


def get_operators(dimension: FilterDimension) -> tuple[Operator, ...]:
    return get_dimension_spec(dimension).operators


def get_value_domain(
    dimension: FilterDimension, tags: Iterable[str] = ()
) -> tuple[str, ...] | None:
    """Allowed values for a dimension; None when any non-empty string is accepted."""
    resolver = get_dimension_spec(dimension).value_domain
    if resolver is None:
        return None
    return resolver(tags)


def is_valid_operator(dimension: FilterDimension, operator: Operator) -> bool:
    return operator in get_operators(dimension)


def is_valid_value(
    dimension: FilterDimension, value: str, tags: Iterable[str] | None = None
) -> bool:
    """
    Check a value against the dimension's domain.

    The TAG domain is dynamic; when ``tags`` is None it is not checked.
    """
    if not value:
        return False
    if dimension == FilterDimension.TAG and tags is None:
        return True
    domain = get_value_domain(dimension, tags or ())
    return domain is None or value in domain
