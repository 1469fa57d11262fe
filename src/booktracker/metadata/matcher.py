# ABOUTME: Token matching for free-text search criteria against booklists and books.
# ABOUTME: Every whitespace token must be a case-sensitive substring of at least one field.

from collections.abc import Callable, Iterable, Sequence
from dataclasses import dataclass
from typing import Any


def tokenize(criteria: str | None) -> list[str]:
    """Split criteria on whitespace. Blank or missing criteria yield no tokens."""
    if not criteria:
        return []
    return criteria.split()


def field_contains(value: Any, token: str) -> bool:
    """Case-sensitive substring test.

    Multi-valued fields (tag sets, lists) contain the token when any element
    does. Missing values never contain anything.
    """
    if value is None:
        return False
    if isinstance(value, str):
        return token in value
    if isinstance(value, Iterable):
        return any(isinstance(item, str) and token in item for item in value)
    return False


@dataclass(frozen=True)
class Contains:
    """A single ``contains(field, value)`` predicate."""

    field: str
    value: str


@dataclass(frozen=True)
class FilterExpression:
    """A conjunction of clauses; each clause is a disjunction of Contains predicates.

    One clause is built per criteria token, so a record matches when every
    token is found in at least one of the searched fields. An expression with
    no clauses matches everything.
    """

    clauses: tuple[tuple[Contains, ...], ...] = ()

    @property
    def is_empty(self) -> bool:
        return not self.clauses

    def evaluate(self, get_field: Callable[[str], Any]) -> bool:
        """Evaluate the expression against a record exposed through ``get_field``."""
        return all(
            any(field_contains(get_field(pred.field), pred.value) for pred in clause)
            for clause in self.clauses
        )

    def matches(self, record: Any) -> bool:
        """Evaluate against an object whose attributes are the searched fields."""
        return self.evaluate(lambda name: getattr(record, name, None))


def build_filter(tokens: Sequence[str], fields: Sequence[str]) -> FilterExpression:
    """Build the AND-of-ORs filter for ``tokens`` searched across ``fields``."""
    if tokens and not fields:
        raise ValueError("at least one field is required to match tokens against")
    clauses = tuple(tuple(Contains(name, token) for name in fields) for token in tokens)
    return FilterExpression(clauses=clauses)


def matches(criteria: str | None, values: Sequence[Any]) -> bool:
    """Decide whether a candidate with the given searchable values matches ``criteria``."""
    return all(
        any(field_contains(value, token) for value in values) for token in tokenize(criteria)
    )
