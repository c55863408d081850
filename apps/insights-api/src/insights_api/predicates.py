"""Composable record conditions.

Each predicate evaluates a record in memory (``matches``) and compiles to a
SQLAlchemy clause against an ORM model (``to_clause``). Clauses that cannot be
expressed exactly in SQL compile to a superset and report ``exact_in_sql =
False``; the SQL store re-checks those rows with ``matches``.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any

from sqlalchemy import and_, false, func, or_, true
from sqlalchemy.sql.elements import ColumnElement

from geo_engine.proximity import ProximityQuery


def _escape_like(term: str) -> str:
    return term.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")


class Predicate(ABC):
    exact_in_sql = True

    @abstractmethod
    def matches(self, record: Any) -> bool: ...

    @abstractmethod
    def to_clause(self, model: Any) -> ColumnElement[bool]: ...


@dataclass(frozen=True)
class Equals(Predicate):
    field: str
    value: Any

    def matches(self, record: Any) -> bool:
        return getattr(record, self.field, None) == self.value

    def to_clause(self, model: Any) -> ColumnElement[bool]:
        return getattr(model, self.field) == self.value


@dataclass(frozen=True)
class Contains(Predicate):
    """Case-insensitive substring match. ``many`` fields match on any element.

    Only plain-ASCII terms on scalar columns compile to LIKE: JSON text escapes
    non-ASCII characters and SQLite lower() folds ASCII only. Everything else
    compiles to TRUE and is decided by ``matches``.
    """

    field: str
    term: str
    many: bool = False

    @property
    def exact_in_sql(self) -> bool:  # type: ignore[override]
        return not self.many and self.term.isascii()

    def matches(self, record: Any) -> bool:
        value = getattr(record, self.field, None)
        if value is None:
            return False
        needle = self.term.lower()
        if self.many:
            return any(needle in str(item).lower() for item in value)
        return needle in str(value).lower()

    def to_clause(self, model: Any) -> ColumnElement[bool]:
        if not self.exact_in_sql:
            return true()
        column = getattr(model, self.field)
        pattern = f"%{_escape_like(self.term.lower())}%"
        return func.lower(column).like(pattern, escape="\\")


@dataclass(frozen=True)
class Range(Predicate):
    """Inclusive numeric range; either bound may be None."""

    field: str
    low: float | None = None
    high: float | None = None

    def matches(self, record: Any) -> bool:
        value = getattr(record, self.field, None)
        if value is None:
            return False
        if self.low is not None and value < self.low:
            return False
        if self.high is not None and value > self.high:
            return False
        return True

    def to_clause(self, model: Any) -> ColumnElement[bool]:
        column = getattr(model, self.field)
        clauses = [column.is_not(None)]
        if self.low is not None:
            clauses.append(column >= self.low)
        if self.high is not None:
            clauses.append(column <= self.high)
        return and_(*clauses)


@dataclass(frozen=True)
class OneOf(Predicate):
    field: str
    values: tuple[Any, ...]

    def matches(self, record: Any) -> bool:
        return getattr(record, self.field, None) in self.values

    def to_clause(self, model: Any) -> ColumnElement[bool]:
        if not self.values:
            return false()
        return getattr(model, self.field).in_(self.values)


@dataclass(frozen=True)
class Near(Predicate):
    """Record point lies within the query radius.

    In SQL this narrows to the bounding box only; exact distance filtering and
    nearest-first ordering happen in Python.
    """

    query: ProximityQuery
    exact_in_sql = False

    def matches(self, record: Any) -> bool:
        point = getattr(record, "point", None)
        if point is None:
            return False
        return self.query.distance_to(point) <= self.query.radius_meters

    def to_clause(self, model: Any) -> ColumnElement[bool]:
        box = self.query.bounding_box()
        return and_(
            model.lat.is_not(None),
            model.lng.is_not(None),
            model.lat.between(box.min_lat, box.max_lat),
            model.lng.between(box.min_lng, box.max_lng),
        )


@dataclass(frozen=True)
class AllOf(Predicate):
    children: tuple[Predicate, ...] = ()

    @property
    def exact_in_sql(self) -> bool:  # type: ignore[override]
        return all(child.exact_in_sql for child in self.children)

    def matches(self, record: Any) -> bool:
        return all(child.matches(record) for child in self.children)

    def to_clause(self, model: Any) -> ColumnElement[bool]:
        if not self.children:
            return true()
        return and_(*(child.to_clause(model) for child in self.children))


@dataclass(frozen=True)
class AnyOf(Predicate):
    children: tuple[Predicate, ...] = ()

    @property
    def exact_in_sql(self) -> bool:  # type: ignore[override]
        return all(child.exact_in_sql for child in self.children)

    def matches(self, record: Any) -> bool:
        return any(child.matches(record) for child in self.children)

    def to_clause(self, model: Any) -> ColumnElement[bool]:
        if not self.children:
            return false()
        return or_(*(child.to_clause(model) for child in self.children))


MATCH_ALL = AllOf()


def all_of(*children: Predicate) -> Predicate:
    """AND the given predicates, collapsing the trivial cases."""
    flat = tuple(child for child in children if child != MATCH_ALL)
    if not flat:
        return MATCH_ALL
    if len(flat) == 1:
        return flat[0]
    return AllOf(flat)
