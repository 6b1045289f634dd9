"""Translate advocate listing filters into a single SQL predicate.

Each builder inspects one field of :class:`AdvocateFilters` and returns a
clause or ``None`` when the field is absent. The clauses are AND-ed; with no
clauses the predicate is ``true()`` so an empty filter matches every row.
Nothing here executes a query or knows about pagination.
"""

from __future__ import annotations

from typing import Callable, Optional

from sqlalchemy import ColumnElement, and_, or_, true

from app.db.models import Advocate
from app.domain.advocates import AdvocateFilters

LIKE_ESCAPE = "\\"

PredicateBuilder = Callable[[AdvocateFilters], Optional[ColumnElement[bool]]]


def _contains_pattern(value: str) -> str:
    escaped = (
        value.replace(LIKE_ESCAPE, LIKE_ESCAPE * 2).replace("%", "\\%").replace("_", "\\_")
    )
    return f"%{escaped}%"


def _icontains(column, value: str) -> ColumnElement[bool]:
    return column.ilike(_contains_pattern(value), escape=LIKE_ESCAPE)


def _city(filters: AdvocateFilters) -> Optional[ColumnElement[bool]]:
    if filters.city:
        return _icontains(Advocate.city, filters.city)
    return None


def _degree(filters: AdvocateFilters) -> Optional[ColumnElement[bool]]:
    if filters.degree:
        return _icontains(Advocate.degree, filters.degree)
    return None


def _min_experience(filters: AdvocateFilters) -> Optional[ColumnElement[bool]]:
    if filters.min_experience is not None:
        return Advocate.years_of_experience >= filters.min_experience
    return None


def _max_experience(filters: AdvocateFilters) -> Optional[ColumnElement[bool]]:
    if filters.max_experience is not None:
        return Advocate.years_of_experience <= filters.max_experience
    return None


def _name_search(filters: AdvocateFilters) -> Optional[ColumnElement[bool]]:
    if filters.search:
        return or_(
            _icontains(Advocate.first_name, filters.search),
            _icontains(Advocate.last_name, filters.search),
        )
    return None


PREDICATE_BUILDERS: tuple[PredicateBuilder, ...] = (
    _city,
    _degree,
    _min_experience,
    _max_experience,
    _name_search,
)


def build_clauses(filters: AdvocateFilters) -> list[ColumnElement[bool]]:
    clauses = []
    for builder in PREDICATE_BUILDERS:
        clause = builder(filters)
        if clause is not None:
            clauses.append(clause)
    return clauses


def compose_advocate_predicate(filters: AdvocateFilters) -> ColumnElement[bool]:
    """Return one boolean expression matching every advocate that satisfies ``filters``."""
    if filters.is_empty:
        return true()
    clauses = build_clauses(filters)
    if not clauses:
        return true()
    if len(clauses) == 1:
        return clauses[0]
    return and_(*clauses)
