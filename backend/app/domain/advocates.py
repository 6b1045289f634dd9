"""Advocate-specific domain helpers."""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Optional

from app.domain.exceptions import ValidationError

# Bounds of the SQL types the listing query binds against: OFFSET is a BIGINT,
# years_of_experience an INTEGER.
SQL_BIGINT_MAX = 2**63 - 1
SQL_INT_MIN = -(2**31)
SQL_INT_MAX = 2**31 - 1


@dataclass(frozen=True, slots=True)
class AdvocateFilters:
    """Filters accepted by the advocate listing endpoint.

    ``None`` means "no constraint" for every field.
    """

    city: Optional[str] = None
    degree: Optional[str] = None
    min_experience: Optional[int] = None
    max_experience: Optional[int] = None
    search: Optional[str] = None

    @property
    def is_empty(self) -> bool:
        return all(
            value is None
            for value in (
                self.city,
                self.degree,
                self.min_experience,
                self.max_experience,
                self.search,
            )
        )


@dataclass(frozen=True, slots=True)
class PageRequest:
    """Caller-supplied pagination coordinates (1-based page index)."""

    page: int = 1
    limit: int = 10

    @property
    def offset(self) -> int:
        return (self.page - 1) * self.limit

    def clamped(self, max_limit: int) -> "PageRequest":
        """Return a copy with ``page >= 1`` and ``1 <= limit <= max_limit``.

        The page index is also capped so that :attr:`offset` fits a BIGINT;
        such a page lies far past any real row count and reads back empty.
        """
        limit = min(max(self.limit, 1), max_limit)
        page = min(max(self.page, 1), SQL_BIGINT_MAX // limit)
        return PageRequest(page=page, limit=limit)


def total_pages(total: int, limit: int) -> int:
    return math.ceil(total / limit) if total else 0


def parse_int(raw: Optional[str], field: str) -> int:
    """Parse an integer query parameter, raising ValidationError when malformed."""
    if raw is None:
        raise ValidationError(f"{field} is required")
    try:
        return int(raw.strip())
    except ValueError as exc:
        raise ValidationError(f"{field} must be an integer, got {raw!r}") from exc


def parse_int_or_default(raw: Optional[str], field: str, default: int) -> int:
    """Like :func:`parse_int` but recover from missing or malformed input."""
    if raw is None or not raw.strip():
        return default
    try:
        return parse_int(raw, field)
    except ValidationError:
        return default


def parse_optional_int(
    raw: Optional[str],
    field: str,
    *,
    lower: Optional[int] = None,
    upper: Optional[int] = None,
) -> Optional[int]:
    """Parse an optional integer, clamped to ``[lower, upper]`` when given.

    Missing or malformed input yields ``None``.
    """
    if raw is None or not raw.strip():
        return None
    try:
        value = parse_int(raw, field)
    except ValidationError:
        return None
    if lower is not None:
        value = max(value, lower)
    if upper is not None:
        value = min(value, upper)
    return value


def clean_text(raw: Optional[str]) -> Optional[str]:
    """Strip whitespace; empty strings mean "not supplied"."""
    if raw is None:
        return None
    raw = raw.strip()
    return raw or None
