"""Advocate persistence helpers."""

from __future__ import annotations

from typing import Optional, Protocol, Sequence

from sqlalchemy import ColumnElement, func, select

from app.db.models import Advocate
from app.repositories.base import SQLAlchemyReadRepository


class AdvocateStore(Protocol):
    """Record store capability used by the listing service."""

    def fetch(
        self,
        predicate: ColumnElement[bool],
        *,
        offset: Optional[int] = None,
        limit: Optional[int] = None,
    ) -> Sequence[Advocate]: ...

    def count(self, predicate: ColumnElement[bool]) -> int: ...


class AdvocateRepository(SQLAlchemyReadRepository[Advocate]):
    """Encapsulates all direct Advocate ORM access.

    Rows are always ordered by primary key so that offset pagination is
    stable across requests.
    """

    def fetch(
        self,
        predicate: ColumnElement[bool],
        *,
        offset: Optional[int] = None,
        limit: Optional[int] = None,
    ) -> Sequence[Advocate]:
        stmt = select(Advocate).where(predicate).order_by(Advocate.id.asc())
        if offset:
            stmt = stmt.offset(offset)
        if limit is not None:
            stmt = stmt.limit(limit)
        with self.session() as session:
            return list(session.scalars(stmt).all())

    def count(self, predicate: ColumnElement[bool]) -> int:
        stmt = select(func.count()).select_from(Advocate).where(predicate)
        with self.session() as session:
            return session.execute(stmt).scalar_one()
