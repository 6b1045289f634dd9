"""Base repository utilities."""

from __future__ import annotations

from contextlib import contextmanager
from typing import Generic, Iterator, TypeVar

from sqlalchemy.orm import Session, sessionmaker

TModel = TypeVar("TModel")


class SQLAlchemyReadRepository(Generic[TModel]):
    """Read-only base repository holding a session factory.

    Every read opens its own short-lived session so that reads issued from
    different threads never share a connection.
    """

    def __init__(self, session_factory: sessionmaker[Session]) -> None:
        self.session_factory = session_factory

    @contextmanager
    def session(self) -> Iterator[Session]:
        session = self.session_factory()
        try:
            yield session
        finally:
            session.close()
