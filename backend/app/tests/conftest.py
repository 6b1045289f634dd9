"""Test configuration and fixtures."""

import os
import threading
import time

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.orm import sessionmaker

os.environ.setdefault("DATABASE_URL", "sqlite:///:memory:")
os.environ.setdefault("CACHE_BACKEND", "memory")
os.environ["TESTING"] = "true"  # Skip sample data seeding on startup

from app.cache import InMemoryCache  # noqa: E402
from app.db import Advocate, Base, build_engine  # noqa: E402
from app.dependencies import get_listing_service  # noqa: E402
from app.main import app  # noqa: E402 - must set env vars before importing
from app.repositories import AdvocateRepository  # noqa: E402
from app.services import AdvocateListingService  # noqa: E402


class FakeClock:
    """Monotonic clock the tests advance by hand."""

    def __init__(self, start: float = 1000.0) -> None:
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


class CountingStore:
    """Wraps a store, counting reads and optionally failing or stalling them."""

    def __init__(self, inner) -> None:
        self.inner = inner
        self.fetch_calls = 0
        self.count_calls = 0
        self.fail_with: Exception | None = None
        self.delay = 0.0
        self._lock = threading.Lock()

    @property
    def reads(self) -> int:
        return self.fetch_calls + self.count_calls

    def _before_read(self) -> None:
        if self.delay:
            time.sleep(self.delay)
        if self.fail_with is not None:
            raise self.fail_with

    def fetch(self, predicate, *, offset=None, limit=None):
        with self._lock:
            self.fetch_calls += 1
        self._before_read()
        return self.inner.fetch(predicate, offset=offset, limit=limit)

    def count(self, predicate):
        with self._lock:
            self.count_calls += 1
        self._before_read()
        return self.inner.count(predicate)


def advocate_row(index: int, **overrides) -> dict:
    row = {
        "first_name": f"Person{index:03d}",
        "last_name": f"Sample{index:03d}",
        "city": "Springfield",
        "degree": "MD",
        "specialties": ["Bipolar"],
        "years_of_experience": 5,
        "phone_number": 5550000000 + index,
    }
    row.update(overrides)
    return row


@pytest.fixture
def engine(tmp_path):
    """File-backed SQLite so concurrent reads use separate connections."""
    engine = build_engine(f"sqlite:///{tmp_path / 'advocates.db'}")
    Base.metadata.create_all(bind=engine)
    yield engine
    Base.metadata.drop_all(bind=engine)
    engine.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture
def db_session(session_factory):
    """Create a fresh database session for each test."""
    db = session_factory()
    try:
        yield db
    finally:
        db.close()


@pytest.fixture
def make_row():
    return advocate_row


@pytest.fixture
def add_advocates(db_session):
    """Insert advocates; accepts a count or a list of row dicts."""

    def _add(rows) -> list[Advocate]:
        if isinstance(rows, int):
            rows = [advocate_row(i) for i in range(1, rows + 1)]
        advocates = [Advocate(**row) for row in rows]
        db_session.add_all(advocates)
        db_session.commit()
        for advocate in advocates:
            db_session.refresh(advocate)
        return advocates

    return _add


@pytest.fixture
def repository(session_factory):
    return AdvocateRepository(session_factory)


@pytest.fixture
def store(repository):
    return CountingStore(repository)


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def cache(clock):
    return InMemoryCache(clock=clock)


@pytest.fixture
def listing_service(store, cache):
    return AdvocateListingService(store, cache, cache_ttl=300, max_page_size=100, read_timeout=5.0)


@pytest.fixture
def client(listing_service):
    """Create a test client wired to the test listing service."""
    app.dependency_overrides[get_listing_service] = lambda: listing_service
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()
