"""Database utility helpers."""

from __future__ import annotations

from sqlalchemy import func, select

from app.core import settings
from app.core.logging import get_logger
from app.db.models import Advocate, Base
from app.db.seed_data import ADVOCATE_SEED

logger = get_logger(__name__)


def seed_default_data(db_session) -> int:
    """Create tables and load sample advocates into an empty table (idempotent).

    Returns the number of rows inserted so callers can invalidate cached
    listings when the record set changed.
    """
    if settings.environment.lower() == "production":
        logger.info("Skipping default seed in production environment")
        return 0

    bind = db_session.get_bind()
    if bind is not None:
        Base.metadata.create_all(bind=bind)

    existing = db_session.execute(select(func.count()).select_from(Advocate)).scalar_one()
    if existing:
        logger.debug("Advocates table already populated (%d rows); skipping seed", existing)
        return 0

    db_session.add_all(Advocate(**row) for row in ADVOCATE_SEED)
    db_session.commit()
    logger.info("Seeded %d sample advocates", len(ADVOCATE_SEED))
    return len(ADVOCATE_SEED)


def seed_with_new_session() -> int:
    """Seed using a fresh SessionLocal (used by init_db.py)."""
    from app.db.session import SessionLocal

    db = SessionLocal()
    try:
        return seed_default_data(db)
    finally:
        db.close()
