"""Database initialization entrypoint."""

from app.core import setup_logging
from app.db.utils import seed_with_new_session


def init_db() -> int:
    """Create the advocates table and load sample rows if it is empty.

    A running API keeps serving cached pages until they expire; call
    ``POST /api/advocates/cache/invalidate`` afterwards to refresh them.
    """
    return seed_with_new_session()


if __name__ == "__main__":
    setup_logging()
    init_db()
