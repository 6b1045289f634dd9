"""Database module initialization."""

from .models import Advocate, Base
from .session import SessionLocal, build_engine, engine
from .utils import seed_default_data, seed_with_new_session

__all__ = [
    "Advocate",
    "Base",
    "SessionLocal",
    "build_engine",
    "engine",
    "seed_default_data",
    "seed_with_new_session",
]
