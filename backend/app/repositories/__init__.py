"""Repository layer for persistence access."""

from .advocate_filters import compose_advocate_predicate
from .advocate_repository import AdvocateRepository, AdvocateStore

__all__ = [
    "AdvocateRepository",
    "AdvocateStore",
    "compose_advocate_predicate",
]
