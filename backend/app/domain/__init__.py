"""Domain layer primitives (value objects, exceptions)."""

from . import advocates, exceptions
from .advocates import AdvocateFilters, PageRequest

__all__ = ["AdvocateFilters", "PageRequest", "advocates", "exceptions"]
