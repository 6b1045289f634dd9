"""Pydantic schemas for API requests and responses."""

from .advocate import (
    AdvocateListResponse,
    AdvocateResponse,
    CacheInvalidationResponse,
    ErrorResponse,
)

__all__ = [
    "AdvocateListResponse",
    "AdvocateResponse",
    "CacheInvalidationResponse",
    "ErrorResponse",
]
