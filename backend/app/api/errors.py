"""Utilities for translating domain errors to HTTP responses."""

from fastapi import HTTPException, status

from app.domain.exceptions import CacheUnavailable, DomainError, StoreReadError


def to_http(exc: DomainError) -> HTTPException:
    if isinstance(exc, StoreReadError):
        return HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=exc.message
        )
    if isinstance(exc, CacheUnavailable):
        # Backend detail stays in the logs.
        return HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE, detail="Cache unavailable"
        )
    return HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=exc.message)
