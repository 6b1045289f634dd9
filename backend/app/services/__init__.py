"""Service layer entry points."""

from .advocate_service import (
    ADVOCATES_CACHE_TAG,
    AdvocateListingService,
    listing_cache_key,
)

__all__ = [
    "ADVOCATES_CACHE_TAG",
    "AdvocateListingService",
    "listing_cache_key",
]
