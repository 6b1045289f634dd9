"""Shared FastAPI dependency factories."""

from typing import Optional

from fastapi import Query, Request

from app.core import settings
from app.domain.advocates import (
    SQL_INT_MAX,
    SQL_INT_MIN,
    AdvocateFilters,
    PageRequest,
    clean_text,
    parse_int_or_default,
    parse_optional_int,
)
from app.services import AdvocateListingService


def get_listing_service(request: Request) -> AdvocateListingService:
    """Return the listing service built at application startup."""
    return request.app.state.listing_service


def get_advocate_filters(
    city: Optional[str] = Query(None, description="Case-insensitive substring of the city"),
    degree: Optional[str] = Query(None, description="Case-insensitive substring of the degree"),
    min_experience: Optional[str] = Query(
        None, alias="minExperience", description="Minimum years of experience"
    ),
    max_experience: Optional[str] = Query(
        None, alias="maxExperience", description="Maximum years of experience"
    ),
    search: Optional[str] = Query(None, description="Substring of first or last name"),
) -> AdvocateFilters:
    return AdvocateFilters(
        city=clean_text(city),
        degree=clean_text(degree),
        min_experience=parse_optional_int(
            min_experience, "minExperience", lower=SQL_INT_MIN, upper=SQL_INT_MAX
        ),
        max_experience=parse_optional_int(
            max_experience, "maxExperience", lower=SQL_INT_MIN, upper=SQL_INT_MAX
        ),
        search=clean_text(search),
    )


def get_page_request(
    page: Optional[str] = Query(None, description="1-based page index"),
    limit: Optional[str] = Query(None, description="Page size, capped at the configured maximum"),
) -> PageRequest:
    """Parse pagination leniently; malformed values fall back to defaults.

    Clamping to the allowed range happens in the listing service.
    """
    return PageRequest(
        page=parse_int_or_default(page, "page", 1),
        limit=parse_int_or_default(limit, "limit", settings.default_page_size),
    )
