"""Advocate API endpoints."""

from __future__ import annotations

from fastapi import APIRouter, Depends

from app.dependencies import get_advocate_filters, get_listing_service, get_page_request
from app.domain.advocates import AdvocateFilters, PageRequest
from app.schemas.advocate import (
    AdvocateListResponse,
    CacheInvalidationResponse,
    ErrorResponse,
)
from app.services import ADVOCATES_CACHE_TAG, AdvocateListingService

router = APIRouter(prefix="/advocates", tags=["advocates"])


@router.get(
    "",
    response_model=AdvocateListResponse,
    responses={500: {"model": ErrorResponse}},
)
async def list_advocates(
    filters: AdvocateFilters = Depends(get_advocate_filters),
    page: PageRequest = Depends(get_page_request),
    service: AdvocateListingService = Depends(get_listing_service),
) -> AdvocateListResponse:
    """List advocates matching all supplied filters, one page at a time.

    Identical requests are served from cache for a few minutes.
    """
    return await service.list_advocates(filters, page)


@router.post(
    "/cache/invalidate",
    response_model=CacheInvalidationResponse,
    responses={503: {"model": ErrorResponse}},
)
async def invalidate_advocate_cache(
    service: AdvocateListingService = Depends(get_listing_service),
) -> CacheInvalidationResponse:
    """Drop every cached listing, e.g. after a bulk load of advocates."""
    await service.invalidate()
    return CacheInvalidationResponse(invalidated=ADVOCATES_CACHE_TAG)
