"""Advocate schemas."""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """Serializes field names in camelCase, accepts either spelling on input."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class AdvocateResponse(CamelModel):
    """Advocate profile as returned by the listing endpoint."""

    id: int
    first_name: str
    last_name: str
    city: str
    degree: str
    specialties: list[str] = Field(default_factory=list)
    years_of_experience: int
    phone_number: int
    created_at: Optional[datetime] = None

    model_config = ConfigDict(
        alias_generator=to_camel, populate_by_name=True, from_attributes=True
    )


class AdvocateListResponse(CamelModel):
    """One page of listing results plus pagination metadata."""

    data: list[AdvocateResponse]
    total: int = Field(..., ge=0)
    page: int = Field(..., ge=1)
    limit: int = Field(..., ge=1)
    total_pages: int = Field(..., ge=0)


class CacheInvalidationResponse(BaseModel):
    invalidated: str


class ErrorResponse(BaseModel):
    error: str
