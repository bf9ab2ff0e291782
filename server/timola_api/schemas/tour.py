"""Tour-related Pydantic schemas."""

from datetime import datetime
from typing import List, Optional
from uuid import UUID

from pydantic import Field

from .common import ApiModel, Pagination

SLUG_PATTERN = r"^[a-z0-9-]*$"


class PricingTier(ApiModel):
    """Display-only price row; the strings are shown as entered."""

    group_size: str = Field(..., description="e.g. '2 to 3 people'")
    winter_price: str = Field("", description="e.g. '200€ / Person'")
    summer_price: str = Field("", description="e.g. '185€ / Person'")


class ItineraryDay(ApiModel):
    """One day of the detailed itinerary."""

    day: int = Field(..., ge=1)
    title: str
    description: str = ""
    stats: Optional[str] = Field(None, description="e.g. '5-6 hours walk, 1400m ascent'")


class TourFields(ApiModel):
    """Writable tour fields, all optional at the schema level.

    Presence of the required ones is checked by the service so the caller gets
    a message naming the missing field.
    """

    name: Optional[str] = Field(None, max_length=255)
    slug: Optional[str] = Field(None, max_length=255, pattern=SLUG_PATTERN)
    tagline: Optional[str] = Field(None, max_length=255)
    description: Optional[str] = None
    category: Optional[str] = Field(None, max_length=128)
    duration: Optional[int] = Field(None, ge=0, description="Length in days")
    price: Optional[float] = Field(None, ge=0)
    original_price: Optional[float] = Field(None, ge=0, description="Strikethrough 'was' price")
    is_from: Optional[bool] = Field(None, description="Price is a 'starting from' floor")
    images: Optional[List[str]] = None
    highlights: Optional[List[str]] = None
    included: Optional[List[str]] = None
    excluded: Optional[List[str]] = None
    optional: Optional[List[str]] = None
    itinerary_glance: Optional[List[str]] = None
    what_to_bring: Optional[List[str]] = None
    itinerary_detail: Optional[str] = None
    additional_info: Optional[str] = None
    pricing_tiers: Optional[List[PricingTier]] = None
    itinerary: Optional[List[ItineraryDay]] = None
    difficulty: Optional[str] = None
    best_time: Optional[str] = None
    map_url: Optional[str] = Field(None, max_length=2048)
    featured: Optional[bool] = None
    active: Optional[bool] = None


class CreateTourRequest(TourFields):
    """Request schema for creating a tour."""


class UpdateTourRequest(TourFields):
    """Request schema for a partial tour update.

    Only keys present in the body are applied. Unknown keys, including
    ``id``, ``createdAt`` and ``updatedAt``, are dropped during parsing.
    """


class Tour(ApiModel):
    """Tour response schema."""

    id: UUID
    slug: str
    name: str
    tagline: Optional[str] = None
    description: str
    category: Optional[str] = None
    duration: int
    price: float
    original_price: Optional[float] = None
    is_from: bool
    images: List[str]
    highlights: List[str]
    included: List[str]
    excluded: List[str]
    optional: List[str]
    itinerary_glance: List[str]
    what_to_bring: List[str]
    itinerary_detail: str
    additional_info: str
    pricing_tiers: List[PricingTier]
    itinerary: List[ItineraryDay]
    difficulty: Optional[str] = None
    best_time: Optional[str] = None
    map_url: Optional[str] = None
    featured: bool
    active: bool
    created_at: datetime
    updated_at: datetime


class PublicTourDetail(Tour):
    """Tour detail for the public site, with the markup fields rendered."""

    itinerary_detail_html: str = ""
    additional_info_html: str = ""


class TourListResponse(ApiModel):
    """Paginated admin tour list."""

    tours: List[Tour]
    pagination: Pagination
