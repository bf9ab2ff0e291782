"""Trip request (booking inquiry) schemas."""

from datetime import datetime
from typing import List, Optional
from uuid import UUID

from pydantic import Field

from ..models.trip_request import TripRequestStatus
from .common import ApiModel, Pagination


class CreateTripRequest(ApiModel):
    """Public booking inquiry form."""

    full_name: Optional[str] = Field(None, max_length=255)
    email: Optional[str] = Field(None, max_length=255)
    phone: Optional[str] = Field(None, max_length=64)
    travel_dates: Optional[str] = Field(
        None,
        max_length=255,
        description="Free text, usually 'YYYY-MM-DD' or 'YYYY-MM-DD to YYYY-MM-DD'"
    )
    circuit_id: Optional[UUID] = Field(None, description="Id of the tour being booked")
    circuit_name: Optional[str] = Field(None, max_length=255)
    guests: Optional[int] = Field(None, ge=1, le=100)
    adults: Optional[int] = Field(None, ge=0, le=100)
    children: Optional[int] = Field(None, ge=0, le=100)
    infants: Optional[int] = Field(None, ge=0, le=100)
    message: Optional[str] = Field(None, max_length=5000)


class UpdateTripRequest(ApiModel):
    """Admin update; unknown status values are rejected during parsing."""

    status: Optional[TripRequestStatus] = None
    admin_notes: Optional[str] = Field(None, max_length=5000)


class TripRequest(ApiModel):
    """Trip request response schema."""

    id: UUID
    circuit_id: Optional[UUID] = None
    circuit_name: Optional[str] = None
    travel_dates: str
    guests: int
    adults: Optional[int] = None
    children: Optional[int] = None
    infants: Optional[int] = None
    message: Optional[str] = None
    full_name: str
    email: str
    phone: str
    status: TripRequestStatus
    admin_notes: Optional[str] = None
    created_at: datetime
    updated_at: datetime


class TripRequestListResponse(ApiModel):
    """Paginated admin trip request list."""

    trip_requests: List[TripRequest]
    pagination: Pagination
