"""Trip request service for the booking inquiry lifecycle."""

import logging
from typing import List, Optional, Tuple
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from ..core.exceptions import NotFoundError, ValidationError
from ..core.observability import metrics_collector
from ..core.validators import first_missing_field, is_valid_email, is_valid_phone
from ..models.trip_request import TripRequest, TripRequestStatus
from ..schemas.common import Pagination
from ..schemas.trip_request import CreateTripRequest, UpdateTripRequest
from .pagination import fetch_page
from .tour_service import TourService

logger = logging.getLogger(__name__)

REQUIRED_FIELDS = ("full_name", "email", "phone", "travel_dates")

# Wire names used in error messages
FIELD_LABELS = {
    "full_name": "fullName",
    "email": "email",
    "phone": "phone",
    "travel_dates": "travelDates",
}


class TripRequestService:
    """Service for booking inquiries."""

    def __init__(self, db: AsyncSession):
        self.db = db
        self.tour_service = TourService(db)

    async def create(self, request: CreateTripRequest) -> TripRequest:
        """
        Record a booking inquiry from the public form.

        Validation happens before anything is written: required fields in
        order, then the email format, then the phone format.

        Args:
            request: Submitted form

        Returns:
            The stored trip request, with status ``new``

        Raises:
            ValidationError: Naming the first failing field
        """
        missing = first_missing_field(request.model_dump(), REQUIRED_FIELDS)
        if missing:
            label = FIELD_LABELS[missing]
            raise ValidationError(detail=f"Missing required field: {label}", field=label)

        email = request.email.strip()
        phone = request.phone.strip()

        if not is_valid_email(email):
            raise ValidationError(detail="Invalid email format", field="email")

        if not is_valid_phone(phone):
            raise ValidationError(detail="Invalid phone format", field="phone")

        circuit_name = request.circuit_name
        if request.circuit_id is not None:
            tour = await self.tour_service.get_by_id(request.circuit_id)
            if tour is None or not tour.active:
                raise ValidationError(detail="Unknown circuit", field="circuitId")
            # Snapshot of the name the customer saw when booking
            circuit_name = circuit_name or tour.name

        trip_request = TripRequest(
            circuit_id=request.circuit_id,
            circuit_name=circuit_name,
            travel_dates=request.travel_dates.strip(),
            guests=request.guests or 1,
            adults=request.adults,
            children=request.children,
            infants=request.infants,
            message=request.message,
            full_name=request.full_name.strip(),
            email=email,
            phone=phone,
            status=TripRequestStatus.NEW.value,
        )

        self.db.add(trip_request)
        await self.db.commit()
        await self.db.refresh(trip_request)

        metrics_collector.record_trip_request_created()
        logger.info(
            "Trip request created",
            extra={
                "trip_request_id": str(trip_request.id),
                "circuit_id": str(request.circuit_id) if request.circuit_id else None,
                "circuit_name": circuit_name,
                "guests": trip_request.guests,
            }
        )
        return trip_request

    async def list_admin(
        self,
        page: int,
        limit: int,
        status: Optional[TripRequestStatus] = None,
    ) -> Tuple[List[TripRequest], Pagination]:
        """List trip requests newest first, optionally with one status."""
        stmt = select(TripRequest)
        if status is not None:
            stmt = stmt.where(TripRequest.status == status.value)

        stmt = stmt.order_by(TripRequest.created_at.desc(), TripRequest.id.desc())
        return await fetch_page(self.db, stmt, page, limit)

    async def get_by_id(self, request_id: UUID) -> Optional[TripRequest]:
        """Get trip request by ID, or None."""
        result = await self.db.execute(select(TripRequest).where(TripRequest.id == request_id))
        return result.scalar_one_or_none()

    async def get_by_id_or_raise(self, request_id: UUID) -> TripRequest:
        """
        Get trip request by ID or raise NotFoundError.

        Raises:
            NotFoundError: If trip request not found
        """
        trip_request = await self.get_by_id(request_id)
        if not trip_request:
            logger.warning("Trip request not found", extra={"trip_request_id": str(request_id)})
            raise NotFoundError(resource_type="trip request", resource_id=str(request_id))
        return trip_request

    async def update(self, request_id: UUID, request: UpdateTripRequest) -> TripRequest:
        """
        Apply an admin update to status and/or notes.

        Any status can follow any other; last write wins.

        Raises:
            NotFoundError: If trip request not found
            ValidationError: If status is explicitly null
        """
        trip_request = await self.get_by_id_or_raise(request_id)
        changes = request.model_dump(exclude_unset=True)

        if "status" in changes:
            if changes["status"] is None:
                raise ValidationError(detail="Field cannot be null: status", field="status")
            previous_status = trip_request.status
            trip_request.status = changes["status"].value
            metrics_collector.record_trip_request_status(trip_request.status)
            logger.info(
                "Trip request status changed",
                extra={
                    "trip_request_id": str(request_id),
                    "from_status": previous_status,
                    "to_status": trip_request.status,
                }
            )

        if "admin_notes" in changes:
            trip_request.admin_notes = changes["admin_notes"]

        await self.db.commit()
        await self.db.refresh(trip_request)
        return trip_request

    async def update_status(self, request_id: UUID, status: TripRequestStatus) -> TripRequest:
        """Overwrite the status of a trip request."""
        return await self.update(request_id, UpdateTripRequest(status=status))
