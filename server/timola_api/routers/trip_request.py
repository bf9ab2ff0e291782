"""Public booking inquiry router."""

import logging

from fastapi import APIRouter
from fastapi.responses import JSONResponse
from sqlalchemy.ext.asyncio import AsyncSession

from ..core.dependencies import DatabaseSession, StrictRateLimit
from ..core.exceptions import InternalServerError, ProblemDetailsException
from ..schemas.common import SubmissionResponse
from ..schemas.trip_request import CreateTripRequest
from ..services.trip_request_service import TripRequestService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["trip requests"])


@router.post(
    "/trip-requests",
    response_model=SubmissionResponse,
    status_code=201,
    dependencies=[StrictRateLimit],
)
async def create_trip_request(
    request: CreateTripRequest,
    db: AsyncSession = DatabaseSession,
) -> JSONResponse:
    """
    Submit a booking inquiry.

    Requires fullName, email, phone and travelDates; email and phone must be
    well formed. The inquiry starts with status ``new``.
    """
    try:
        trip_request = await TripRequestService(db).create(request)

        response_data = SubmissionResponse(
            message="Trip request submitted successfully",
            id=trip_request.id,
        )
        return JSONResponse(status_code=201, content=response_data.model_dump(mode="json"))

    except ProblemDetailsException:
        raise

    except Exception as e:
        logger.error(
            "Unexpected error in trip request creation",
            extra={
                "circuit_id": str(request.circuit_id) if request.circuit_id else None,
                "error": str(e),
            },
            exc_info=True
        )
        raise InternalServerError(detail="Failed to submit trip request") from e
