"""Admin router for booking inquiries."""

import logging
from typing import Optional

from fastapi import APIRouter, Query
from fastapi.responses import JSONResponse
from sqlalchemy.ext.asyncio import AsyncSession

from ..core.auth import AuthContext
from ..core.config import settings
from ..core.dependencies import AdminGuard, DatabaseSession, GeneralRateLimit, parse_resource_id
from ..core.exceptions import InternalServerError, ProblemDetailsException
from ..models.trip_request import TripRequestStatus
from ..schemas.trip_request import TripRequest, TripRequestListResponse, UpdateTripRequest
from ..services.trip_request_service import TripRequestService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/admin/trip-requests", tags=["admin: trip requests"])


@router.get("", response_model=TripRequestListResponse, dependencies=[GeneralRateLimit])
async def list_trip_requests(
    page: int = Query(1, ge=1),
    limit: int = Query(settings.default_page_size, ge=1, le=settings.max_page_size),
    status: Optional[TripRequestStatus] = Query(None, description="Only inquiries with this status"),
    admin: AuthContext = AdminGuard,
    db: AsyncSession = DatabaseSession,
) -> JSONResponse:
    """List trip requests newest first."""
    try:
        trip_requests, pagination = await TripRequestService(db).list_admin(
            page=page, limit=limit, status=status
        )
        response_data = TripRequestListResponse(
            trip_requests=[TripRequest.model_validate(tr) for tr in trip_requests],
            pagination=pagination,
        )
        return JSONResponse(status_code=200, content=response_data.to_json())

    except ProblemDetailsException:
        raise

    except Exception as e:
        logger.error(
            "Unexpected error listing trip requests",
            extra={
                "page": page,
                "limit": limit,
                "status": status.value if status else None,
                "error": str(e),
            },
            exc_info=True
        )
        raise InternalServerError(detail="Failed to fetch trip requests") from e


@router.get("/{request_id}", response_model=TripRequest, dependencies=[GeneralRateLimit])
async def get_trip_request(
    request_id: str,
    admin: AuthContext = AdminGuard,
    db: AsyncSession = DatabaseSession,
) -> JSONResponse:
    """Get a single trip request."""
    try:
        trip_request = await TripRequestService(db).get_by_id_or_raise(
            parse_resource_id(request_id, "trip request")
        )
        return JSONResponse(status_code=200, content=TripRequest.model_validate(trip_request).to_json())

    except ProblemDetailsException:
        raise

    except Exception as e:
        logger.error(
            "Unexpected error fetching trip request",
            extra={"trip_request_id": str(request_id), "error": str(e)},
            exc_info=True
        )
        raise InternalServerError(detail="Failed to fetch trip request") from e


@router.patch("/{request_id}", response_model=TripRequest)
async def update_trip_request(
    request_id: str,
    request: UpdateTripRequest,
    admin: AuthContext = AdminGuard,
    db: AsyncSession = DatabaseSession,
) -> JSONResponse:
    """Change the status and/or admin notes of a trip request."""
    try:
        trip_request = await TripRequestService(db).update(
            parse_resource_id(request_id, "trip request"), request
        )

        logger.info(
            "Trip request updated by admin",
            extra={
                "trip_request_id": str(request_id),
                "status": trip_request.status,
                "admin_id": admin.user_id,
            }
        )

        return JSONResponse(status_code=200, content=TripRequest.model_validate(trip_request).to_json())

    except ProblemDetailsException:
        raise

    except Exception as e:
        logger.error(
            "Unexpected error updating trip request",
            extra={"trip_request_id": str(request_id), "error": str(e)},
            exc_info=True
        )
        raise InternalServerError(detail="Failed to update trip request") from e
