"""Admin router for tour management."""

import logging
from typing import Optional

from fastapi import APIRouter, Query
from fastapi.responses import JSONResponse
from sqlalchemy.ext.asyncio import AsyncSession

from ..core.auth import AuthContext
from ..core.config import settings
from ..core.dependencies import AdminGuard, DatabaseSession, GeneralRateLimit, parse_resource_id
from ..core.exceptions import InternalServerError, ProblemDetailsException
from ..schemas.common import SuccessResponse
from ..schemas.tour import CreateTourRequest, Tour, TourListResponse, UpdateTourRequest
from ..services.tour_service import TourService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/admin/tours", tags=["admin: tours"])


@router.get("", response_model=TourListResponse, dependencies=[GeneralRateLimit])
async def list_tours(
    page: int = Query(1, ge=1),
    limit: int = Query(settings.default_page_size, ge=1, le=settings.max_page_size),
    search: Optional[str] = Query(None, max_length=255, description="Matches name or category"),
    admin: AuthContext = AdminGuard,
    db: AsyncSession = DatabaseSession,
) -> JSONResponse:
    """List all tours, active or not, newest first."""
    try:
        tours, pagination = await TourService(db).list_admin(page=page, limit=limit, search=search)
        response_data = TourListResponse(
            tours=[Tour.model_validate(tour) for tour in tours],
            pagination=pagination,
        )
        return JSONResponse(status_code=200, content=response_data.to_json())

    except ProblemDetailsException:
        raise

    except Exception as e:
        logger.error(
            "Unexpected error listing tours",
            extra={"page": page, "limit": limit, "search": search, "error": str(e)},
            exc_info=True
        )
        raise InternalServerError(detail="Failed to fetch tours") from e


@router.post("", response_model=Tour, status_code=201)
async def create_tour(
    request: CreateTourRequest,
    admin: AuthContext = AdminGuard,
    db: AsyncSession = DatabaseSession,
) -> JSONResponse:
    """Create a tour. name, slug, description, duration and price are required."""
    try:
        tour = await TourService(db).create(request)

        logger.info(
            "Tour created by admin",
            extra={"tour_id": str(tour.id), "slug": tour.slug, "admin_id": admin.user_id}
        )

        return JSONResponse(status_code=201, content=Tour.model_validate(tour).to_json())

    except ProblemDetailsException:
        raise

    except Exception as e:
        logger.error(
            "Unexpected error in tour creation",
            extra={"slug": request.slug, "tour_name": request.name, "error": str(e)},
            exc_info=True
        )
        raise InternalServerError(detail="Failed to create tour") from e


@router.get("/{tour_id}", response_model=Tour, dependencies=[GeneralRateLimit])
async def get_tour(
    tour_id: str,
    admin: AuthContext = AdminGuard,
    db: AsyncSession = DatabaseSession,
) -> JSONResponse:
    """Get any tour by ID."""
    try:
        tour = await TourService(db).get_by_id_or_raise(parse_resource_id(tour_id, "tour"))
        return JSONResponse(status_code=200, content=Tour.model_validate(tour).to_json())

    except ProblemDetailsException:
        raise

    except Exception as e:
        logger.error(
            "Unexpected error fetching tour",
            extra={"tour_id": str(tour_id), "error": str(e)},
            exc_info=True
        )
        raise InternalServerError(detail="Failed to fetch tour") from e


@router.patch("/{tour_id}", response_model=Tour)
async def update_tour(
    tour_id: str,
    request: UpdateTourRequest,
    admin: AuthContext = AdminGuard,
    db: AsyncSession = DatabaseSession,
) -> JSONResponse:
    """Partially update a tour; fields absent from the body are left untouched."""
    try:
        tour = await TourService(db).update(parse_resource_id(tour_id, "tour"), request)

        logger.info(
            "Tour updated by admin",
            extra={"tour_id": str(tour_id), "admin_id": admin.user_id}
        )

        return JSONResponse(status_code=200, content=Tour.model_validate(tour).to_json())

    except ProblemDetailsException:
        raise

    except Exception as e:
        logger.error(
            "Unexpected error updating tour",
            extra={"tour_id": str(tour_id), "error": str(e)},
            exc_info=True
        )
        raise InternalServerError(detail="Failed to update tour") from e


@router.delete("/{tour_id}", response_model=SuccessResponse)
async def delete_tour(
    tour_id: str,
    admin: AuthContext = AdminGuard,
    db: AsyncSession = DatabaseSession,
) -> JSONResponse:
    """Delete a tour permanently."""
    try:
        await TourService(db).delete(parse_resource_id(tour_id, "tour"))

        logger.info(
            "Tour deleted by admin",
            extra={"tour_id": str(tour_id), "admin_id": admin.user_id}
        )

        return JSONResponse(status_code=200, content=SuccessResponse().model_dump())

    except ProblemDetailsException:
        raise

    except Exception as e:
        logger.error(
            "Unexpected error deleting tour",
            extra={"tour_id": str(tour_id), "error": str(e)},
            exc_info=True
        )
        raise InternalServerError(detail="Failed to delete tour") from e
