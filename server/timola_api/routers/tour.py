"""Public tour catalog router."""

import logging
from typing import List, Optional

from fastapi import APIRouter, Query
from fastapi.responses import JSONResponse
from sqlalchemy.ext.asyncio import AsyncSession

from ..core.dependencies import DatabaseSession
from ..core.exceptions import InternalServerError, ProblemDetailsException
from ..schemas.tour import PublicTourDetail, Tour
from ..services.markup import render_markup
from ..services.tour_service import TourService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["tours"])


def _convert_tour_to_detail(tour_model) -> PublicTourDetail:
    """Convert tour model to the public detail schema with rendered markup."""
    detail = PublicTourDetail.model_validate(tour_model)
    detail.itinerary_detail_html = render_markup(tour_model.itinerary_detail)
    detail.additional_info_html = render_markup(tour_model.additional_info)
    return detail


@router.get("/tours", response_model=List[Tour])
async def list_tours(
    featured: Optional[bool] = Query(None, description="Only featured (true) or non-featured (false) tours"),
    db: AsyncSession = DatabaseSession,
) -> JSONResponse:
    """List all active tours, newest first."""
    try:
        tours = await TourService(db).list_public(featured=featured)
        return JSONResponse(
            status_code=200,
            content=[Tour.model_validate(tour).to_json() for tour in tours]
        )

    except ProblemDetailsException:
        raise

    except Exception as e:
        logger.error(
            "Unexpected error listing tours",
            extra={"featured": featured, "error": str(e)},
            exc_info=True
        )
        raise InternalServerError(detail="Failed to fetch tours") from e


async def _get_public_tour(slug: str, db: AsyncSession) -> JSONResponse:
    try:
        tour = await TourService(db).get_public_by_slug_or_raise(slug)
        return JSONResponse(status_code=200, content=_convert_tour_to_detail(tour).to_json())

    except ProblemDetailsException:
        raise

    except Exception as e:
        logger.error(
            "Unexpected error fetching tour",
            extra={"slug": slug, "error": str(e)},
            exc_info=True
        )
        raise InternalServerError(detail="Failed to fetch tour") from e


@router.get("/tours/{slug}", response_model=PublicTourDetail)
async def get_tour(slug: str, db: AsyncSession = DatabaseSession) -> JSONResponse:
    """Get an active tour by slug."""
    return await _get_public_tour(slug, db)


@router.get("/circuits/{slug}", response_model=PublicTourDetail, include_in_schema=False)
async def get_circuit(slug: str, db: AsyncSession = DatabaseSession) -> JSONResponse:
    """Older circuit detail path; same payload as /api/tours/{slug}."""
    return await _get_public_tour(slug, db)
