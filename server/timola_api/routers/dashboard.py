"""Admin dashboard statistics router."""

import logging

from fastapi import APIRouter
from fastapi.responses import JSONResponse
from sqlalchemy.ext.asyncio import AsyncSession

from ..core.auth import AuthContext
from ..core.dependencies import AdminGuard, DatabaseSession, GeneralRateLimit
from ..core.exceptions import InternalServerError, ProblemDetailsException
from ..schemas.dashboard import DashboardStats
from ..services.dashboard_service import DashboardService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/admin", tags=["admin: dashboard"])


@router.get("/stats", response_model=DashboardStats, dependencies=[GeneralRateLimit])
async def get_stats(
    admin: AuthContext = AdminGuard,
    db: AsyncSession = DatabaseSession,
) -> JSONResponse:
    """Counts of tours, trip requests and messages."""
    try:
        stats = await DashboardService(db).get_stats()
        return JSONResponse(status_code=200, content=stats.to_json())

    except ProblemDetailsException:
        raise

    except Exception as e:
        logger.error(
            "Unexpected error computing dashboard stats",
            extra={"error": str(e)},
            exc_info=True
        )
        raise InternalServerError(detail="Failed to fetch stats") from e
