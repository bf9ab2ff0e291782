"""Health check router."""

import logging
from datetime import datetime, timezone

from fastapi import APIRouter
from fastapi.responses import JSONResponse

from ..core.observability import SERVICE_NAME, SERVICE_VERSION
from ..schemas.health import HealthResponse, HealthStatus

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/health", tags=["health"])


@router.get("/ping", response_model=HealthResponse)
async def health_ping() -> JSONResponse:
    """
    Health check endpoint.

    Returns current service status and timestamp.
    """
    response_data = HealthResponse(
        status=HealthStatus.HEALTHY,
        service=SERVICE_NAME,
        timestamp=datetime.now(timezone.utc),
        version=SERVICE_VERSION,
    )

    logger.debug(
        "Health check requested",
        extra={
            "status": response_data.status.value,
            "timestamp": response_data.timestamp.isoformat()
        }
    )

    return JSONResponse(
        status_code=200,
        content=response_data.model_dump(mode="json")
    )
