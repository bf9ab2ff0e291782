"""Prometheus scrape endpoint."""

from fastapi import APIRouter, Response
from prometheus_client import CONTENT_TYPE_LATEST

from ..core.observability import get_prometheus_metrics

router = APIRouter(tags=["observability"])


@router.get(
    "/metrics",
    summary="Prometheus metrics",
    description="Request and business counters in the Prometheus text format",
    response_class=Response,
)
async def metrics() -> Response:
    """Return the service's metrics registry."""
    return Response(content=get_prometheus_metrics(), media_type=CONTENT_TYPE_LATEST)
