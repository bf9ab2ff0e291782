"""FastAPI routers package."""

from .admin_messages import router as admin_messages_router
from .admin_tours import router as admin_tours_router
from .admin_trip_requests import router as admin_trip_requests_router
from .contact import router as contact_router
from .dashboard import router as dashboard_router
from .health import router as health_router
from .metrics import router as metrics_router
from .sitemap import router as sitemap_router
from .tour import router as tour_router
from .trip_request import router as trip_request_router

__all__ = [
    "admin_messages_router",
    "admin_tours_router",
    "admin_trip_requests_router",
    "contact_router",
    "dashboard_router",
    "health_router",
    "metrics_router",
    "sitemap_router",
    "tour_router",
    "trip_request_router",
]
