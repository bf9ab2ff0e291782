"""Service layer package."""

from .contact_message_service import ContactMessageService
from .dashboard_service import DashboardService
from .tour_service import TourService
from .trip_request_service import TripRequestService

__all__ = [
    "ContactMessageService",
    "DashboardService",
    "TourService",
    "TripRequestService",
]
