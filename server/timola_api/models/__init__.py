"""Models module exporting all database models."""

from .contact_message import ContactMessage, MessageStatus
from .tour import Tour
from .trip_request import TripRequest, TripRequestStatus

__all__ = [
    # Catalog
    "Tour",

    # Inquiries
    "TripRequest",
    "TripRequestStatus",
    "ContactMessage",
    "MessageStatus",
]
