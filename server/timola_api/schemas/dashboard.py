"""Dashboard statistics schemas."""

from .common import ApiModel


class TourCounts(ApiModel):
    total: int
    active: int
    featured: int


class TripRequestCounts(ApiModel):
    total: int
    new: int


class MessageCounts(ApiModel):
    total: int
    unread: int


class DashboardStats(ApiModel):
    """Headline numbers for the admin dashboard."""

    tours: TourCounts
    trip_requests: TripRequestCounts
    messages: MessageCounts
