"""Headline counts for the admin dashboard."""

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from ..models.contact_message import ContactMessage, MessageStatus
from ..models.tour import Tour
from ..models.trip_request import TripRequest, TripRequestStatus
from ..schemas.dashboard import DashboardStats, MessageCounts, TourCounts, TripRequestCounts


class DashboardService:
    """Aggregates over all three entities."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def _count(self, model, *conditions) -> int:
        stmt = select(func.count()).select_from(model)
        if conditions:
            stmt = stmt.where(*conditions)
        return (await self.db.execute(stmt)).scalar_one()

    async def get_stats(self) -> DashboardStats:
        return DashboardStats(
            tours=TourCounts(
                total=await self._count(Tour),
                active=await self._count(Tour, Tour.active.is_(True)),
                featured=await self._count(Tour, Tour.featured.is_(True)),
            ),
            trip_requests=TripRequestCounts(
                total=await self._count(TripRequest),
                new=await self._count(TripRequest, TripRequest.status == TripRequestStatus.NEW.value),
            ),
            messages=MessageCounts(
                total=await self._count(ContactMessage),
                unread=await self._count(ContactMessage, ContactMessage.status == MessageStatus.UNREAD.value),
            ),
        )
