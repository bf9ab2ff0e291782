"""Tour service for catalog operations."""

import logging
from datetime import datetime
from typing import Any, Dict, List, Optional, Tuple
from uuid import UUID

from sqlalchemy import or_, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from ..core.exceptions import ConflictError, NotFoundError, ValidationError
from ..core.observability import metrics_collector
from ..core.validators import first_missing_field
from ..models.tour import Tour
from ..schemas.common import Pagination
from ..schemas.tour import CreateTourRequest, UpdateTourRequest
from .pagination import fetch_page

logger = logging.getLogger(__name__)

REQUIRED_FIELDS = ("name", "slug", "description", "duration", "price")
LIST_FIELDS = (
    "images",
    "highlights",
    "included",
    "excluded",
    "optional",
    "itinerary_glance",
    "what_to_bring",
)
STRUCTURED_FIELDS = ("pricing_tiers", "itinerary")
TEXT_FIELDS = ("itinerary_detail", "additional_info")
FLAG_FIELDS = ("is_from", "featured", "active")


def _check_discount(price: Optional[float], original_price: Optional[float]) -> None:
    """A 'was' price must be higher than the current price."""
    if price is not None and original_price is not None and original_price <= price:
        raise ValidationError(
            detail="originalPrice must be greater than price",
            field="originalPrice",
        )


def _structured_values(request: CreateTourRequest | UpdateTourRequest, field: str) -> List[Dict[str, Any]]:
    items = getattr(request, field) or []
    return [item.model_dump(by_alias=True) for item in items]


class TourService:
    """Service for tour catalog operations."""

    def __init__(self, db: AsyncSession):
        self.db = db

    @staticmethod
    def _newest_first(stmt):
        # id breaks ties between rows created within the same clock tick
        return stmt.order_by(Tour.created_at.desc(), Tour.id.desc())

    async def list_public(self, featured: Optional[bool] = None) -> List[Tour]:
        """
        List every active tour, newest first.

        Args:
            featured: When set, only tours whose featured flag matches

        Returns:
            All matching tours (the public listing is not paginated)
        """
        stmt = select(Tour).where(Tour.active.is_(True))
        if featured is not None:
            stmt = stmt.where(Tour.featured.is_(featured))

        result = await self.db.execute(self._newest_first(stmt))
        return list(result.scalars().all())

    async def list_admin(
        self,
        page: int,
        limit: int,
        search: Optional[str] = None,
    ) -> Tuple[List[Tour], Pagination]:
        """
        List tours regardless of visibility, one page at a time.

        Args:
            page: 1-based page number
            limit: Page size
            search: Case-insensitive substring matched against name or category

        Returns:
            Tours on the page and the pagination envelope
        """
        stmt = select(Tour)

        search = (search or "").strip()
        if search:
            stmt = stmt.where(
                or_(
                    Tour.name.icontains(search, autoescape=True),
                    Tour.category.icontains(search, autoescape=True),
                )
            )

        return await fetch_page(self.db, self._newest_first(stmt), page, limit)

    async def get_by_id(self, tour_id: UUID) -> Optional[Tour]:
        """Get tour by ID, or None."""
        stmt = select(Tour).where(Tour.id == tour_id)
        result = await self.db.execute(stmt)
        return result.scalar_one_or_none()

    async def get_by_slug(self, slug: str, active_only: bool = True) -> Optional[Tour]:
        """
        Get tour by slug.

        Args:
            slug: Tour slug to search for
            active_only: Hide inactive tours (the public view)

        Returns:
            Tour if found, None otherwise
        """
        stmt = select(Tour).where(Tour.slug == slug)
        if active_only:
            stmt = stmt.where(Tour.active.is_(True))
        result = await self.db.execute(stmt)
        return result.scalar_one_or_none()

    async def get_by_id_or_raise(self, tour_id: UUID) -> Tour:
        """
        Get tour by ID or raise NotFoundError.

        Raises:
            NotFoundError: If tour not found
        """
        tour = await self.get_by_id(tour_id)
        if not tour:
            logger.warning("Tour not found", extra={"tour_id": str(tour_id)})
            raise NotFoundError(resource_type="tour", resource_id=str(tour_id))
        return tour

    async def get_public_by_slug_or_raise(self, slug: str) -> Tour:
        """
        Get an active tour by slug or raise NotFoundError.

        Raises:
            NotFoundError: If no active tour has this slug
        """
        tour = await self.get_by_slug(slug, active_only=True)
        if not tour:
            raise NotFoundError(resource_type="tour", resource_id=slug)
        return tour

    async def _raise_if_slug_taken(self, slug: str, exclude_id: Optional[UUID] = None) -> None:
        existing = await self.get_by_slug(slug, active_only=False)
        if existing and existing.id != exclude_id:
            logger.warning(
                "Tour slug already in use",
                extra={"slug": slug, "existing_tour_id": str(existing.id)}
            )
            raise ConflictError(
                detail=f"Tour with slug '{slug}' already exists",
                conflicting_resource={
                    "id": str(existing.id),
                    "slug": existing.slug,
                    "name": existing.name,
                }
            )

    async def create(self, request: CreateTourRequest) -> Tour:
        """
        Create a new tour.

        Args:
            request: Tour creation request

        Returns:
            Created tour entity

        Raises:
            ValidationError: If a required field is missing or prices are inconsistent
            ConflictError: If a tour with the same slug already exists
        """
        missing = first_missing_field(request.model_dump(), REQUIRED_FIELDS)
        if missing:
            raise ValidationError(detail=f"Missing required field: {missing}", field=missing)

        _check_discount(request.price, request.original_price)
        await self._raise_if_slug_taken(request.slug)

        tour = Tour(
            slug=request.slug,
            name=request.name,
            tagline=request.tagline,
            description=request.description,
            category=request.category,
            duration=request.duration,
            price=request.price,
            original_price=request.original_price,
            is_from=bool(request.is_from),
            difficulty=request.difficulty,
            best_time=request.best_time,
            map_url=request.map_url,
            featured=bool(request.featured),
            active=True if request.active is None else request.active,
        )
        for field in LIST_FIELDS:
            setattr(tour, field, list(getattr(request, field) or []))
        for field in STRUCTURED_FIELDS:
            setattr(tour, field, _structured_values(request, field))
        for field in TEXT_FIELDS:
            setattr(tour, field, getattr(request, field) or "")

        try:
            self.db.add(tour)
            await self.db.commit()
        except IntegrityError as e:
            await self.db.rollback()
            logger.error(
                "Tour creation failed due to integrity constraint",
                extra={"slug": request.slug, "error": str(e)}
            )
            raise ConflictError(detail=f"Tour with slug '{request.slug}' already exists") from e

        await self.db.refresh(tour)
        metrics_collector.record_tour_created()

        logger.info(
            "Tour created successfully",
            extra={"tour_id": str(tour.id), "slug": tour.slug, "tour_name": tour.name}
        )
        return tour

    async def update(self, tour_id: UUID, request: UpdateTourRequest) -> Tour:
        """
        Apply a partial update: only fields present in the request change.

        Raises:
            NotFoundError: If tour not found
            ValidationError: If a required field is cleared or prices are inconsistent
            ConflictError: If the new slug belongs to another tour
        """
        tour = await self.get_by_id_or_raise(tour_id)
        changes: Dict[str, Any] = request.model_dump(exclude_unset=True)

        cleared = first_missing_field(changes, [f for f in REQUIRED_FIELDS if f in changes])
        if cleared:
            raise ValidationError(detail=f"Field cannot be empty: {cleared}", field=cleared)

        for field in FLAG_FIELDS:
            if field in changes and changes[field] is None:
                raise ValidationError(detail=f"Field cannot be null: {field}", field=field)

        for field in LIST_FIELDS:
            if field in changes:
                changes[field] = list(changes[field] or [])
        for field in STRUCTURED_FIELDS:
            if field in changes:
                changes[field] = _structured_values(request, field)
        for field in TEXT_FIELDS:
            if field in changes:
                changes[field] = changes[field] or ""

        _check_discount(
            changes.get("price", tour.price),
            changes.get("original_price", tour.original_price),
        )

        if "slug" in changes and changes["slug"] != tour.slug:
            await self._raise_if_slug_taken(changes["slug"], exclude_id=tour.id)

        for field, value in changes.items():
            setattr(tour, field, value)

        try:
            await self.db.commit()
        except IntegrityError as e:
            await self.db.rollback()
            logger.error(
                "Tour update failed due to integrity constraint",
                extra={"tour_id": str(tour_id), "error": str(e)}
            )
            raise ConflictError(detail="Tour update conflicts with an existing tour") from e

        await self.db.refresh(tour)

        logger.info(
            "Tour updated successfully",
            extra={"tour_id": str(tour.id), "fields": sorted(changes)}
        )
        return tour

    async def delete(self, tour_id: UUID) -> None:
        """
        Hard-delete a tour.

        Raises:
            NotFoundError: If tour not found (including a repeated delete)
        """
        tour = await self.get_by_id_or_raise(tour_id)

        await self.db.delete(tour)
        await self.db.commit()
        metrics_collector.record_tour_deleted()

        logger.info("Tour deleted", extra={"tour_id": str(tour_id), "slug": tour.slug})

    async def list_sitemap_entries(self) -> List[Tuple[str, datetime]]:
        """Return ``(slug, updated_at)`` for every active tour."""
        stmt = (
            select(Tour.slug, Tour.updated_at)
            .where(Tour.active.is_(True))
            .order_by(Tour.slug)
        )
        result = await self.db.execute(stmt)
        return [(row.slug, row.updated_at) for row in result.all()]
