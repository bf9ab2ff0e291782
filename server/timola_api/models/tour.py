"""Tour model definition."""

from datetime import datetime
from uuid import UUID, uuid4

from sqlalchemy import JSON, Boolean, DateTime, Float, Integer, String, Text, Uuid, func
from sqlalchemy.orm import Mapped, mapped_column

from ..core.database import Base, utcnow


class Tour(Base):
    """A sellable multi-day itinerary ("circuit")."""

    __tablename__ = "tours"

    # Primary key
    id: Mapped[UUID] = mapped_column(Uuid, primary_key=True, default=uuid4)

    # Identity and description
    slug: Mapped[str] = mapped_column(String(255), nullable=False, unique=True, index=True)
    name: Mapped[str] = mapped_column(String(255), nullable=False, index=True)
    tagline: Mapped[str | None] = mapped_column(String(255), nullable=True)
    description: Mapped[str] = mapped_column(Text, nullable=False)
    category: Mapped[str | None] = mapped_column(String(128), nullable=True, index=True)
    duration: Mapped[int] = mapped_column(Integer, nullable=False)

    # Commercial fields
    price: Mapped[float] = mapped_column(Float, nullable=False)
    original_price: Mapped[float | None] = mapped_column(Float, nullable=True)
    is_from: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)

    # Ordered content lists; the first image is the hero image
    images: Mapped[list[str]] = mapped_column(JSON, nullable=False, default=list)
    highlights: Mapped[list[str]] = mapped_column(JSON, nullable=False, default=list)
    included: Mapped[list[str]] = mapped_column(JSON, nullable=False, default=list)
    excluded: Mapped[list[str]] = mapped_column(JSON, nullable=False, default=list)
    optional: Mapped[list[str]] = mapped_column(JSON, nullable=False, default=list)
    itinerary_glance: Mapped[list[str]] = mapped_column(JSON, nullable=False, default=list)
    what_to_bring: Mapped[list[str]] = mapped_column(JSON, nullable=False, default=list)

    # Free text in the itinerary markup dialect
    itinerary_detail: Mapped[str] = mapped_column(Text, nullable=False, default="")
    additional_info: Mapped[str] = mapped_column(Text, nullable=False, default="")

    # Structured display data: [{groupSize, winterPrice, summerPrice}] and
    # [{day, title, description, stats}]
    pricing_tiers: Mapped[list[dict]] = mapped_column(JSON, nullable=False, default=list)
    itinerary: Mapped[list[dict]] = mapped_column(JSON, nullable=False, default=list)

    difficulty: Mapped[str | None] = mapped_column(Text, nullable=True)
    best_time: Mapped[str | None] = mapped_column(Text, nullable=True)
    map_url: Mapped[str | None] = mapped_column(String(2048), nullable=True)

    # Flags
    featured: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False, index=True)
    active: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True, index=True)

    # Timestamps
    created_at: Mapped[datetime] = mapped_column(
        DateTime,
        nullable=False,
        default=utcnow,
        server_default=func.now(),
        index=True
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime,
        nullable=False,
        default=utcnow,
        server_default=func.now(),
        onupdate=utcnow
    )

    def __repr__(self) -> str:
        return f"<Tour(id={self.id}, name='{self.name}', slug='{self.slug}', active={self.active})>"
