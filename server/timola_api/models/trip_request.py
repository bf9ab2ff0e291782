"""Trip request (booking inquiry) model definition."""

from datetime import datetime
from enum import Enum
from uuid import UUID, uuid4

from sqlalchemy import CheckConstraint, DateTime, Integer, String, Text, Uuid, func
from sqlalchemy.orm import Mapped, mapped_column

from ..core.database import Base, utcnow


class TripRequestStatus(str, Enum):
    """Trip request status enumeration."""
    NEW = "new"
    CONTACTED = "contacted"
    IN_PROGRESS = "in-progress"
    QUOTED = "quoted"
    CONFIRMED = "confirmed"
    CANCELLED = "cancelled"


class TripRequest(Base):
    """A customer's request to book a tour, or a general trip inquiry."""

    __tablename__ = "trip_requests"

    # Primary key
    id: Mapped[UUID] = mapped_column(Uuid, primary_key=True, default=uuid4)

    # Tour reference: stable id plus the name the customer saw. No foreign
    # key; requests outlive the tour they point at.
    circuit_id: Mapped[UUID | None] = mapped_column(Uuid, nullable=True, index=True)
    circuit_name: Mapped[str | None] = mapped_column(String(255), nullable=True)

    # Trip details
    travel_dates: Mapped[str] = mapped_column(String(255), nullable=False)
    guests: Mapped[int] = mapped_column(Integer, nullable=False, default=1)
    adults: Mapped[int | None] = mapped_column(Integer, nullable=True)
    children: Mapped[int | None] = mapped_column(Integer, nullable=True)
    infants: Mapped[int | None] = mapped_column(Integer, nullable=True)
    message: Mapped[str | None] = mapped_column(Text, nullable=True)

    # Contact details
    full_name: Mapped[str] = mapped_column(String(255), nullable=False)
    email: Mapped[str] = mapped_column(String(255), nullable=False, index=True)
    phone: Mapped[str] = mapped_column(String(64), nullable=False)

    # Back-office state
    status: Mapped[str] = mapped_column(
        String(20),
        nullable=False,
        default=TripRequestStatus.NEW.value,
        index=True
    )
    admin_notes: Mapped[str | None] = mapped_column(Text, nullable=True)

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

    __table_args__ = (
        CheckConstraint("guests > 0", name="ck_trip_request_guests_positive"),
    )

    def __repr__(self) -> str:
        return (
            f"<TripRequest(id={self.id}, full_name='{self.full_name}', "
            f"circuit_name='{self.circuit_name}', status={self.status})>"
        )
