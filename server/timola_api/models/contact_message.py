"""Contact message model definition."""

from datetime import datetime
from enum import Enum
from uuid import UUID, uuid4

from sqlalchemy import DateTime, String, Text, Uuid, func
from sqlalchemy.orm import Mapped, mapped_column

from ..core.database import Base, utcnow


class MessageStatus(str, Enum):
    """Contact message status enumeration."""
    UNREAD = "unread"
    READ = "read"
    REPLIED = "replied"


class ContactMessage(Base):
    """A general inbound inquiry from the contact form."""

    __tablename__ = "contact_messages"

    id: Mapped[UUID] = mapped_column(Uuid, primary_key=True, default=uuid4)

    name: Mapped[str] = mapped_column(String(255), nullable=False)
    email: Mapped[str] = mapped_column(String(255), nullable=False)
    phone: Mapped[str | None] = mapped_column(String(64), nullable=True)
    subject: Mapped[str] = mapped_column(String(255), nullable=False)
    message: Mapped[str] = mapped_column(Text, nullable=False)

    status: Mapped[str] = mapped_column(
        String(20),
        nullable=False,
        default=MessageStatus.UNREAD.value,
        index=True
    )

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
        return f"<ContactMessage(id={self.id}, subject='{self.subject}', status={self.status})>"
