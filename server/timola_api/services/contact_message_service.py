"""Contact message service."""

import logging
from typing import List, Optional, Tuple
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from ..core.exceptions import NotFoundError, ValidationError
from ..core.observability import metrics_collector
from ..core.validators import first_missing_field
from ..models.contact_message import ContactMessage, MessageStatus
from ..schemas.common import Pagination
from ..schemas.contact_message import CreateContactMessage
from .pagination import fetch_page

logger = logging.getLogger(__name__)

REQUIRED_FIELDS = ("name", "email", "subject", "message")


class ContactMessageService:
    """Service for contact form messages."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def create(self, request: CreateContactMessage) -> ContactMessage:
        """
        Store a contact form submission as ``unread``.

        Only presence is checked here; unlike trip requests the email format
        is not validated.

        Raises:
            ValidationError: Naming the first missing field
        """
        missing = first_missing_field(request.model_dump(), REQUIRED_FIELDS)
        if missing:
            raise ValidationError(detail=f"Missing required field: {missing}", field=missing)

        message = ContactMessage(
            name=request.name.strip(),
            email=request.email.strip(),
            phone=(request.phone or "").strip() or None,
            subject=request.subject.strip(),
            message=request.message,
            status=MessageStatus.UNREAD.value,
        )

        self.db.add(message)
        await self.db.commit()
        await self.db.refresh(message)

        metrics_collector.record_contact_message_created()
        logger.info("Contact message received", extra={"message_id": str(message.id)})
        return message

    async def list_admin(
        self,
        page: int,
        limit: int,
        status: Optional[MessageStatus] = None,
    ) -> Tuple[List[ContactMessage], Pagination]:
        """List messages newest first, optionally with one status."""
        stmt = select(ContactMessage)
        if status is not None:
            stmt = stmt.where(ContactMessage.status == status.value)

        stmt = stmt.order_by(ContactMessage.created_at.desc(), ContactMessage.id.desc())
        return await fetch_page(self.db, stmt, page, limit)

    async def get_by_id_or_raise(self, message_id: UUID) -> ContactMessage:
        """
        Get message by ID or raise NotFoundError.

        Raises:
            NotFoundError: If message not found
        """
        result = await self.db.execute(select(ContactMessage).where(ContactMessage.id == message_id))
        message = result.scalar_one_or_none()
        if not message:
            logger.warning("Contact message not found", extra={"message_id": str(message_id)})
            raise NotFoundError(resource_type="message", resource_id=str(message_id))
        return message

    async def open(self, message_id: UUID) -> ContactMessage:
        """
        Fetch a message for an admin's detail view.

        An unread message becomes read as a side effect; other statuses are
        left alone.
        """
        message = await self.get_by_id_or_raise(message_id)

        if message.status == MessageStatus.UNREAD.value:
            message.status = MessageStatus.READ.value
            await self.db.commit()
            await self.db.refresh(message)
            logger.info("Contact message marked read", extra={"message_id": str(message_id)})

        return message

    async def update_status(self, message_id: UUID, status: MessageStatus) -> ContactMessage:
        """Set any status; transitions are unrestricted."""
        message = await self.get_by_id_or_raise(message_id)

        message.status = status.value
        await self.db.commit()
        await self.db.refresh(message)

        logger.info(
            "Contact message status changed",
            extra={"message_id": str(message_id), "status": status.value}
        )
        return message

    async def delete(self, message_id: UUID) -> None:
        """
        Hard-delete a message.

        Raises:
            NotFoundError: If message not found (including a repeated delete)
        """
        message = await self.get_by_id_or_raise(message_id)

        await self.db.delete(message)
        await self.db.commit()

        logger.info("Contact message deleted", extra={"message_id": str(message_id)})
