"""Contact message schemas."""

from datetime import datetime
from typing import List, Optional
from uuid import UUID

from pydantic import Field

from ..models.contact_message import MessageStatus
from .common import ApiModel, Pagination


class CreateContactMessage(ApiModel):
    """Public contact form."""

    name: Optional[str] = Field(None, max_length=255)
    email: Optional[str] = Field(None, max_length=255)
    phone: Optional[str] = Field(None, max_length=64)
    subject: Optional[str] = Field(None, max_length=255)
    message: Optional[str] = Field(None, max_length=10000)


class UpdateContactMessage(ApiModel):
    """Admin status change."""

    status: MessageStatus


class ContactMessage(ApiModel):
    """Contact message response schema."""

    id: UUID
    name: str
    email: str
    phone: Optional[str] = None
    subject: str
    message: str
    status: MessageStatus
    created_at: datetime
    updated_at: datetime


class ContactMessageListResponse(ApiModel):
    """Paginated admin message list."""

    messages: List[ContactMessage]
    pagination: Pagination
