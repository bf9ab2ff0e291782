"""Admin router for contact messages."""

import logging
from typing import Optional

from fastapi import APIRouter, Query
from fastapi.responses import JSONResponse
from sqlalchemy.ext.asyncio import AsyncSession

from ..core.auth import AuthContext
from ..core.config import settings
from ..core.dependencies import AdminGuard, DatabaseSession, GeneralRateLimit, parse_resource_id
from ..core.exceptions import InternalServerError, ProblemDetailsException
from ..models.contact_message import MessageStatus
from ..schemas.common import SuccessResponse
from ..schemas.contact_message import ContactMessage, ContactMessageListResponse, UpdateContactMessage
from ..services.contact_message_service import ContactMessageService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/admin/messages", tags=["admin: messages"])


@router.get("", response_model=ContactMessageListResponse, dependencies=[GeneralRateLimit])
async def list_messages(
    page: int = Query(1, ge=1),
    limit: int = Query(settings.default_page_size, ge=1, le=settings.max_page_size),
    status: Optional[MessageStatus] = Query(None, description="Only messages with this status"),
    admin: AuthContext = AdminGuard,
    db: AsyncSession = DatabaseSession,
) -> JSONResponse:
    """List contact messages newest first."""
    try:
        messages, pagination = await ContactMessageService(db).list_admin(
            page=page, limit=limit, status=status
        )
        response_data = ContactMessageListResponse(
            messages=[ContactMessage.model_validate(m) for m in messages],
            pagination=pagination,
        )
        return JSONResponse(status_code=200, content=response_data.to_json())

    except ProblemDetailsException:
        raise

    except Exception as e:
        logger.error(
            "Unexpected error listing messages",
            extra={"page": page, "limit": limit, "error": str(e)},
            exc_info=True
        )
        raise InternalServerError(detail="Failed to fetch messages") from e


@router.get("/{message_id}", response_model=ContactMessage, dependencies=[GeneralRateLimit])
async def get_message(
    message_id: str,
    admin: AuthContext = AdminGuard,
    db: AsyncSession = DatabaseSession,
) -> JSONResponse:
    """Open a message. An unread message is marked read."""
    try:
        message = await ContactMessageService(db).open(parse_resource_id(message_id, "message"))
        return JSONResponse(status_code=200, content=ContactMessage.model_validate(message).to_json())

    except ProblemDetailsException:
        raise

    except Exception as e:
        logger.error(
            "Unexpected error fetching message",
            extra={"message_id": str(message_id), "error": str(e)},
            exc_info=True
        )
        raise InternalServerError(detail="Failed to fetch message") from e


@router.patch("/{message_id}", response_model=ContactMessage)
async def update_message(
    message_id: str,
    request: UpdateContactMessage,
    admin: AuthContext = AdminGuard,
    db: AsyncSession = DatabaseSession,
) -> JSONResponse:
    """Set the status of a message."""
    try:
        message = await ContactMessageService(db).update_status(
            parse_resource_id(message_id, "message"), request.status
        )
        return JSONResponse(status_code=200, content=ContactMessage.model_validate(message).to_json())

    except ProblemDetailsException:
        raise

    except Exception as e:
        logger.error(
            "Unexpected error updating message",
            extra={"message_id": str(message_id), "error": str(e)},
            exc_info=True
        )
        raise InternalServerError(detail="Failed to update message") from e


@router.delete("/{message_id}", response_model=SuccessResponse)
async def delete_message(
    message_id: str,
    admin: AuthContext = AdminGuard,
    db: AsyncSession = DatabaseSession,
) -> JSONResponse:
    """Delete a message permanently."""
    try:
        await ContactMessageService(db).delete(parse_resource_id(message_id, "message"))

        logger.info(
            "Message deleted by admin",
            extra={"message_id": str(message_id), "admin_id": admin.user_id}
        )

        return JSONResponse(status_code=200, content=SuccessResponse().model_dump())

    except ProblemDetailsException:
        raise

    except Exception as e:
        logger.error(
            "Unexpected error deleting message",
            extra={"message_id": str(message_id), "error": str(e)},
            exc_info=True
        )
        raise InternalServerError(detail="Failed to delete message") from e
