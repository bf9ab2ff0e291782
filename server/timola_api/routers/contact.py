"""Public contact form router."""

import logging

from fastapi import APIRouter
from fastapi.responses import JSONResponse
from sqlalchemy.ext.asyncio import AsyncSession

from ..core.dependencies import DatabaseSession, GeneralRateLimit
from ..core.exceptions import InternalServerError, ProblemDetailsException
from ..schemas.common import SubmissionResponse
from ..schemas.contact_message import CreateContactMessage
from ..services.contact_message_service import ContactMessageService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["contact"])


@router.post(
    "/contact",
    response_model=SubmissionResponse,
    status_code=201,
    dependencies=[GeneralRateLimit],
)
async def create_contact_message(
    request: CreateContactMessage,
    db: AsyncSession = DatabaseSession,
) -> JSONResponse:
    """Submit a contact message; it is stored as ``unread``."""
    try:
        message = await ContactMessageService(db).create(request)

        response_data = SubmissionResponse(
            message="Message sent successfully",
            id=message.id,
        )
        return JSONResponse(status_code=201, content=response_data.model_dump(mode="json"))

    except ProblemDetailsException:
        raise

    except Exception as e:
        logger.error(
            "Unexpected error in contact message creation",
            extra={"error": str(e)},
            exc_info=True
        )
        raise InternalServerError(detail="Failed to send message") from e
