"""Custom exceptions following RFC 9457 Problem Details for HTTP APIs.

Every error body also carries an ``error`` member holding the human-readable
message, which is what the site's forms and dashboard display.
"""

import logging
import uuid
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

from fastapi import HTTPException, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

logger = logging.getLogger(__name__)


def _utc_timestamp() -> str:
    return datetime.now(timezone.utc).strftime("%Y-%m-%dT%H:%M:%S.%fZ")


class ProblemDetailsException(HTTPException):
    """
    Base exception class following RFC 9457 Problem Details for HTTP APIs.

    https://tools.ietf.org/rfc/rfc9457.txt
    """

    def __init__(
        self,
        status_code: int,
        title: str,
        detail: Optional[str] = None,
        type_uri: Optional[str] = None,
        instance: Optional[str] = None,
        extensions: Optional[Dict[str, Any]] = None,
        headers: Optional[Dict[str, str]] = None,
    ):
        """
        Initialize Problem Details exception.

        Args:
            status_code: HTTP status code
            title: Short, human-readable summary of the problem type
            detail: Human-readable explanation specific to this occurrence
            type_uri: URI reference that identifies the problem type
            instance: URI reference that identifies the specific occurrence
            extensions: Additional problem-specific information
            headers: HTTP headers to include in response
        """
        self.status_code = status_code
        self.title = title
        self.detail = detail
        self.type_uri = type_uri or f"about:blank#{status_code}"
        self.instance = instance
        self.extensions = extensions or {}

        # Create the problem details object
        self.problem_details = {
            "error": self.detail or self.title,
            "type": self.type_uri,
            "title": self.title,
            "status": self.status_code,
        }

        if self.detail:
            self.problem_details["detail"] = self.detail

        if self.instance:
            self.problem_details["instance"] = self.instance

        # Add extensions
        self.problem_details.update(self.extensions)

        super().__init__(
            status_code=status_code,
            detail=self.problem_details,
            headers=headers
        )

    @property
    def message(self) -> str:
        """The message surfaced to the caller in the ``error`` member."""
        return self.problem_details["error"]


class ValidationError(ProblemDetailsException):
    """Exception for missing or malformed input."""

    def __init__(
        self,
        detail: str = "The request data failed validation",
        field: Optional[str] = None,
        violations: Optional[List[Dict[str, str]]] = None,
        instance: Optional[str] = None,
    ):
        extensions: Dict[str, Any] = {}
        if field:
            extensions["field"] = field
        if violations:
            extensions["violations"] = violations

        super().__init__(
            status_code=400,
            title="Validation Error",
            detail=detail,
            type_uri="https://timolaadventures.com/problems/validation-error",
            instance=instance,
            extensions=extensions,
        )


class UnauthorizedError(ProblemDetailsException):
    """Exception for callers without an admin session."""

    def __init__(
        self,
        detail: str = "Unauthorized",
        instance: Optional[str] = None,
    ):
        super().__init__(
            status_code=401,
            title="Unauthorized",
            detail=detail,
            type_uri="https://timolaadventures.com/problems/unauthorized",
            instance=instance,
            headers={"WWW-Authenticate": "Bearer"},
        )


class NotFoundError(ProblemDetailsException):
    """Exception for resource not found errors."""

    def __init__(
        self,
        resource_type: str = "resource",
        resource_id: Optional[str] = None,
        detail: Optional[str] = None,
        instance: Optional[str] = None,
    ):
        if not detail:
            detail = f"{resource_type.capitalize()} not found"

        extensions = {
            "resource_type": resource_type,
        }
        if resource_id:
            extensions["resource_id"] = resource_id

        super().__init__(
            status_code=404,
            title="Resource Not Found",
            detail=detail,
            type_uri="https://timolaadventures.com/problems/resource-not-found",
            instance=instance,
            extensions=extensions,
        )


class ConflictError(ProblemDetailsException):
    """Exception for resource conflict errors."""

    def __init__(
        self,
        detail: str = "The request conflicts with the current state of the resource",
        conflicting_resource: Optional[Dict[str, Any]] = None,
        instance: Optional[str] = None,
    ):
        extensions = {}
        if conflicting_resource:
            extensions["conflicting_resource"] = conflicting_resource

        super().__init__(
            status_code=409,
            title="Resource Conflict",
            detail=detail,
            type_uri="https://timolaadventures.com/problems/resource-conflict",
            instance=instance,
            extensions=extensions,
        )


class RateLimitError(ProblemDetailsException):
    """Exception for rate limit errors."""

    def __init__(
        self,
        detail: str = "Too many requests. Please try again later.",
        policy: Optional[str] = None,
        retry_after: Optional[int] = None,
        limit: Optional[int] = None,
        window: Optional[int] = None,
        instance: Optional[str] = None,
    ):
        extensions: Dict[str, Any] = {}
        if policy:
            extensions["policy"] = policy
        if limit:
            extensions["limit"] = limit
        if window:
            extensions["window_seconds"] = window

        headers = {}
        if retry_after:
            headers["Retry-After"] = str(retry_after)
            extensions["retry_after_seconds"] = retry_after

        super().__init__(
            status_code=429,
            title="Rate Limit Exceeded",
            detail=detail,
            type_uri="https://timolaadventures.com/problems/rate-limit-exceeded",
            instance=instance,
            extensions=extensions,
            headers=headers,
        )


class InternalServerError(ProblemDetailsException):
    """Exception for internal server errors."""

    def __init__(
        self,
        detail: str = "An unexpected error occurred while processing the request",
        error_id: Optional[str] = None,
        instance: Optional[str] = None,
    ):
        if not error_id:
            error_id = str(uuid.uuid4())

        extensions = {
            "error_id": error_id,
            "timestamp": _utc_timestamp(),
        }

        super().__init__(
            status_code=500,
            title="Internal Server Error",
            detail=detail,
            type_uri="https://timolaadventures.com/problems/internal-server-error",
            instance=instance,
            extensions=extensions,
        )


async def problem_details_handler(request: Request, exc: ProblemDetailsException) -> JSONResponse:
    """
    Exception handler for Problem Details exceptions.

    Args:
        request: FastAPI request object
        exc: Problem Details exception

    Returns:
        JSONResponse: Problem Details formatted response
    """
    return JSONResponse(
        status_code=exc.status_code,
        content=exc.problem_details,
        headers=exc.headers,
    )


async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """
    Map FastAPI request validation failures onto a 400 ValidationError.

    The first violation becomes the ``error`` message; all of them are listed
    under ``violations``.
    """
    violations = []
    for error in exc.errors():
        location = [str(part) for part in error.get("loc", ()) if part not in ("body", "query", "path")]
        violations.append({
            "path": ".".join(location) or "body",
            "message": error.get("msg", "Invalid value"),
        })

    if violations:
        first = violations[0]
        detail = f"Invalid value for {first['path']}: {first['message']}"
    else:
        detail = "The request data failed validation"

    problem = ValidationError(detail=detail, violations=violations, instance=str(request.url.path))
    return await problem_details_handler(request, problem)


async def generic_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """
    Generic exception handler that converts unhandled exceptions to Problem Details format.

    Args:
        request: FastAPI request object
        exc: Unhandled exception

    Returns:
        JSONResponse: Problem Details formatted response
    """
    problem = InternalServerError(detail="Internal server error", instance=str(request.url.path))

    logger.error(
        "Unhandled exception",
        extra={
            "error_id": problem.extensions["error_id"],
            "path": request.url.path,
            "method": request.method,
            "error": str(exc),
        },
        exc_info=exc,
    )

    return await problem_details_handler(request, problem)
