"""Custom middleware for request tracking, tracing, and logging."""

import logging
import re
import time
import uuid
from typing import Callable, Optional

from fastapi import Request, Response
from fastapi.responses import JSONResponse
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.types import ASGIApp

from .config import settings
from .observability import metrics_collector

logger = logging.getLogger(__name__)


def get_client_ip(request: Request) -> str:
    """Extract client IP address from request."""
    # Check for forwarded headers first
    forwarded_for = request.headers.get("X-Forwarded-For")
    if forwarded_for:
        return forwarded_for.split(",")[0].strip()

    real_ip = request.headers.get("X-Real-IP")
    if real_ip:
        return real_ip

    # Fall back to direct client
    if request.client:
        return request.client.host

    return "unknown"


def get_rate_limit_key(request: Request) -> str:
    """
    Identify the caller for rate limiting.

    Forwarding headers are only believed when the socket peer is one of
    ``settings.trusted_proxies``; otherwise the peer address itself is the key.
    """
    peer = request.client.host if request.client else None
    if peer is not None and peer in settings.trusted_proxies:
        return get_client_ip(request)
    return peer or "unknown"


class RequestIDMiddleware(BaseHTTPMiddleware):
    """
    Middleware that adds a unique request ID to each request.

    The request ID is either extracted from the X-Request-ID header
    or generated if not present. It's added to the response headers
    and can be used for request correlation across services.
    """

    def __init__(self, app: ASGIApp, header_name: str = "X-Request-ID"):
        super().__init__(app)
        self.header_name = header_name

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        """Process request and add request ID."""
        request_id = request.headers.get(self.header_name) or str(uuid.uuid4())
        request.state.request_id = request_id

        response = await call_next(request)
        response.headers[self.header_name] = request_id
        return response


class TraceContextMiddleware(BaseHTTPMiddleware):
    """
    Middleware that handles W3C Trace Context headers.

    https://www.w3.org/TR/trace-context/
    """

    def __init__(self, app: ASGIApp):
        super().__init__(app)
        self.traceparent_pattern = re.compile(
            r"^([0-9a-f]{2})-([0-9a-f]{32})-([0-9a-f]{16})-([0-9a-f]{2})$"
        )

    def _parse_traceparent(self, traceparent: str) -> Optional[dict]:
        """Parse W3C traceparent header."""
        match = self.traceparent_pattern.match(traceparent)
        if not match:
            return None

        version, trace_id, parent_id, flags = match.groups()

        # Only version 00 is defined
        if version != "00":
            return None
        if trace_id == "0" * 32 or parent_id == "0" * 16:
            return None

        return {
            "version": version,
            "trace_id": trace_id,
            "parent_id": parent_id,
            "flags": flags,
        }

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        """Process request and handle trace context."""
        traceparent = request.headers.get("traceparent")
        tracestate = request.headers.get("tracestate")

        trace_context = self._parse_traceparent(traceparent) if traceparent else None

        if trace_context:
            trace_id = trace_context["trace_id"]
            parent_span_id = trace_context["parent_id"]
            flags = trace_context["flags"]
        else:
            trace_id = uuid.uuid4().hex
            parent_span_id = None
            flags = "01"  # sampled

        span_id = uuid.uuid4().hex[:16]

        request.state.trace_context = {
            "trace_id": trace_id,
            "span_id": span_id,
            "parent_span_id": parent_span_id,
            "flags": flags,
            "tracestate": tracestate,
        }

        response = await call_next(request)

        response.headers["traceparent"] = f"00-{trace_id}-{span_id}-{flags}"
        if tracestate:
            response.headers["tracestate"] = tracestate

        return response


class LoggingMiddleware(BaseHTTPMiddleware):
    """
    Middleware that logs HTTP requests and responses.

    Logs request and response information including timing, status codes
    and correlation IDs, and records the Prometheus request metrics.
    """

    def __init__(
        self,
        app: ASGIApp,
        log_request_body: bool = False,
        skip_paths: Optional[list] = None,
    ):
        super().__init__(app)
        self.log_request_body = log_request_body
        self.skip_paths = skip_paths or ["/health", "/metrics", "/favicon.ico"]

    def _should_log(self, path: str) -> bool:
        """Check if request should be logged."""
        return path not in self.skip_paths

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        """Process request and log information."""
        if not self._should_log(request.url.path):
            return await call_next(request)

        start_time = time.time()

        request_id = getattr(request.state, "request_id", "unknown")
        trace_context = getattr(request.state, "trace_context", {})

        log_data = {
            "event": "request_started",
            "request_id": request_id,
            "trace_id": trace_context.get("trace_id", "unknown"),
            "span_id": trace_context.get("span_id", "unknown"),
            "method": request.method,
            "path": request.url.path,
            "client_ip": get_client_ip(request),
            "user_agent": request.headers.get("User-Agent", "unknown"),
        }

        # Trip requests and contact forms carry personal data; never log their bodies
        if self.log_request_body and request.method in ["POST", "PUT", "PATCH"] \
                and request.url.path.startswith("/api/admin/"):
            body = await request.body()
            if body:
                log_data["request_body"] = body.decode("utf-8", errors="replace")[:1000]

        logger.info("HTTP request started", extra=log_data)

        error = None
        try:
            response = await call_next(request)
            status_code = response.status_code
        except Exception as e:
            status_code = 500
            error = str(e)
            logger.error("Unhandled error in request pipeline", extra=log_data, exc_info=True)
            response = JSONResponse(
                status_code=500,
                content={"error": "Internal server error", "request_id": request_id}
            )

        duration = time.time() - start_time

        route = request.scope.get("route")
        endpoint = getattr(route, "path", "unmatched")
        metrics_collector.record_request(request.method, endpoint, status_code, duration)

        log_data.update({
            "event": "request_completed",
            "status_code": status_code,
            "duration_ms": round(duration * 1000, 2),
        })
        if error:
            log_data["error"] = error

        if status_code >= 500:
            logger.error("HTTP request completed with server error", extra=log_data)
        elif status_code >= 400:
            logger.warning("HTTP request completed with client error", extra=log_data)
        else:
            logger.info("HTTP request completed successfully", extra=log_data)

        return response


def setup_middleware(app, enable_logging: bool = True) -> None:
    """
    Setup all middleware on the FastAPI app.

    Args:
        app: FastAPI application instance
        enable_logging: Whether to enable request logging middleware
    """
    # Add middleware in reverse order (last added is first executed)
    if enable_logging:
        app.add_middleware(
            LoggingMiddleware,
            log_request_body=settings.debug,
        )

    app.add_middleware(TraceContextMiddleware)
    app.add_middleware(RequestIDMiddleware)
