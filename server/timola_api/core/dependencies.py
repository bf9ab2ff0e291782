"""FastAPI dependencies for database, sessions, admin access and rate limiting."""

import logging
from typing import AsyncGenerator, Callable, Optional
from uuid import UUID

from fastapi import Depends, Header, Request
from sqlalchemy.ext.asyncio import AsyncSession

from .auth import AuthContext, Session, get_session, is_admin
from .config import settings
from .database import get_async_session
from .exceptions import NotFoundError, RateLimitError, UnauthorizedError
from .middleware import get_rate_limit_key
from .observability import metrics_collector
from .rate_limiter import RateLimiter

logger = logging.getLogger(__name__)


async def get_db() -> AsyncGenerator[AsyncSession, None]:
    """
    Database dependency that provides async database sessions.

    Yields:
        AsyncSession: Database session
    """
    async for session in get_async_session():
        yield session


async def get_current_session(
    request: Request,
    authorization: Optional[str] = Header(None, alias="Authorization"),
) -> Optional[Session]:
    """
    Resolve the caller's session from the Authorization header or session cookie.

    Returns:
        Session or None when the caller is anonymous
    """
    return get_session(
        authorization=authorization,
        session_cookie=request.cookies.get(settings.session_cookie_name),
    )


async def require_admin(
    request: Request,
    session: Optional[Session] = Depends(get_current_session),
) -> AuthContext:
    """
    Admin guard shared by every admin route.

    Fails closed: anything other than a valid session with the admin role is
    rejected before the handler touches the store.

    Raises:
        UnauthorizedError: If there is no session or the role is not admin
    """
    if not is_admin(session):
        logger.warning(
            "Admin access denied",
            extra={
                "path": request.url.path,
                "method": request.method,
                "has_session": session is not None,
            }
        )
        raise UnauthorizedError()

    return AuthContext(
        user_id=session.user.id,
        email=session.user.email,
        role=session.user.role,
    )


def parse_resource_id(raw_id: str, resource_type: str) -> UUID:
    """
    Parse an id taken from the path.

    A value that is not a UUID cannot name any stored row, so it is reported
    the same way as an unknown id.

    Raises:
        NotFoundError: If ``raw_id`` is not a UUID
    """
    try:
        return UUID(raw_id)
    except ValueError:
        raise NotFoundError(resource_type=resource_type, resource_id=raw_id) from None


def get_rate_limiter(request: Request) -> RateLimiter:
    """Return the application's rate limiter."""
    return request.app.state.rate_limiter


def rate_limit(policy: str) -> Callable:
    """
    Build a dependency enforcing the named rate-limit policy.

    Attach it through the route's ``dependencies=[...]`` so it runs before any
    other dependency of the handler.
    """

    async def check_rate_limit(request: Request) -> None:
        limiter = get_rate_limiter(request)
        caller_key = get_rate_limit_key(request)
        allowed, retry_after = limiter.hit(policy, caller_key)
        if not allowed:
            config = limiter.policies[policy]
            metrics_collector.record_rate_limited(policy)
            logger.warning(
                "Rate limit exceeded",
                extra={
                    "policy": policy,
                    "client_ip": caller_key,
                    "path": request.url.path,
                    "retry_after": retry_after,
                }
            )
            raise RateLimitError(
                policy=policy,
                retry_after=retry_after,
                limit=config.limit,
                window=config.window_seconds,
            )

    check_rate_limit.__name__ = f"rate_limit_{policy}"
    return check_rate_limit


DatabaseSession = Depends(get_db)
AdminGuard = Depends(require_admin)
GeneralRateLimit = Depends(rate_limit("general"))
StrictRateLimit = Depends(rate_limit("strict"))
