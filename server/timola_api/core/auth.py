"""Session tokens and the admin authorization context."""

import logging
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Optional

import jwt
from jwt import PyJWTError

from .config import settings

logger = logging.getLogger(__name__)

ADMIN_ROLE = "admin"
SESSION_ALGORITHM = "HS256"


@dataclass(frozen=True)
class SessionUser:
    """The user a session belongs to."""

    id: str
    email: Optional[str]
    role: str


@dataclass(frozen=True)
class Session:
    """A decoded, unexpired session."""

    user: SessionUser
    expires_at: Optional[datetime] = None


@dataclass(frozen=True)
class AuthContext:
    """Handed to admin route handlers once the caller passed the admin guard."""

    user_id: str
    email: Optional[str]
    role: str


def issue_session_token(
    user_id: str,
    role: str,
    email: Optional[str] = None,
    ttl: timedelta = timedelta(hours=12),
    secret: Optional[str] = None,
) -> str:
    """Sign a session token for ``user_id`` with the given ``role``."""
    now = datetime.now(timezone.utc)
    payload = {
        "sub": user_id,
        "email": email,
        "role": role,
        "iat": now,
        "exp": now + ttl,
    }
    return jwt.encode(payload, secret or settings.session_secret, algorithm=SESSION_ALGORITHM)


def _extract_bearer(authorization: Optional[str]) -> Optional[str]:
    if not authorization:
        return None
    parts = authorization.split()
    if len(parts) != 2 or parts[0].lower() != "bearer":
        return None
    return parts[1]


def get_session(
    authorization: Optional[str] = None,
    session_cookie: Optional[str] = None,
    secret: Optional[str] = None,
) -> Optional[Session]:
    """
    Resolve the caller's session from request credentials.

    The ``Authorization: Bearer`` header wins over the session cookie. Any
    missing, malformed, badly signed or expired token yields None.

    Args:
        authorization: Raw Authorization header value
        session_cookie: Raw session cookie value
        secret: Signing secret, defaults to ``settings.session_secret``

    Returns:
        Session if the credentials are valid, None otherwise
    """
    token = _extract_bearer(authorization) or session_cookie
    if not token:
        return None

    try:
        payload = jwt.decode(
            token,
            secret or settings.session_secret,
            algorithms=[SESSION_ALGORITHM],
            options={"require": ["sub", "exp"]},
        )
    except PyJWTError as e:
        logger.info("Rejected session token", extra={"error": str(e)})
        return None

    user_id = payload.get("sub")
    if not user_id:
        return None

    return Session(
        user=SessionUser(
            id=str(user_id),
            email=payload.get("email"),
            role=str(payload.get("role") or ""),
        ),
        expires_at=datetime.fromtimestamp(payload["exp"], tz=timezone.utc),
    )


def is_admin(session: Optional[Session]) -> bool:
    """Return True only for an existing session whose role is admin."""
    return session is not None and session.user.role == ADMIN_ROLE
