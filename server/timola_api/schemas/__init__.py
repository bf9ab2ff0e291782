"""Pydantic schemas for request/response validation."""

from .common import *  # noqa: F403
from .contact_message import *  # noqa: F403
from .dashboard import *  # noqa: F403
from .health import *  # noqa: F403
from .tour import *  # noqa: F403
from .trip_request import *  # noqa: F403
