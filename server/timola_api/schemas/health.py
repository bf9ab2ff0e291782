"""Health-related Pydantic schemas."""

from datetime import datetime
from enum import Enum
from typing import Dict

from pydantic import BaseModel, Field


class HealthStatus(str, Enum):
    """Health status enumeration."""
    HEALTHY = "healthy"
    READY = "ready"
    DEGRADED = "degraded"


class HealthResponse(BaseModel):
    """Liveness response schema."""

    status: HealthStatus = Field(..., description="Service status")
    service: str = Field(..., description="Service name")
    timestamp: datetime = Field(..., description="Current server time (ISO 8601)")
    version: str = Field(..., description="API version")


class ReadinessResponse(BaseModel):
    """Readiness response schema with per-dependency results."""

    status: HealthStatus = Field(..., description="READY or DEGRADED")
    service: str = Field(..., description="Service name")
    checks: Dict[str, str] = Field(default_factory=dict, description="Dependency name to 'ok' or error")
