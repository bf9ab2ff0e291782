"""Common Pydantic schemas."""

import math
from typing import List, Optional
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class ApiModel(BaseModel):
    """Base model: snake_case attributes, camelCase on the wire."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )

    def to_json(self) -> dict:
        """Dump with wire names, ready for a JSONResponse."""
        return self.model_dump(mode="json", by_alias=True)


class Violation(BaseModel):
    """Validation error violation."""

    path: str = Field(..., description="Path to the invalid field")
    message: str = Field(..., description="Validation error message")


class Problem(BaseModel):
    """RFC 9457 Problem Details response, plus the ``error`` message."""

    error: str = Field(..., description="Human-readable error message")
    type: Optional[str] = Field(None, description="Problem type URI")
    title: str = Field(..., description="Short human-readable summary")
    status: int = Field(..., description="HTTP status code")
    detail: Optional[str] = Field(None, description="Human-readable explanation")
    instance: Optional[str] = Field(None, description="URI reference for this occurrence")
    violations: Optional[List[Violation]] = Field(None, description="Validation errors")


class Pagination(ApiModel):
    """Page metadata for admin list endpoints."""

    total: int = Field(..., ge=0, description="Total matching rows")
    pages: int = Field(..., ge=0, description="Number of pages, ceil(total / limit)")
    current_page: int = Field(..., ge=1, description="The page returned")
    limit: int = Field(..., ge=1, description="Page size")

    @classmethod
    def build(cls, total: int, page: int, limit: int) -> "Pagination":
        """Compute the envelope for ``total`` rows split into pages of ``limit``."""
        return cls(total=total, pages=math.ceil(total / limit), current_page=page, limit=limit)


class SuccessResponse(BaseModel):
    """Acknowledgement for deletes."""

    success: bool = True


class SubmissionResponse(BaseModel):
    """Acknowledgement for public form submissions."""

    success: bool = True
    message: str
    id: UUID
