"""
Shared Pydantic schemas.
"""

from datetime import datetime
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from ..utils.time_utils import to_naive_utc


class ApiModel(BaseModel):
    """Base for request bodies: datetimes are normalized to naive UTC."""

    @field_validator("*", mode="after")
    @classmethod
    def normalize_datetimes(cls, v: Any) -> Any:
        if isinstance(v, datetime):
            return to_naive_utc(v)
        return v


class OrmModel(BaseModel):
    """Base for response models read from ORM objects."""

    model_config = ConfigDict(from_attributes=True)


# Health Check Schema
class HealthCheck(BaseModel):
    """Health check response schema."""

    status: str = "healthy"
    version: str
    timestamp: datetime = Field(default_factory=datetime.now)


# Error Schema
class ErrorResponse(BaseModel):
    """Error response schema."""

    success: bool = False
    error: str
    detail: Optional[str] = None
    status_code: int


class DeleteResponse(BaseModel):
    success: bool = True
    id: str
