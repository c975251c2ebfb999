"""Common Pydantic schemas."""
from typing import Optional

from pydantic import BaseModel, ConfigDict


class BaseSchema(BaseModel):
    """Base schema with common configuration."""

    model_config = ConfigDict(from_attributes=True)


class ErrorResponse(BaseModel):
    """Error response schema.

    Extra keys (``field``, ``fields`` ...) depend on the error code.
    """

    model_config = ConfigDict(extra="allow")

    error: str
    message: Optional[str] = None


class HealthResponse(BaseModel):
    """Health check response."""

    status: str
    timestamp: str
