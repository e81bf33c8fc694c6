"""
Zogakzip Backend — Shared Pydantic Schemas
============================================

What:  Base model and response wrappers used by every resource.

JSON conventions:
    - Field names are camelCase on the wire (snake_case in Python)
    - 64-bit identifiers are serialized as strings so JavaScript clients
      don't lose precision
"""

from typing import Annotated, Generic, List, Optional, TypeVar

from pydantic import BaseModel, ConfigDict, Field, PlainSerializer
from pydantic.alias_generators import to_camel

# Integer in Python, string in JSON
IdStr = Annotated[int, PlainSerializer(lambda v: str(v), return_type=str)]

T = TypeVar("T")


class CamelModel(BaseModel):
    """Accepts and emits camelCase; snake_case names are accepted as well."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


class PageResponse(CamelModel, Generic[T]):
    """
    What:  Paginated response wrapper for every list endpoint.

    Offset pagination: page N of size S covers items (N-1)*S .. N*S-1.
    total_pages = ceil(total_item_count / page_size), 0 for an empty result.
    """
    current_page: int = Field(description="1-based page number that was requested")
    total_pages: int = Field(description="Number of pages at the requested page size")
    total_item_count: int = Field(description="Number of items matching the filters")
    data: List[T] = Field(description="Items on this page")


class MessageResponse(CamelModel):
    message: str


class VisibilityResponse(CamelModel):
    """Returned by the `is-public` endpoints."""
    id: IdStr
    is_public: bool


class ErrorResponse(BaseModel):
    """
    What:  Error response format for all API errors.

    Example:
        {
            "message": "Incorrect password",
            "request_id": "1a2b3c4d"
        }
    """
    message: str = Field(description="Human-readable error description")
    details: Optional[dict] = Field(default=None, description="Offending fields for 400 responses")
    request_id: Optional[str] = Field(default=None, description="Request correlation ID")


class HealthResponse(CamelModel):
    """Returned by GET /health for monitoring and load balancer health checks."""
    status: str = Field(description="Overall service status: healthy, unhealthy")
    version: str = Field(description="Application version")
    database: str = Field(description="Database connectivity: connected, disconnected")
    uptime_seconds: float = Field(description="Seconds since service started")


class ImageUploadResponse(CamelModel):
    image_url: str = Field(description="Relative URL of the stored image")
