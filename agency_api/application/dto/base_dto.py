"""
Base DTOs for the application layer.
Provides common patterns for request/response data transfer objects.
"""

from typing import Any, Dict, List, Optional, TypeVar, Generic
from datetime import datetime
from pydantic import BaseModel, Field, ConfigDict


class BaseDTO(BaseModel):
    """Base DTO with common configuration."""

    model_config = ConfigDict(
        # Allow population by field name or alias
        populate_by_name=True,
        # Convert enum values to their values
        use_enum_values=True,
        # Validate assignment
        validate_assignment=True,
    )


class RequestDTO(BaseDTO):
    """Base class for request DTOs."""

    model_config = ConfigDict(extra="forbid", str_strip_whitespace=True)


class ResponseDTO(BaseDTO):
    """Base class for response DTOs."""

    id: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


T = TypeVar('T')


class ApiResponse(BaseModel, Generic[T]):
    """Envelope wrapping every API response."""

    success: bool = True
    message: Optional[str] = None
    data: Optional[T] = None
    errors: Optional[List[Dict[str, Any]]] = None


class PaginationDTO(BaseModel):
    """Page position of a listing."""

    current: int = Field(description="Current page number")
    pages: int = Field(description="Total number of pages")
    total: int = Field(description="Total number of items")
    limit: int = Field(description="Items per page")

    @classmethod
    def create(cls, page: int, limit: int, total: int) -> "PaginationDTO":
        pages = (total + limit - 1) // limit  # Ceiling division
        return cls(current=page, pages=pages, total=total, limit=limit)


class CountResponseDTO(BaseModel):
    count: int


class HealthCheckResponseDTO(BaseDTO):
    """Health check response DTO."""

    status: str = Field(description="Service status")
    timestamp: datetime = Field(description="Check timestamp")
    version: Optional[str] = Field(default=None, description="Application version")
    environment: Optional[str] = None
