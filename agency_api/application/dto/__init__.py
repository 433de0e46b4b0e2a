"""
Application layer DTOs.
Data Transfer Objects for API requests and responses.
"""

from .base_dto import (
    BaseDTO,
    RequestDTO,
    ResponseDTO,
    ApiResponse,
    PaginationDTO,
    CountResponseDTO,
    HealthCheckResponseDTO,
)

__all__ = [
    "BaseDTO",
    "RequestDTO",
    "ResponseDTO",
    "ApiResponse",
    "PaginationDTO",
    "CountResponseDTO",
    "HealthCheckResponseDTO",
]
