"""
Health check router.
"""

from fastapi import APIRouter, Depends
from typing import Annotated

from agency_api.application.dto.base_dto import ApiResponse, HealthCheckResponseDTO
from agency_api.config import Settings, get_settings
from agency_api.domain.models.base import utcnow


router = APIRouter()


@router.get("/health", response_model=ApiResponse[HealthCheckResponseDTO])
async def health_check(settings: Annotated[Settings, Depends(get_settings)]):
    """Health check endpoint for monitoring."""
    return ApiResponse(
        message="Server is running",
        data=HealthCheckResponseDTO(
            status="healthy",
            timestamp=utcnow(),
            version=settings.api_version,
            environment=settings.environment,
        ),
    )
