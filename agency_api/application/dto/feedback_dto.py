"""
Feedback DTOs.
"""

from typing import Optional
from datetime import datetime
from pydantic import Field

from agency_api.domain.models.feedback import Feedback, FeedbackStatus, ServiceCategory
from .base_dto import RequestDTO, ResponseDTO


class SubmitFeedbackRequestDTO(RequestDTO):
    project_id: Optional[str] = None
    rating: int = Field(ge=1, le=5)
    title: str = Field(min_length=3, max_length=100)
    content: str = Field(min_length=5, max_length=1000)
    service_category: ServiceCategory
    display_name: Optional[str] = Field(default=None, max_length=50)
    company_name: Optional[str] = Field(default=None, max_length=100)


class RejectFeedbackRequestDTO(RequestDTO):
    reason: str = Field(min_length=1, max_length=500)


class FeedbackResponseDTO(ResponseDTO):
    client_id: str
    project_id: Optional[str] = None
    rating: int
    title: str
    content: str
    service_category: ServiceCategory
    status: FeedbackStatus
    is_public: bool
    approved_by: Optional[str] = None
    approved_at: Optional[datetime] = None
    rejection_reason: Optional[str] = None
    display_name: Optional[str] = None
    company_name: Optional[str] = None

    @classmethod
    def from_domain(cls, feedback: Feedback) -> "FeedbackResponseDTO":
        return cls(
            id=feedback.id,
            client_id=feedback.client_id,
            project_id=feedback.project_id,
            rating=feedback.rating,
            title=feedback.title,
            content=feedback.content,
            service_category=feedback.service_category,
            status=feedback.status,
            is_public=feedback.is_public,
            approved_by=feedback.approved_by,
            approved_at=feedback.approved_at,
            rejection_reason=feedback.rejection_reason,
            display_name=feedback.display_name,
            company_name=feedback.company_name,
            created_at=feedback.created_at,
            updated_at=feedback.updated_at,
        )
