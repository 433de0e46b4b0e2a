"""
Feedback domain model.
Client testimonials moderated by an admin before going public.
"""

from dataclasses import dataclass
from datetime import datetime
from typing import Optional
from enum import Enum

from agency_api.domain.models.base import (
    BaseEntity,
    BusinessRuleViolation,
    ValidationError,
    utcnow,
)


class ServiceCategory(str, Enum):
    WEB_DEVELOPMENT = "web-development"
    MOBILE_DEVELOPMENT = "mobile-development"
    DATABASE_INTEGRATION = "database-integration"
    VIRTUAL_ASSISTANCE = "virtual-assistance"
    EDUCATIONAL_SUPPORT = "educational-support"
    DIGITAL_SOLUTIONS = "digital-solutions"


class FeedbackStatus(str, Enum):
    PENDING = "pending"
    APPROVED = "approved"
    REJECTED = "rejected"


@dataclass(eq=False)
class Feedback(BaseEntity):
    """Client feedback / testimonial."""

    client_id: str
    rating: int
    title: str
    content: str
    service_category: ServiceCategory
    project_id: Optional[str] = None
    status: FeedbackStatus = FeedbackStatus.PENDING
    is_public: bool = False
    approved_by: Optional[str] = None
    approved_at: Optional[datetime] = None
    rejection_reason: Optional[str] = None
    display_name: Optional[str] = None
    company_name: Optional[str] = None

    def __post_init__(self):
        super().__post_init__()
        self.service_category = ServiceCategory(self.service_category)
        self.status = FeedbackStatus(self.status)

    def validate(self) -> None:
        if not 1 <= self.rating <= 5:
            raise ValidationError("Rating must be between 1 and 5", "rating")
        if not self.title or len(self.title) > 100:
            raise ValidationError("Feedback title is required (max 100 characters)", "title")
        if not self.content or len(self.content) > 1000:
            raise ValidationError("Feedback content is required (max 1000 characters)", "content")

    def approve(self, admin_id: str) -> None:
        if self.status == FeedbackStatus.APPROVED:
            raise BusinessRuleViolation("Feedback is already approved")
        self.status = FeedbackStatus.APPROVED
        self.is_public = True
        self.approved_by = admin_id
        self.approved_at = utcnow()
        self.rejection_reason = None
        self.mark_as_updated()

    def reject(self, reason: str) -> None:
        if not reason or not reason.strip():
            raise ValidationError("Rejection reason is required", "rejection_reason")
        self.status = FeedbackStatus.REJECTED
        self.is_public = False
        self.rejection_reason = reason.strip()
        self.mark_as_updated()
