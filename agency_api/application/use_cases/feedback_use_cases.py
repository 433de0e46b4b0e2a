"""
Feedback use cases.
Clients submit testimonials; admins moderate them before they go public.
"""

import logging
from typing import Any, Dict, List, Optional

from agency_api.application.use_cases.base_use_case import AuthorizedUseCase, BaseUseCase
from agency_api.application.dto.feedback_dto import (
    FeedbackResponseDTO,
    RejectFeedbackRequestDTO,
    SubmitFeedbackRequestDTO,
)
from agency_api.domain.models.base import BusinessRuleViolation, EntityNotFoundError
from agency_api.domain.models.feedback import Feedback, FeedbackStatus, ServiceCategory
from agency_api.domain.models.project import ProjectStatus
from agency_api.domain.models.user import User
from agency_api.domain.repositories.feedback_repository import FeedbackRepository
from agency_api.domain.repositories.project_repository import ProjectRepository


logger = logging.getLogger(__name__)


class SubmitFeedbackUseCase(AuthorizedUseCase):
    """
    A client reviews a completed project of theirs, or a service in general.
    One feedback per project.
    """

    def __init__(self, feedback_repository: FeedbackRepository, project_repository: ProjectRepository):
        super().__init__()
        self.feedback_repository = feedback_repository
        self.project_repository = project_repository

    async def execute(self, user: User, request: SubmitFeedbackRequestDTO) -> FeedbackResponseDTO:
        if request.project_id:
            project = self.project_repository.get_by_id(request.project_id)
            if (
                project is None
                or project.client_id != user.id
                or project.status != ProjectStatus.COMPLETED
            ):
                raise EntityNotFoundError(
                    "Project", request.project_id, message="Project not found or not completed yet"
                )

            existing = self.feedback_repository.list(client_id=user.id)
            if any(f.project_id == request.project_id for f in existing):
                raise BusinessRuleViolation("Feedback already submitted for this project")

        feedback = Feedback(
            client_id=user.id,
            project_id=request.project_id,
            rating=request.rating,
            title=request.title,
            content=request.content,
            service_category=ServiceCategory(request.service_category),
            display_name=request.display_name or user.name,
            company_name=request.company_name or user.company,
        )
        feedback.validate()

        saved = self.feedback_repository.save(feedback)
        logger.info(f"Feedback {saved.id} submitted by {user.id}")
        return FeedbackResponseDTO.from_domain(saved)


class ListMyFeedbackUseCase(AuthorizedUseCase):

    def __init__(self, feedback_repository: FeedbackRepository):
        super().__init__()
        self.feedback_repository = feedback_repository

    async def execute(self, user: User) -> List[FeedbackResponseDTO]:
        return [FeedbackResponseDTO.from_domain(f) for f in self.feedback_repository.list(client_id=user.id)]


class ListPublicFeedbackUseCase(BaseUseCase):
    """Approved public testimonials with their average rating."""

    def __init__(self, feedback_repository: FeedbackRepository):
        super().__init__()
        self.feedback_repository = feedback_repository

    async def execute(
        self,
        limit: int = 10,
        category: Optional[ServiceCategory] = None,
        min_rating: Optional[int] = None,
    ) -> Dict[str, Any]:
        feedback = self.feedback_repository.list(status=FeedbackStatus.APPROVED, public_only=True)
        if category is not None:
            feedback = [f for f in feedback if f.service_category == ServiceCategory(category)]
        if min_rating is not None:
            feedback = [f for f in feedback if f.rating >= min_rating]

        average = round(sum(f.rating for f in feedback) / len(feedback), 1) if feedback else 0
        feedback.sort(key=lambda f: f.approved_at or f.created_at, reverse=True)

        items = []
        for entry in feedback[:limit]:
            dto = FeedbackResponseDTO.from_domain(entry)
            # Client ids stay private on the public listing
            items.append(dto.model_dump(exclude={"client_id", "approved_by", "rejection_reason"}))

        return {"feedback": items, "average_rating": average, "total": len(feedback)}


class ListFeedbackUseCase(AuthorizedUseCase):

    def __init__(self, feedback_repository: FeedbackRepository):
        super().__init__()
        self.feedback_repository = feedback_repository

    async def execute(self, user: User, status: Optional[FeedbackStatus] = None) -> List[FeedbackResponseDTO]:
        self._require_admin(user)
        return [FeedbackResponseDTO.from_domain(f) for f in self.feedback_repository.list(status=status)]


class _ModerateFeedbackUseCase(AuthorizedUseCase):

    def __init__(self, feedback_repository: FeedbackRepository):
        super().__init__()
        self.feedback_repository = feedback_repository

    def _get_feedback(self, feedback_id: str) -> Feedback:
        return self._require_found(self.feedback_repository.get_by_id(feedback_id), "Feedback", feedback_id)


class ApproveFeedbackUseCase(_ModerateFeedbackUseCase):

    async def execute(self, user: User, feedback_id: str) -> FeedbackResponseDTO:
        self._require_admin(user)
        feedback = self._get_feedback(feedback_id)
        feedback.approve(user.id)
        logger.info(f"Feedback {feedback_id} approved by {user.id}")
        return FeedbackResponseDTO.from_domain(self.feedback_repository.save(feedback))


class RejectFeedbackUseCase(_ModerateFeedbackUseCase):

    async def execute(self, user: User, feedback_id: str, request: RejectFeedbackRequestDTO) -> FeedbackResponseDTO:
        self._require_admin(user)
        feedback = self._get_feedback(feedback_id)
        feedback.reject(request.reason)
        return FeedbackResponseDTO.from_domain(self.feedback_repository.save(feedback))


class DeleteFeedbackUseCase(_ModerateFeedbackUseCase):

    async def execute(self, user: User, feedback_id: str) -> None:
        self._require_admin(user)
        if not self.feedback_repository.delete(feedback_id):
            raise EntityNotFoundError("Feedback", feedback_id)
