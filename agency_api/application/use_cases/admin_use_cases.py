"""
Admin dashboard use cases.
"""

from typing import Optional

from agency_api.application.use_cases.base_use_case import AuthorizedUseCase
from agency_api.application.dto.project_dto import AdminStatsDTO
from agency_api.domain.models.base import UserRole
from agency_api.domain.models.feedback import FeedbackStatus
from agency_api.domain.models.user import User
from agency_api.domain.repositories.feedback_repository import FeedbackRepository
from agency_api.domain.repositories.message_repository import MessageRepository
from agency_api.domain.repositories.project_repository import ProjectRepository
from agency_api.domain.repositories.user_repository import UserRepository
from agency_api.domain.services.project_stats_service import ProjectStatsService


class AdminStatsUseCase(AuthorizedUseCase):
    """Clients, projects and items waiting on an admin, across the whole agency."""

    def __init__(
        self,
        project_repository: ProjectRepository,
        user_repository: UserRepository,
        message_repository: MessageRepository,
        feedback_repository: FeedbackRepository,
        stats_service: Optional[ProjectStatsService] = None,
    ):
        super().__init__()
        self.project_repository = project_repository
        self.user_repository = user_repository
        self.message_repository = message_repository
        self.feedback_repository = feedback_repository
        self.stats_service = stats_service or ProjectStatsService()

    async def execute(self, user: User) -> AdminStatsDTO:
        self._require_admin(user)

        stats = self.stats_service.admin_overview(
            self.project_repository.list(),
            total_clients=len(self.user_repository.list_by_role(UserRole.CLIENT, active_only=False)),
            pending_messages=self.message_repository.count_unread(),
            pending_feedback=len(self.feedback_repository.list(status=FeedbackStatus.PENDING)),
        )
        return AdminStatsDTO(**stats)
