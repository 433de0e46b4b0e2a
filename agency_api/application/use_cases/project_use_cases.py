"""
Project use cases for the application layer.
"""

import logging
from datetime import timedelta
from typing import List, Optional

from agency_api.application.use_cases.base_use_case import AuthorizedUseCase
from agency_api.application.dto.project_dto import (
    AddProjectNoteRequestDTO,
    CreateProjectRequestDTO,
    PortfolioItemDTO,
    PortfolioProjectRequestDTO,
    PortfolioResponseDTO,
    ProjectDashboardDTO,
    ProjectResponseDTO,
    UpdatePortfolioProjectRequestDTO,
    UpdateProjectRequestDTO,
)
from agency_api.domain.models.base import EntityNotFoundError, Priority, ValidationError, utcnow
from agency_api.domain.models.project import Project, ProjectCategory, ProjectStatus
from agency_api.domain.models.user import User
from agency_api.domain.repositories.project_repository import ProjectRepository
from agency_api.domain.repositories.user_repository import UserRepository
from agency_api.domain.services.project_stats_service import ProjectStatsService


logger = logging.getLogger(__name__)

PORTFOLIO_DEADLINE = timedelta(days=30)


class _ProjectUseCase(AuthorizedUseCase):

    def __init__(self, project_repository: ProjectRepository):
        super().__init__()
        self.project_repository = project_repository

    def _get_project(self, project_id: str) -> Project:
        return self._require_found(self.project_repository.get_by_id(project_id), "Project", project_id)


class CreateProjectUseCase(_ProjectUseCase):
    """Admin opens a project for an existing client."""

    def __init__(self, project_repository: ProjectRepository, user_repository: UserRepository):
        super().__init__(project_repository)
        self.user_repository = user_repository

    async def execute(self, user: User, request: CreateProjectRequestDTO) -> ProjectResponseDTO:
        self._require_admin(user)

        client = self.user_repository.get_by_id(request.client_id)
        if client is None:
            raise EntityNotFoundError("Client", request.client_id)
        if not client.is_client:
            raise ValidationError("Projects can only be assigned to clients", "client_id")

        project = Project(
            title=request.title,
            description=request.description,
            client_id=client.id,
            category=ProjectCategory(request.category),
            deadline=request.deadline,
            budget=request.budget,
            priority=Priority(request.priority),
        )
        project.validate()

        saved = self.project_repository.save(project)
        logger.info(f"Project {saved.id} created for client {client.id}")
        return ProjectResponseDTO.from_domain(saved)


class UpdateProjectUseCase(_ProjectUseCase):

    async def execute(
        self,
        user: User,
        project_id: str,
        request: UpdateProjectRequestDTO,
    ) -> ProjectResponseDTO:
        self._require_admin(user)
        project = self._get_project(project_id)

        changes = request.model_dump(exclude_unset=True, exclude_none=True)
        status = changes.pop("status", None)
        for field_name, value in changes.items():
            if field_name == "category":
                value = ProjectCategory(value)
            elif field_name == "priority":
                value = Priority(value)
            setattr(project, field_name, value)

        if status is not None:
            project.change_status(ProjectStatus(status))
        else:
            project.mark_as_updated()

        project.validate()
        return ProjectResponseDTO.from_domain(self.project_repository.save(project))


class GetProjectUseCase(_ProjectUseCase):

    async def execute(self, user: User, project_id: str) -> ProjectResponseDTO:
        project = self._get_project(project_id)
        self._require_owner_or_admin(user, project.client_id)
        return ProjectResponseDTO.from_domain(project, include_private_notes=user.is_admin)


class ListProjectsUseCase(_ProjectUseCase):

    async def execute(self, user: User, status: Optional[ProjectStatus] = None) -> List[ProjectResponseDTO]:
        projects = self.project_repository.list(client_id=self._scope_client_id(user), status=status)
        return [
            ProjectResponseDTO.from_domain(project, include_private_notes=user.is_admin)
            for project in projects
        ]


class DeleteProjectUseCase(_ProjectUseCase):

    async def execute(self, user: User, project_id: str) -> None:
        self._require_admin(user)
        if not self.project_repository.delete(project_id):
            raise EntityNotFoundError("Project", project_id)
        logger.info(f"Project {project_id} deleted by {user.id}")


class AddProjectNoteUseCase(_ProjectUseCase):
    """The project's client or an admin appends a note."""

    async def execute(self, user: User, project_id: str, request: AddProjectNoteRequestDTO) -> ProjectResponseDTO:
        project = self._get_project(project_id)
        self._require_owner_or_admin(user, project.client_id)

        project.add_note(request.content, user.id, request.is_private)
        saved = self.project_repository.save(project)
        logger.info(f"Note added to project {project_id} by {user.id}")
        return ProjectResponseDTO.from_domain(saved, include_private_notes=user.is_admin)


class ProjectDashboardUseCase(_ProjectUseCase):
    """Project figures over the projects visible to the user."""

    def __init__(self, project_repository: ProjectRepository, stats_service: Optional[ProjectStatsService] = None):
        super().__init__(project_repository)
        self.stats_service = stats_service or ProjectStatsService()

    async def execute(self, user: User) -> ProjectDashboardDTO:
        projects = self.project_repository.list(client_id=self._scope_client_id(user))
        return ProjectDashboardDTO(**self.stats_service.dashboard(projects))


class GetPortfolioUseCase(_ProjectUseCase):
    """Public showcase of completed work."""

    async def execute(
        self,
        category: Optional[ProjectCategory] = None,
        featured_only: bool = False,
        limit: int = 50,
    ) -> PortfolioResponseDTO:
        projects = self.project_repository.list_portfolio(category, featured_only, limit)
        items = [PortfolioItemDTO.from_domain(project) for project in projects]
        return PortfolioResponseDTO(projects=items, total=len(items))


class CreatePortfolioProjectUseCase(_ProjectUseCase):
    """
    Admin publishes a showcase project.
    It is stored as a completed project owned by the publishing admin.
    """

    async def execute(self, user: User, request: PortfolioProjectRequestDTO) -> ProjectResponseDTO:
        self._require_admin(user)

        project = Project(
            title=request.title,
            description=request.description,
            client_id=user.id,
            category=ProjectCategory(request.category),
            deadline=utcnow() + PORTFOLIO_DEADLINE,
            technologies=request.technologies,
            link=request.link,
            github=request.github,
            featured=request.featured,
            users_label=request.users_label,
            rating=request.rating,
            completion_year=request.completion_year,
        )
        project.change_status(ProjectStatus.COMPLETED)
        project.validate()

        saved = self.project_repository.save(project)
        logger.info(f"Portfolio project {saved.id} published by {user.id}")
        return ProjectResponseDTO.from_domain(saved)


class UpdatePortfolioProjectUseCase(_ProjectUseCase):

    async def execute(
        self,
        user: User,
        project_id: str,
        request: UpdatePortfolioProjectRequestDTO,
    ) -> ProjectResponseDTO:
        self._require_admin(user)
        project = self._get_project(project_id)

        for field_name, value in request.model_dump(exclude_unset=True, exclude_none=True).items():
            if field_name == "category":
                value = ProjectCategory(value)
            setattr(project, field_name, value)
        project.mark_as_updated()

        project.validate()
        return ProjectResponseDTO.from_domain(self.project_repository.save(project))
