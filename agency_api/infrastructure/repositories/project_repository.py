"""
Project repository implementation using SQLAlchemy.
"""

from typing import Optional, List, Dict
from sqlalchemy.orm import Session
from sqlalchemy import desc

from agency_api.domain.models.base import EntityNotFoundError, new_id
from agency_api.domain.models.project import Project, ProjectCategory, ProjectStatus
from agency_api.domain.repositories.project_repository import ProjectRepository
from agency_api.infrastructure.db.models import ProjectModel
from agency_api.infrastructure.mappers.project_mapper import ProjectMapper


class SQLAlchemyProjectRepository(ProjectRepository):
    """SQLAlchemy implementation of project repository."""

    def __init__(self, session: Session):
        self.session = session
        self.mapper = ProjectMapper()

    def save(self, project: Project) -> Project:
        """Save a project entity."""
        if project.is_new:
            project.id = new_id()
            self.session.add(self.mapper.domain_to_model(project))
        else:
            model = self.session.query(ProjectModel).filter_by(id=project.id).first()
            if not model:
                raise EntityNotFoundError("Project", project.id)
            self.mapper.update_model(model, project)

        self.session.flush()
        return project

    def get_by_id(self, project_id: str) -> Optional[Project]:
        model = self.session.query(ProjectModel).filter_by(id=project_id).first()
        return self.mapper.model_to_domain(model) if model else None

    def list(
        self,
        client_id: Optional[str] = None,
        status: Optional[ProjectStatus] = None,
    ) -> List[Project]:
        query = self.session.query(ProjectModel)
        if client_id:
            query = query.filter(ProjectModel.client_id == client_id)
        if status:
            query = query.filter(ProjectModel.status == status)

        models = query.order_by(desc(ProjectModel.created_at)).all()
        return [self.mapper.model_to_domain(model) for model in models]

    def list_portfolio(
        self,
        category: Optional[ProjectCategory] = None,
        featured_only: bool = False,
        limit: int = 50,
    ) -> List[Project]:
        query = self.session.query(ProjectModel).filter(ProjectModel.status == ProjectStatus.COMPLETED)
        if category:
            query = query.filter(ProjectModel.category == category)
        if featured_only:
            query = query.filter(ProjectModel.featured.is_(True))

        models = (
            query.order_by(desc(ProjectModel.featured), desc(ProjectModel.created_at))
            .limit(limit)
            .all()
        )
        return [self.mapper.model_to_domain(model) for model in models]

    def get_titles(self, project_ids: List[str]) -> Dict[str, str]:
        if not project_ids:
            return {}
        rows = self.session.query(ProjectModel.id, ProjectModel.title).filter(
            ProjectModel.id.in_(set(project_ids))
        ).all()
        return {row.id: row.title for row in rows}

    def delete(self, project_id: str) -> bool:
        """Delete project by ID."""
        model = self.session.query(ProjectModel).filter_by(id=project_id).first()
        if not model:
            return False

        self.session.delete(model)
        self.session.flush()
        return True
