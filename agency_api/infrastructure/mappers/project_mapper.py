"""
Project mapper for converting between domain entities and database models.
"""

from agency_api.domain.models.project import Project, ProjectNote
from agency_api.infrastructure.db.models import ProjectModel


class ProjectMapper:
    """Maps between Project domain entity and ProjectModel database model."""

    def domain_to_model(self, project: Project) -> ProjectModel:
        model = ProjectModel(id=project.id)
        self.update_model(model, project)
        return model

    def update_model(self, model: ProjectModel, project: Project) -> None:
        model.title = project.title
        model.description = project.description
        model.client_id = project.client_id
        model.status = project.status
        model.priority = project.priority
        model.category = project.category
        model.start_date = project.start_date
        model.deadline = project.deadline
        model.completed_date = project.completed_date
        model.budget = project.budget
        model.progress = project.progress
        model.notes = [note.to_dict() for note in project.notes]
        model.featured = project.featured
        model.technologies = list(project.technologies)
        model.link = project.link
        model.github = project.github
        model.users_label = project.users_label
        model.rating = project.rating
        model.completion_year = project.completion_year
        model.created_at = project.created_at
        model.updated_at = project.updated_at

    def model_to_domain(self, model: ProjectModel) -> Project:
        return Project(
            id=model.id,
            title=model.title,
            description=model.description,
            client_id=model.client_id,
            status=model.status,
            priority=model.priority,
            category=model.category,
            start_date=model.start_date,
            deadline=model.deadline,
            completed_date=model.completed_date,
            budget=model.budget,
            progress=model.progress or 0,
            notes=[ProjectNote.from_dict(note) for note in (model.notes or [])],
            featured=bool(model.featured),
            technologies=list(model.technologies or []),
            link=model.link,
            github=model.github,
            users_label=model.users_label or "10+",
            rating=model.rating if model.rating is not None else 4.8,
            completion_year=model.completion_year,
            created_at=model.created_at,
            updated_at=model.updated_at,
        )
