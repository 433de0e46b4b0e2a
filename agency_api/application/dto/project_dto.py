"""
Project DTOs for the application layer.
"""

from typing import List, Optional
from datetime import datetime
from pydantic import BaseModel, Field

from agency_api.domain.models.base import Priority
from agency_api.domain.models.project import Project, ProjectCategory, ProjectNote, ProjectStatus
from .base_dto import RequestDTO, ResponseDTO


class CreateProjectRequestDTO(RequestDTO):
    title: str = Field(min_length=1, max_length=100)
    description: str = Field(min_length=1, max_length=2000)
    client_id: str = Field(min_length=1)
    category: ProjectCategory
    deadline: datetime
    budget: Optional[float] = Field(default=None, ge=0)
    priority: Priority = Priority.MEDIUM


class UpdateProjectRequestDTO(RequestDTO):
    """Partial update; omitted fields keep their value."""

    title: Optional[str] = Field(default=None, min_length=1, max_length=100)
    description: Optional[str] = Field(default=None, min_length=1, max_length=2000)
    category: Optional[ProjectCategory] = None
    deadline: Optional[datetime] = None
    status: Optional[ProjectStatus] = None
    priority: Optional[Priority] = None
    progress: Optional[int] = Field(default=None, ge=0, le=100)
    budget: Optional[float] = Field(default=None, ge=0)
    featured: Optional[bool] = None
    technologies: Optional[List[str]] = None
    link: Optional[str] = Field(default=None, max_length=255)
    github: Optional[str] = Field(default=None, max_length=255)


class AddProjectNoteRequestDTO(RequestDTO):
    content: str = Field(min_length=1, max_length=2000)
    is_private: bool = False


class PortfolioProjectRequestDTO(RequestDTO):
    """Completed showcase project published by an admin."""

    title: str = Field(min_length=1, max_length=100)
    description: str = Field(min_length=1, max_length=2000)
    category: ProjectCategory
    technologies: List[str] = Field(default_factory=list)
    link: Optional[str] = Field(default=None, max_length=255)
    github: Optional[str] = Field(default=None, max_length=255)
    featured: bool = False
    users_label: str = Field(default="10+", max_length=20)
    rating: float = Field(default=4.8, ge=1, le=5)
    completion_year: Optional[str] = Field(default=None, pattern=r"^\d{4}$")


class UpdatePortfolioProjectRequestDTO(RequestDTO):
    title: Optional[str] = Field(default=None, min_length=1, max_length=100)
    description: Optional[str] = Field(default=None, min_length=1, max_length=2000)
    category: Optional[ProjectCategory] = None
    technologies: Optional[List[str]] = None
    link: Optional[str] = Field(default=None, max_length=255)
    github: Optional[str] = Field(default=None, max_length=255)
    featured: Optional[bool] = None
    users_label: Optional[str] = Field(default=None, max_length=20)
    rating: Optional[float] = Field(default=None, ge=1, le=5)
    completion_year: Optional[str] = Field(default=None, pattern=r"^\d{4}$")


class ProjectNoteDTO(BaseModel):
    content: str
    author_id: str
    created_at: datetime
    is_private: bool = False

    @classmethod
    def from_domain(cls, note: ProjectNote) -> "ProjectNoteDTO":
        return cls(
            content=note.content,
            author_id=note.author_id,
            created_at=note.created_at,
            is_private=note.is_private,
        )


class ProjectResponseDTO(ResponseDTO):
    title: str
    description: str
    client_id: str
    category: ProjectCategory
    status: ProjectStatus
    priority: Priority
    start_date: Optional[datetime] = None
    deadline: datetime
    completed_date: Optional[datetime] = None
    budget: Optional[float] = None
    progress: int = 0
    notes: List[ProjectNoteDTO] = Field(default_factory=list)
    featured: bool = False
    technologies: List[str] = Field(default_factory=list)
    link: Optional[str] = None
    github: Optional[str] = None

    @classmethod
    def from_domain(cls, project: Project, include_private_notes: bool = True) -> "ProjectResponseDTO":
        return cls(
            id=project.id,
            title=project.title,
            description=project.description,
            client_id=project.client_id,
            category=project.category,
            status=project.status,
            priority=project.priority,
            start_date=project.start_date,
            deadline=project.deadline,
            completed_date=project.completed_date,
            budget=project.budget,
            progress=project.progress,
            notes=[ProjectNoteDTO.from_domain(note) for note in project.visible_notes(include_private_notes)],
            featured=project.featured,
            technologies=project.technologies,
            link=project.link,
            github=project.github,
            created_at=project.created_at,
            updated_at=project.updated_at,
        )


class PortfolioStatsDTO(BaseModel):
    users: str
    rating: float
    completion: str


class PortfolioItemDTO(BaseModel):
    """Public view of a completed project; no client or budget details."""

    id: str
    title: str
    description: str
    category: ProjectCategory
    technologies: List[str] = Field(default_factory=list)
    link: Optional[str] = None
    github: Optional[str] = None
    featured: bool = False
    stats: PortfolioStatsDTO

    @classmethod
    def from_domain(cls, project: Project) -> "PortfolioItemDTO":
        return cls(
            id=project.id,
            title=project.title,
            description=project.description,
            category=project.category,
            technologies=project.technologies,
            link=project.link,
            github=project.github,
            featured=project.featured,
            stats=PortfolioStatsDTO(
                users=project.users_label,
                rating=project.rating,
                completion=project.completion_year,
            ),
        )


class PortfolioResponseDTO(BaseModel):
    projects: List[PortfolioItemDTO]
    total: int


class ProjectOverviewDTO(BaseModel):
    total_projects: int = 0
    completed_projects: int = 0
    in_progress_projects: int = 0
    planning_projects: int = 0
    total_budget: float = 0
    average_progress: float = 0


class StatusCountDTO(BaseModel):
    status: ProjectStatus
    count: int


class CategoryCountDTO(BaseModel):
    category: ProjectCategory
    count: int


class ProjectDashboardDTO(BaseModel):
    overview: ProjectOverviewDTO
    status_breakdown: List[StatusCountDTO]
    category_breakdown: List[CategoryCountDTO]


class AdminStatsDTO(BaseModel):
    """Headline counts for the admin dashboard."""

    total_clients: int = 0
    active_projects: int = 0
    pending_messages: int = 0
    pending_feedback: int = 0
    completed_projects: int = 0
    total_projects: int = 0
    avg_progress: int = 0
