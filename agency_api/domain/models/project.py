"""
Project domain model.
Represents a piece of client work that invoices are raised against.
"""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Dict, List, Optional
from enum import Enum

from agency_api.domain.models.base import (
    BaseEntity,
    Priority,
    ValidationError,
    utcnow,
)


class ProjectStatus(str, Enum):
    """Project status."""
    PLANNING = "planning"
    IN_PROGRESS = "in-progress"
    REVIEW = "review"
    COMPLETED = "completed"
    ON_HOLD = "on-hold"
    CANCELLED = "cancelled"


class ProjectCategory(str, Enum):
    """Service line the project belongs to."""
    WEB_DEVELOPMENT = "web-development"
    MOBILE_APP = "mobile-app"
    DESIGN = "design"
    BRANDING = "branding"
    CONSULTATION = "consultation"
    VIRTUAL_ASSISTANCE = "virtual-assistance"
    EDUCATIONAL_SUPPORT = "educational-support"


@dataclass
class ProjectNote:
    """A note left on a project by its client or an admin."""

    content: str
    author_id: str
    created_at: datetime = field(default_factory=utcnow)
    is_private: bool = False

    def to_dict(self) -> dict:
        return {
            "content": self.content,
            "author_id": self.author_id,
            "created_at": self.created_at.isoformat(),
            "is_private": self.is_private,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ProjectNote":
        created_at = data.get("created_at")
        return cls(
            content=data.get("content") or "",
            author_id=data.get("author_id") or "",
            created_at=datetime.fromisoformat(created_at) if created_at else utcnow(),
            is_private=bool(data.get("is_private", False)),
        )


@dataclass(eq=False)
class Project(BaseEntity):
    """Project aggregate."""

    title: str
    description: str
    client_id: str
    category: ProjectCategory
    deadline: datetime
    status: ProjectStatus = ProjectStatus.PLANNING
    priority: Priority = Priority.MEDIUM
    start_date: Optional[datetime] = None
    completed_date: Optional[datetime] = None
    budget: Optional[float] = None
    progress: int = 0
    notes: List[ProjectNote] = field(default_factory=list)

    # Portfolio showcase
    featured: bool = False
    technologies: List[str] = field(default_factory=list)
    link: Optional[str] = None
    github: Optional[str] = None
    users_label: str = "10+"
    rating: float = 4.8
    completion_year: Optional[str] = None

    def __post_init__(self):
        super().__post_init__()
        self.status = ProjectStatus(self.status)
        self.priority = Priority(self.priority)
        self.category = ProjectCategory(self.category)
        if self.start_date is None:
            self.start_date = self.created_at
        if self.completion_year is None:
            self.completion_year = str(self.created_at.year)

    def validate(self) -> None:
        if not self.title or not self.title.strip():
            raise ValidationError("Project title is required", "title")
        if not self.description or not self.description.strip():
            raise ValidationError("Project description is required", "description")
        if not self.client_id:
            raise ValidationError("Client is required", "client")
        if self.deadline is None:
            raise ValidationError("Project deadline is required", "deadline")
        if self.budget is not None and self.budget < 0:
            raise ValidationError("Budget cannot be negative", "budget")
        if not 0 <= self.progress <= 100:
            raise ValidationError("Progress must be between 0 and 100", "progress")
        if not 1 <= self.rating <= 5:
            raise ValidationError("Rating must be between 1 and 5", "rating")

    def add_note(self, content: str, author_id: str, is_private: bool = False) -> ProjectNote:
        if not content or not content.strip():
            raise ValidationError("Note content is required", "content")
        note = ProjectNote(content=content.strip(), author_id=author_id, is_private=is_private)
        self.notes.append(note)
        self.mark_as_updated()
        return note

    def visible_notes(self, include_private: bool) -> List[ProjectNote]:
        if include_private:
            return list(self.notes)
        return [note for note in self.notes if not note.is_private]

    def change_status(self, status: ProjectStatus) -> None:
        self.status = ProjectStatus(status)
        if self.status == ProjectStatus.COMPLETED:
            self.completed_date = utcnow()
            self.progress = 100
        self.mark_as_updated()
