"""
Project repository interface.
"""

from abc import ABC, abstractmethod
from typing import List, Optional

from agency_api.domain.models.project import Project, ProjectCategory, ProjectStatus


class ProjectRepository(ABC):
    """Repository interface for Project aggregate."""

    @abstractmethod
    def save(self, project: Project) -> Project:
        pass

    @abstractmethod
    def get_by_id(self, project_id: str) -> Optional[Project]:
        pass

    @abstractmethod
    def list(
        self,
        client_id: Optional[str] = None,
        status: Optional[ProjectStatus] = None,
    ) -> List[Project]:
        pass

    @abstractmethod
    def list_portfolio(
        self,
        category: Optional[ProjectCategory] = None,
        featured_only: bool = False,
        limit: int = 50,
    ) -> List[Project]:
        """Completed projects, featured first and then newest first."""
        pass

    @abstractmethod
    def get_titles(self, project_ids: List[str]) -> dict:
        """Map project ids to titles."""
        pass

    @abstractmethod
    def delete(self, project_id: str) -> bool:
        pass
