"""Project statistics for the client and admin dashboards."""

from collections import Counter
from decimal import Decimal, ROUND_HALF_UP
from typing import Iterable, Dict, Any, List

from agency_api.domain.models.project import Project, ProjectStatus


ACTIVE_STATUSES = (ProjectStatus.PLANNING, ProjectStatus.IN_PROGRESS, ProjectStatus.REVIEW)


class ProjectStatsService:
    """
    Domain service for project dashboard figures.
    Works over whichever projects the caller is allowed to see.
    """

    def dashboard(self, projects: Iterable[Project]) -> Dict[str, Any]:
        """Overview totals plus per-status and per-category counts."""
        projects = list(projects)
        statuses = Counter(project.status for project in projects)
        categories = Counter(project.category for project in projects)

        overview = {
            "total_projects": len(projects),
            "completed_projects": statuses[ProjectStatus.COMPLETED],
            "in_progress_projects": statuses[ProjectStatus.IN_PROGRESS],
            "planning_projects": statuses[ProjectStatus.PLANNING],
            "total_budget": self._round(sum(project.budget or 0 for project in projects), "0.01"),
            "average_progress": self._average_progress(projects, "0.01"),
        }

        return {
            "overview": overview,
            "status_breakdown": [
                {"status": status.value, "count": count} for status, count in self._ordered(statuses)
            ],
            "category_breakdown": [
                {"category": category.value, "count": count} for category, count in self._ordered(categories)
            ],
        }

    def admin_overview(
        self,
        projects: Iterable[Project],
        total_clients: int,
        pending_messages: int,
        pending_feedback: int,
    ) -> Dict[str, int]:
        """Headline counts for the admin home page. Progress is rounded to a whole percent."""
        projects = list(projects)
        return {
            "total_clients": total_clients,
            "active_projects": sum(1 for project in projects if project.status in ACTIVE_STATUSES),
            "pending_messages": pending_messages,
            "pending_feedback": pending_feedback,
            "completed_projects": sum(1 for project in projects if project.status == ProjectStatus.COMPLETED),
            "total_projects": len(projects),
            "avg_progress": int(self._average_progress(projects, "1")),
        }

    def _average_progress(self, projects: List[Project], step: str) -> float:
        if not projects:
            return 0
        return self._round(sum(project.progress for project in projects) / len(projects), step)

    @staticmethod
    def _ordered(counts: Counter) -> list:
        # Enum declaration order keeps the breakdowns stable
        return sorted(counts.items(), key=lambda item: list(type(item[0])).index(item[0]))

    @staticmethod
    def _round(value: float, step: str) -> float:
        return float(Decimal(str(value)).quantize(Decimal(step), rounding=ROUND_HALF_UP))
