"""
Unit tests for project dashboard figures.
"""

from datetime import datetime

from agency_api.domain.models.project import Project, ProjectCategory, ProjectStatus
from agency_api.domain.services.project_stats_service import ProjectStatsService


def project(status: ProjectStatus, progress: int = 0, budget=None,
            category: ProjectCategory = ProjectCategory.WEB_DEVELOPMENT) -> Project:
    return Project(
        title="Site",
        description="Build",
        client_id="client-1",
        category=category,
        deadline=datetime(2030, 6, 30),
        status=status,
        progress=progress,
        budget=budget,
    )


class TestProjectStatsService:

    def setup_method(self):
        self.service = ProjectStatsService()
        self.projects = [
            project(ProjectStatus.COMPLETED, 100, 1200.5),
            project(ProjectStatus.IN_PROGRESS, 50, None, ProjectCategory.DESIGN),
            project(ProjectStatus.REVIEW, 90, 300),
            project(ProjectStatus.CANCELLED, 5, 100),
        ]

    def test_dashboard_overview(self):
        overview = self.service.dashboard(self.projects)["overview"]

        assert overview == {
            "total_projects": 4,
            "completed_projects": 1,
            "in_progress_projects": 1,
            "planning_projects": 0,
            "total_budget": 1600.5,
            "average_progress": 61.25,
        }

    def test_breakdowns_follow_declaration_order(self):
        stats = self.service.dashboard(reversed(self.projects))

        assert [row["status"] for row in stats["status_breakdown"]] == [
            "in-progress", "review", "completed", "cancelled",
        ]
        assert stats["category_breakdown"] == [
            {"category": "web-development", "count": 3},
            {"category": "design", "count": 1},
        ]

    def test_admin_overview(self):
        stats = self.service.admin_overview(self.projects, total_clients=3, pending_messages=2, pending_feedback=0)

        assert stats == {
            "total_clients": 3,
            "active_projects": 2,
            "pending_messages": 2,
            "pending_feedback": 0,
            "completed_projects": 1,
            "total_projects": 4,
            "avg_progress": 61,
        }

    def test_average_rounds_half_up(self):
        projects = [project(ProjectStatus.PLANNING, 1), project(ProjectStatus.PLANNING, 2)]

        assert self.service.admin_overview(projects, 0, 0, 0)["avg_progress"] == 2
