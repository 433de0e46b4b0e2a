"""
Project management router.
Handles CRUD operations for client projects, notes, dashboard figures
and the public portfolio.
"""

from typing import List, Optional

from fastapi import APIRouter, Query, status

from agency_api.application.dto.base_dto import ApiResponse
from agency_api.application.dto.project_dto import (
    AddProjectNoteRequestDTO,
    CreateProjectRequestDTO,
    PortfolioProjectRequestDTO,
    PortfolioResponseDTO,
    ProjectDashboardDTO,
    ProjectResponseDTO,
    UpdatePortfolioProjectRequestDTO,
    UpdateProjectRequestDTO,
)
from agency_api.application.use_cases.project_use_cases import (
    AddProjectNoteUseCase,
    CreatePortfolioProjectUseCase,
    CreateProjectUseCase,
    DeleteProjectUseCase,
    GetPortfolioUseCase,
    GetProjectUseCase,
    ListProjectsUseCase,
    ProjectDashboardUseCase,
    UpdatePortfolioProjectUseCase,
    UpdateProjectUseCase,
)
from agency_api.domain.models.project import ProjectCategory, ProjectStatus
from agency_api.infrastructure.auth import AdminUser, CurrentUser
from agency_api.infrastructure.web.dependencies import ProjectRepo, UserRepo, parse_filter


router = APIRouter()


@router.post("", status_code=status.HTTP_201_CREATED, response_model=ApiResponse[ProjectResponseDTO])
async def create_project(
    request: CreateProjectRequestDTO,
    user: AdminUser,
    projects: ProjectRepo,
    users: UserRepo,
):
    """
    Create a new project for a client.

    - **title**: Project title (required)
    - **description**: Project description (required)
    - **client_id**: Client the project belongs to (required)
    - **category**: Service category (required)
    - **deadline**: Delivery deadline (required)
    - **budget**: Agreed budget
    """
    data = await CreateProjectUseCase(projects, users).execute(user, request)
    return ApiResponse(message="Project created successfully", data=data)


@router.get("", response_model=ApiResponse[List[ProjectResponseDTO]])
async def list_projects(
    user: CurrentUser,
    projects: ProjectRepo,
    status_filter: Optional[str] = Query(None, alias="status", description="Filter by project status"),
):
    """List projects. Clients only see their own."""
    data = await ListProjectsUseCase(projects).execute(
        user, parse_filter(ProjectStatus, status_filter, "status")
    )
    return ApiResponse(data=data)


@router.get("/public/portfolio", response_model=ApiResponse[PortfolioResponseDTO])
async def public_portfolio(
    projects: ProjectRepo,
    category: Optional[str] = Query(None, description="Project category, or All"),
    featured: bool = Query(False, description="Only featured projects"),
    limit: int = Query(50, ge=1, le=100),
):
    """Completed projects for the public site, featured first. No authentication."""
    category_filter = parse_filter(ProjectCategory, category.lower() if category else None, "category")
    data = await GetPortfolioUseCase(projects).execute(category_filter, featured, limit)
    return ApiResponse(data=data)


@router.post("/portfolio", status_code=status.HTTP_201_CREATED, response_model=ApiResponse[ProjectResponseDTO])
async def create_portfolio_project(request: PortfolioProjectRequestDTO, user: AdminUser, projects: ProjectRepo):
    data = await CreatePortfolioProjectUseCase(projects).execute(user, request)
    return ApiResponse(message="Portfolio project created successfully", data=data)


@router.put("/portfolio/{project_id}", response_model=ApiResponse[ProjectResponseDTO])
async def update_portfolio_project(
    project_id: str,
    request: UpdatePortfolioProjectRequestDTO,
    user: AdminUser,
    projects: ProjectRepo,
):
    data = await UpdatePortfolioProjectUseCase(projects).execute(user, project_id, request)
    return ApiResponse(message="Portfolio project updated successfully", data=data)


@router.delete("/portfolio/{project_id}", response_model=ApiResponse[None])
async def delete_portfolio_project(project_id: str, user: AdminUser, projects: ProjectRepo):
    await DeleteProjectUseCase(projects).execute(user, project_id)
    return ApiResponse(message="Portfolio project deleted successfully")


@router.get("/stats/dashboard", response_model=ApiResponse[ProjectDashboardDTO])
async def project_dashboard(user: CurrentUser, projects: ProjectRepo):
    """Project overview with status and category breakdowns. Clients only count their own."""
    return ApiResponse(data=await ProjectDashboardUseCase(projects).execute(user))


@router.get("/{project_id}", response_model=ApiResponse[ProjectResponseDTO])
async def get_project(project_id: str, user: CurrentUser, projects: ProjectRepo):
    return ApiResponse(data=await GetProjectUseCase(projects).execute(user, project_id))


@router.put("/{project_id}", response_model=ApiResponse[ProjectResponseDTO])
async def update_project(
    project_id: str,
    request: UpdateProjectRequestDTO,
    user: AdminUser,
    projects: ProjectRepo,
):
    """
    Update a project. Only provided fields are changed.
    Moving to completed stamps the completion date and sets progress to 100.
    """
    data = await UpdateProjectUseCase(projects).execute(user, project_id, request)
    return ApiResponse(message="Project updated successfully", data=data)


@router.delete("/{project_id}", response_model=ApiResponse[None])
async def delete_project(project_id: str, user: AdminUser, projects: ProjectRepo):
    await DeleteProjectUseCase(projects).execute(user, project_id)
    return ApiResponse(message="Project deleted successfully")


@router.post(
    "/{project_id}/notes",
    status_code=status.HTTP_201_CREATED,
    response_model=ApiResponse[ProjectResponseDTO],
)
async def add_project_note(
    project_id: str,
    request: AddProjectNoteRequestDTO,
    user: CurrentUser,
    projects: ProjectRepo,
):
    """
    Add a note to a project.

    - **content**: Note text (required)
    - **is_private**: Private notes are only shown to admins
    """
    data = await AddProjectNoteUseCase(projects).execute(user, project_id, request)
    return ApiResponse(message="Note added successfully", data=data)
