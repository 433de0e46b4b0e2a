"""
Admin dashboard router.
"""

from fastapi import APIRouter

from agency_api.application.dto.base_dto import ApiResponse
from agency_api.application.dto.project_dto import AdminStatsDTO
from agency_api.application.use_cases.admin_use_cases import AdminStatsUseCase
from agency_api.infrastructure.auth import AdminUser
from agency_api.infrastructure.web.dependencies import FeedbackRepo, MessageRepo, ProjectRepo, UserRepo


router = APIRouter()


@router.get("/stats", response_model=ApiResponse[AdminStatsDTO])
async def admin_stats(
    user: AdminUser,
    projects: ProjectRepo,
    users: UserRepo,
    messages: MessageRepo,
    feedback: FeedbackRepo,
):
    """Client count, active and completed projects, unread messages and feedback awaiting review."""
    data = await AdminStatsUseCase(projects, users, messages, feedback).execute(user)
    return ApiResponse(data=data)
