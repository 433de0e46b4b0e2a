"""
Feedback router.
"""

from typing import Any, Dict, List, Optional

from fastapi import APIRouter, Query, status

from agency_api.application.dto.base_dto import ApiResponse
from agency_api.application.dto.feedback_dto import (
    FeedbackResponseDTO,
    RejectFeedbackRequestDTO,
    SubmitFeedbackRequestDTO,
)
from agency_api.application.use_cases.feedback_use_cases import (
    ApproveFeedbackUseCase,
    DeleteFeedbackUseCase,
    ListFeedbackUseCase,
    ListMyFeedbackUseCase,
    ListPublicFeedbackUseCase,
    RejectFeedbackUseCase,
    SubmitFeedbackUseCase,
)
from agency_api.domain.models.feedback import FeedbackStatus, ServiceCategory
from agency_api.infrastructure.auth import AdminUser, ClientUser
from agency_api.infrastructure.web.dependencies import FeedbackRepo, ProjectRepo, parse_filter


router = APIRouter()


@router.post("", status_code=status.HTTP_201_CREATED, response_model=ApiResponse[FeedbackResponseDTO])
async def submit_feedback(
    request: SubmitFeedbackRequestDTO,
    user: ClientUser,
    feedback: FeedbackRepo,
    projects: ProjectRepo,
):
    data = await SubmitFeedbackUseCase(feedback, projects).execute(user, request)
    return ApiResponse(
        message="Feedback submitted successfully! It will be reviewed before being published.",
        data=data,
    )


@router.get("/my-feedback", response_model=ApiResponse[List[FeedbackResponseDTO]])
async def my_feedback(user: ClientUser, feedback: FeedbackRepo):
    return ApiResponse(data=await ListMyFeedbackUseCase(feedback).execute(user))


@router.get("/public", response_model=ApiResponse[Dict[str, Any]])
async def public_feedback(
    feedback: FeedbackRepo,
    limit: int = Query(10, ge=1, le=100),
    category: Optional[str] = Query(None),
    rating: Optional[int] = Query(None, ge=1, le=5, description="Minimum rating"),
):
    """Approved testimonials, newest approval first."""
    data = await ListPublicFeedbackUseCase(feedback).execute(
        limit, parse_filter(ServiceCategory, category, "category"), rating
    )
    return ApiResponse(data=data)


@router.get("/admin", response_model=ApiResponse[List[FeedbackResponseDTO]])
async def all_feedback(
    user: AdminUser,
    feedback: FeedbackRepo,
    status_filter: Optional[str] = Query(None, alias="status"),
):
    data = await ListFeedbackUseCase(feedback).execute(
        user, parse_filter(FeedbackStatus, status_filter, "status")
    )
    return ApiResponse(data=data)


@router.put("/{feedback_id}/approve", response_model=ApiResponse[FeedbackResponseDTO])
async def approve_feedback(feedback_id: str, user: AdminUser, feedback: FeedbackRepo):
    data = await ApproveFeedbackUseCase(feedback).execute(user, feedback_id)
    return ApiResponse(message="Feedback approved and published", data=data)


@router.put("/{feedback_id}/reject", response_model=ApiResponse[FeedbackResponseDTO])
async def reject_feedback(
    feedback_id: str,
    request: RejectFeedbackRequestDTO,
    user: AdminUser,
    feedback: FeedbackRepo,
):
    data = await RejectFeedbackUseCase(feedback).execute(user, feedback_id, request)
    return ApiResponse(message="Feedback rejected", data=data)


@router.delete("/{feedback_id}", response_model=ApiResponse[None])
async def delete_feedback(feedback_id: str, user: AdminUser, feedback: FeedbackRepo):
    await DeleteFeedbackUseCase(feedback).execute(user, feedback_id)
    return ApiResponse(message="Feedback deleted successfully")
