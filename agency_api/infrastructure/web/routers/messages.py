"""
Messaging router.
"""

from typing import Optional

from fastapi import APIRouter, Query, status

from agency_api.application.dto.base_dto import ApiResponse
from agency_api.application.dto.message_dto import (
    MessageListResponseDTO,
    MessageResponseDTO,
    ReplyMessageRequestDTO,
    SendMessageRequestDTO,
    UpdateMessageStatusRequestDTO,
)
from agency_api.application.use_cases.message_use_cases import (
    DeleteMessageUseCase,
    ListMessagesUseCase,
    ReplyToMessageUseCase,
    SendMessageUseCase,
    UpdateMessageStatusUseCase,
)
from agency_api.domain.models.message import MessageStatus
from agency_api.infrastructure.auth import AdminUser, CurrentUser
from agency_api.infrastructure.web.dependencies import MessageRepo, parse_filter


router = APIRouter()


@router.post("", status_code=status.HTTP_201_CREATED, response_model=ApiResponse[MessageResponseDTO])
async def send_message(request: SendMessageRequestDTO, user: CurrentUser, messages: MessageRepo):
    data = await SendMessageUseCase(messages).execute(user, request)
    return ApiResponse(message="Message sent successfully", data=data)


@router.get("", response_model=ApiResponse[MessageListResponseDTO])
async def list_messages(
    user: CurrentUser,
    messages: MessageRepo,
    page: int = Query(1, ge=1),
    limit: int = Query(20, ge=1, le=100),
    status_filter: Optional[str] = Query(None, alias="status"),
):
    """Admins see the admin inbox; clients see their own conversation."""
    data = await ListMessagesUseCase(messages).execute(
        user, page, limit, parse_filter(MessageStatus, status_filter, "status")
    )
    return ApiResponse(data=data)


@router.put("/{message_id}/status", response_model=ApiResponse[MessageResponseDTO])
async def update_message_status(
    message_id: str,
    request: UpdateMessageStatusRequestDTO,
    user: AdminUser,
    messages: MessageRepo,
):
    data = await UpdateMessageStatusUseCase(messages).execute(user, message_id, request)
    return ApiResponse(message="Message status updated", data=data)


@router.post("/{message_id}/reply", status_code=status.HTTP_201_CREATED, response_model=ApiResponse[MessageResponseDTO])
async def reply_to_message(
    message_id: str,
    request: ReplyMessageRequestDTO,
    user: AdminUser,
    messages: MessageRepo,
):
    data = await ReplyToMessageUseCase(messages).execute(user, message_id, request)
    return ApiResponse(message="Reply sent successfully", data=data)


@router.delete("/{message_id}", response_model=ApiResponse[None])
async def delete_message(message_id: str, user: AdminUser, messages: MessageRepo):
    await DeleteMessageUseCase(messages).execute(user, message_id)
    return ApiResponse(message="Message deleted successfully")
