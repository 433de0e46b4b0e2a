"""
Message DTOs.
"""

from typing import List, Optional
from datetime import datetime
from pydantic import BaseModel, Field

from agency_api.domain.models.base import Priority, UserRole
from agency_api.domain.models.message import Message, MessageStatus
from .base_dto import RequestDTO, ResponseDTO, PaginationDTO


class SendMessageRequestDTO(RequestDTO):
    content: str = Field(min_length=1, max_length=5000)
    subject: Optional[str] = Field(default=None, max_length=200)
    project_id: Optional[str] = None
    priority: Priority = Priority.MEDIUM


class UpdateMessageStatusRequestDTO(RequestDTO):
    status: MessageStatus


class ReplyMessageRequestDTO(RequestDTO):
    content: str = Field(min_length=1, max_length=5000)


class MessageResponseDTO(ResponseDTO):
    from_id: str
    to_id: Optional[str] = None
    from_role: UserRole
    to_role: UserRole
    subject: str
    content: str
    project_id: Optional[str] = None
    status: MessageStatus
    priority: Priority
    read_at: Optional[datetime] = None
    reply_to_id: Optional[str] = None

    @classmethod
    def from_domain(cls, message: Message) -> "MessageResponseDTO":
        return cls(
            id=message.id,
            from_id=message.from_id,
            to_id=message.to_id,
            from_role=message.from_role,
            to_role=message.to_role,
            subject=message.subject,
            content=message.content,
            project_id=message.project_id,
            status=message.status,
            priority=message.priority,
            read_at=message.read_at,
            reply_to_id=message.reply_to_id,
            created_at=message.created_at,
            updated_at=message.updated_at,
        )


class MessageListResponseDTO(BaseModel):
    messages: List[MessageResponseDTO]
    pagination: PaginationDTO
    unread_count: int
