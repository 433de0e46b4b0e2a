"""
Notification DTOs for the application layer.
"""

from typing import Any, Dict, List, Optional
from datetime import datetime
from pydantic import BaseModel, EmailStr, Field, field_validator

from agency_api.domain.models.base import Priority, UserRole
from agency_api.domain.models.notification import (
    ADMIN_SENDABLE_TYPES,
    Notification,
    NotificationPayload,
    NotificationType,
)
from .base_dto import RequestDTO, ResponseDTO, PaginationDTO


class NotificationContentDTO(RequestDTO):
    """Fields shared by every admin send."""

    title: str = Field(min_length=1, max_length=100)
    message: str = Field(min_length=1, max_length=500)
    type: NotificationType = NotificationType.INFO
    priority: Priority = Priority.MEDIUM
    action_url: Optional[str] = Field(default=None, max_length=500)
    action_text: Optional[str] = Field(default=None, max_length=100)
    expires_at: Optional[datetime] = None
    related_project_id: Optional[str] = None
    related_invoice_id: Optional[str] = None

    @field_validator("type")
    @classmethod
    def validate_type(cls, value):
        if NotificationType(value) not in ADMIN_SENDABLE_TYPES:
            raise ValueError("Invalid notification type")
        return value

    def to_payload(self, sender_id: Optional[str]) -> NotificationPayload:
        return NotificationPayload(
            title=self.title,
            message=self.message,
            type=NotificationType(self.type),
            priority=Priority(self.priority),
            sender_id=sender_id,
            action_url=self.action_url,
            action_text=self.action_text,
            expires_at=self.expires_at,
            related_project_id=self.related_project_id,
            related_invoice_id=self.related_invoice_id,
        )


class SendNotificationRequestDTO(NotificationContentDTO):
    recipients: List[str] = Field(description="Recipient user ids")


class BroadcastRequestDTO(NotificationContentDTO):
    role: UserRole = UserRole.CLIENT


class CallbackRequestDTO(RequestDTO):
    """Public callback request, delivered to every admin."""

    title: str = Field(min_length=1, max_length=100)
    message: str = Field(min_length=1, max_length=500)
    type: NotificationType = NotificationType.CALLBACK
    priority: Priority = Priority.HIGH

    @field_validator("type")
    @classmethod
    def validate_type(cls, value):
        if NotificationType(value) != NotificationType.CALLBACK:
            raise ValueError("Invalid notification type")
        return value


class ClientRequestDTO(RequestDTO):
    """A signed-in client's request to the admins."""

    title: str = Field(min_length=1, max_length=100)
    message: str = Field(min_length=1, max_length=500)
    type: NotificationType = NotificationType.MESSAGE
    priority: Priority = Priority.MEDIUM
    email: Optional[EmailStr] = None
    name: Optional[str] = Field(default=None, max_length=100)
    action_url: Optional[str] = Field(default=None, max_length=500)
    action_text: Optional[str] = Field(default=None, max_length=100)
    related_project_id: Optional[str] = None
    related_invoice_id: Optional[str] = None


class NotificationResponseDTO(ResponseDTO):
    recipient_id: str
    sender_id: Optional[str] = None
    title: str
    message: str
    type: NotificationType
    priority: Priority
    is_read: bool = False
    read_at: Optional[datetime] = None
    related_project_id: Optional[str] = None
    related_invoice_id: Optional[str] = None
    related_message_id: Optional[str] = None
    action_url: Optional[str] = None
    action_text: Optional[str] = None
    expires_at: Optional[datetime] = None
    metadata: Dict[str, Any] = Field(default_factory=dict)

    @classmethod
    def from_domain(cls, notification: Notification) -> "NotificationResponseDTO":
        return cls(
            id=notification.id,
            recipient_id=notification.recipient_id,
            sender_id=notification.sender_id,
            title=notification.title,
            message=notification.message,
            type=notification.type,
            priority=notification.priority,
            is_read=notification.is_read,
            read_at=notification.read_at,
            related_project_id=notification.related_project_id,
            related_invoice_id=notification.related_invoice_id,
            related_message_id=notification.related_message_id,
            action_url=notification.action_url,
            action_text=notification.action_text,
            expires_at=notification.expires_at,
            metadata=notification.metadata or {},
            created_at=notification.created_at,
            updated_at=notification.updated_at,
        )


class NotificationListResponseDTO(BaseModel):
    notifications: List[NotificationResponseDTO]
    pagination: PaginationDTO
    unread_count: int


class SentNotificationGroupDTO(BaseModel):
    """One admin send, regrouped from its per-recipient documents."""

    title: str
    message: str
    type: NotificationType
    priority: Priority
    created_at: datetime
    action_url: Optional[str] = None
    action_text: Optional[str] = None
    expires_at: Optional[datetime] = None
    recipients: List[Dict[str, Any]]
    read_by: List[Dict[str, Any]]
    total_recipients: int
    read_count: int


class NotificationStatsDTO(BaseModel):
    total: int
    unread: int
    by_type: Dict[str, int]
    by_priority: Dict[str, int]


class SendResultDTO(BaseModel):
    count: int
