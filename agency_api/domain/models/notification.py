"""
Notification domain model.
One in-app notification document per recipient.
"""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional, Dict, Any
from enum import Enum

from agency_api.domain.models.base import (
    BaseEntity,
    Priority,
    ValidationError,
    utcnow,
)


class NotificationType(str, Enum):
    """Notification type."""
    INFO = "info"
    SUCCESS = "success"
    WARNING = "warning"
    ERROR = "error"
    PROJECT_UPDATE = "project_update"
    PAYMENT = "payment"
    MESSAGE = "message"
    SYSTEM = "system"
    CALLBACK = "callback"
    MEETING = "meeting"


# Types an admin may choose when sending to clients
ADMIN_SENDABLE_TYPES = (
    NotificationType.INFO,
    NotificationType.SUCCESS,
    NotificationType.WARNING,
    NotificationType.ERROR,
    NotificationType.PROJECT_UPDATE,
    NotificationType.PAYMENT,
    NotificationType.MESSAGE,
    NotificationType.SYSTEM,
)


@dataclass(eq=False)
class Notification(BaseEntity):
    """In-app notification addressed to a single recipient."""

    recipient_id: str
    title: str
    message: str
    sender_id: Optional[str] = None
    type: NotificationType = NotificationType.INFO
    priority: Priority = Priority.MEDIUM
    is_read: bool = False
    read_at: Optional[datetime] = None
    related_project_id: Optional[str] = None
    related_invoice_id: Optional[str] = None
    related_message_id: Optional[str] = None
    action_url: Optional[str] = None
    action_text: Optional[str] = None
    expires_at: Optional[datetime] = None
    metadata: Dict[str, Any] = field(default_factory=dict)

    def __post_init__(self):
        super().__post_init__()
        self.type = NotificationType(self.type)
        self.priority = Priority(self.priority)
        if self.metadata is None:
            self.metadata = {}

    def validate(self) -> None:
        if not self.recipient_id:
            raise ValidationError("Recipient is required", "recipient")
        if not self.title or not self.title.strip():
            raise ValidationError("Title is required", "title")
        if not self.message or not self.message.strip():
            raise ValidationError("Message is required", "message")

    def mark_as_read(self) -> bool:
        """
        Flag the notification as read.

        Returns False when it was already read; read_at is left untouched then.
        """
        if self.is_read:
            return False
        self.is_read = True
        self.read_at = utcnow()
        self.mark_as_updated()
        return True

    def is_expired(self, now: Optional[datetime] = None) -> bool:
        if self.expires_at is None:
            return False
        return self.expires_at <= (now or utcnow())


@dataclass
class NotificationPayload:
    """Fields shared by every document of one fan-out send."""

    title: str
    message: str
    type: NotificationType = NotificationType.INFO
    priority: Priority = Priority.MEDIUM
    sender_id: Optional[str] = None
    action_url: Optional[str] = None
    action_text: Optional[str] = None
    expires_at: Optional[datetime] = None
    related_project_id: Optional[str] = None
    related_invoice_id: Optional[str] = None
    metadata: Dict[str, Any] = field(default_factory=dict)

    def for_recipient(self, recipient_id: str, created_at: Optional[datetime] = None) -> Notification:
        """Build one recipient's copy; a shared created_at keeps a send groupable."""
        notification = Notification(
            recipient_id=recipient_id,
            created_at=created_at,
            title=self.title,
            message=self.message,
            sender_id=self.sender_id,
            type=self.type,
            priority=self.priority,
            action_url=self.action_url,
            action_text=self.action_text,
            expires_at=self.expires_at,
            related_project_id=self.related_project_id,
            related_invoice_id=self.related_invoice_id,
            metadata=dict(self.metadata),
        )
        notification.validate()
        return notification
