"""
Message domain model.
Client/admin conversation threads linked through reply_to_id.
"""

from dataclasses import dataclass
from datetime import datetime
from typing import Optional
from enum import Enum

from agency_api.domain.models.base import (
    BaseEntity,
    Priority,
    UserRole,
    ValidationError,
    utcnow,
)


class MessageStatus(str, Enum):
    """Message status."""
    UNREAD = "unread"
    READ = "read"
    REPLIED = "replied"


DEFAULT_CLIENT_SUBJECT = "New message from client"


@dataclass(eq=False)
class Message(BaseEntity):
    """A single message; replies point at the message they answer."""

    from_id: str
    from_role: UserRole
    to_role: UserRole
    subject: str
    content: str
    to_id: Optional[str] = None
    project_id: Optional[str] = None
    status: MessageStatus = MessageStatus.UNREAD
    priority: Priority = Priority.MEDIUM
    read_at: Optional[datetime] = None
    reply_to_id: Optional[str] = None

    def __post_init__(self):
        super().__post_init__()
        self.from_role = UserRole(self.from_role)
        self.to_role = UserRole(self.to_role)
        self.status = MessageStatus(self.status)
        self.priority = Priority(self.priority)

    def validate(self) -> None:
        if not self.content or not self.content.strip():
            raise ValidationError("Message content is required", "content")
        if not self.subject or not self.subject.strip():
            raise ValidationError("Message subject is required", "subject")

    def change_status(self, status: MessageStatus) -> None:
        self.status = MessageStatus(status)
        if self.status == MessageStatus.READ:
            self.read_at = utcnow()
        self.mark_as_updated()

    def build_reply(self, admin_id: str, content: str) -> "Message":
        """
        Create the admin's reply to this message and flag this one replied.
        """
        reply = Message(
            from_id=admin_id,
            to_id=self.from_id,
            from_role=UserRole.ADMIN,
            to_role=UserRole.CLIENT,
            subject=f"Re: {self.subject}",
            content=content,
            project_id=self.project_id,
            reply_to_id=self.id,
        )
        reply.validate()
        self.status = MessageStatus.REPLIED
        self.mark_as_updated()
        return reply
