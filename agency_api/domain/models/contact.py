"""
Contact domain model.
Enquiries submitted through the public contact form.
"""

from dataclasses import dataclass
from enum import Enum

from agency_api.domain.models.base import BaseEntity, Email, ValidationError


class ContactSubject(str, Enum):
    WEB_DEVELOPMENT = "web-development"
    VIRTUAL_ASSISTANCE = "virtual-assistance"
    EDUCATIONAL_SUPPORT = "educational-support"
    GENERAL = "general"
    PRICING = "pricing"
    PARTNERSHIP = "partnership"
    CALLBACK_REQUEST = "callback-request"
    OTHER = "other"


class ContactStatus(str, Enum):
    UNREAD = "unread"
    READ = "read"
    REPLIED = "replied"


@dataclass(eq=False)
class Contact(BaseEntity):
    """Public enquiry."""

    first_name: str
    last_name: str
    email: str
    subject: ContactSubject
    message: str
    company: str = ""
    status: ContactStatus = ContactStatus.UNREAD
    admin_notes: str = ""

    def __post_init__(self):
        super().__post_init__()
        self.subject = ContactSubject(self.subject)
        self.status = ContactStatus(self.status)
        self.email = (self.email or "").strip().lower()

    def validate(self) -> None:
        if not self.first_name or len(self.first_name) > 50:
            raise ValidationError("First name is required (max 50 characters)", "first_name")
        if not self.last_name or len(self.last_name) > 50:
            raise ValidationError("Last name is required (max 50 characters)", "last_name")
        Email(self.email)
        if not 10 <= len(self.message or "") <= 2000:
            raise ValidationError("Message must be between 10 and 2000 characters", "message")

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}"

    @property
    def wants_callback(self) -> bool:
        return self.subject == ContactSubject.CALLBACK_REQUEST
