"""
Domain events related to notifications.
"""

from typing import Dict, Any, List, Optional
from dataclasses import dataclass, field

from .base import DomainEvent


@dataclass
class NotificationsCreated(DomainEvent):
    """
    Fired after a fan-out stored its notifications.

    recipients holds name/email pairs and subscriptions the active web-push
    endpoints of those recipients.
    """

    title: str
    message: str
    notification_type: str
    priority: str
    recipients: List[Dict[str, str]] = field(default_factory=list)
    subscriptions: List[Dict[str, Any]] = field(default_factory=list)
    action_url: Optional[str] = None
    send_email: bool = True
    broadcast: bool = False

    def _get_event_data(self) -> Dict[str, Any]:
        return {
            "title": self.title,
            "type": self.notification_type,
            "recipient_count": len(self.recipients),
            "subscription_count": len(self.subscriptions),
        }


@dataclass
class MeetingRequested(DomainEvent):
    """Fired when a client asks for a meeting and leaves a contact address."""

    email: str
    name: str
    title: str
    message: str

    def _get_event_data(self) -> Dict[str, Any]:
        return {"email": self.email, "title": self.title}
