"""
Repository interfaces for the domain layer.
This module exports all repository interfaces (ports) for dependency injection.
"""

from .user_repository import UserRepository
from .project_repository import ProjectRepository
from .invoice_repository import InvoiceRepository
from .notification_repository import NotificationRepository
from .message_repository import MessageRepository
from .push_subscription_repository import PushSubscriptionRepository
from .contact_repository import ContactRepository
from .feedback_repository import FeedbackRepository

__all__ = [
    "UserRepository",
    "ProjectRepository",
    "InvoiceRepository",
    "NotificationRepository",
    "MessageRepository",
    "PushSubscriptionRepository",
    "ContactRepository",
    "FeedbackRepository",
]
