"""
Infrastructure mappers module.
Contains mappers for converting between domain entities and database models.
"""

from .user_mapper import UserMapper
from .project_mapper import ProjectMapper
from .invoice_mapper import InvoiceMapper
from .notification_mapper import NotificationMapper
from .message_mapper import MessageMapper
from .push_subscription_mapper import PushSubscriptionMapper
from .contact_mapper import ContactMapper
from .feedback_mapper import FeedbackMapper

__all__ = [
    "UserMapper",
    "ProjectMapper",
    "InvoiceMapper",
    "NotificationMapper",
    "MessageMapper",
    "PushSubscriptionMapper",
    "ContactMapper",
    "FeedbackMapper",
]
