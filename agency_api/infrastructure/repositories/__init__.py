"""
Infrastructure repositories module.
Contains SQLAlchemy implementations of domain repositories.
"""

from .user_repository import SQLAlchemyUserRepository
from .project_repository import SQLAlchemyProjectRepository
from .invoice_repository import SQLAlchemyInvoiceRepository
from .notification_repository import SQLAlchemyNotificationRepository
from .message_repository import SQLAlchemyMessageRepository
from .push_subscription_repository import SQLAlchemyPushSubscriptionRepository
from .contact_repository import SQLAlchemyContactRepository
from .feedback_repository import SQLAlchemyFeedbackRepository

__all__ = [
    "SQLAlchemyUserRepository",
    "SQLAlchemyProjectRepository",
    "SQLAlchemyInvoiceRepository",
    "SQLAlchemyNotificationRepository",
    "SQLAlchemyMessageRepository",
    "SQLAlchemyPushSubscriptionRepository",
    "SQLAlchemyContactRepository",
    "SQLAlchemyFeedbackRepository",
]
