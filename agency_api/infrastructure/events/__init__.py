"""
Infrastructure event handlers.
Handles domain events and triggers outbound deliveries.
"""

from .notification_handlers import (
    InvoiceNotificationHandler,
    NotificationDeliveryHandler,
    MeetingRequestHandler,
)
from .event_setup import setup_event_handlers

__all__ = [
    "InvoiceNotificationHandler",
    "NotificationDeliveryHandler",
    "MeetingRequestHandler",
    "setup_event_handlers",
]
