"""
Domain events for the application.
Event-driven architecture components for notifications and business logic.
"""

from .base import DomainEvent, EventHandler, EventDispatcher
from .invoice_events import InvoiceCreated, InvoiceStatusChanged, PaymentReported
from .notification_events import NotificationsCreated, MeetingRequested

__all__ = [
    "DomainEvent",
    "EventHandler",
    "EventDispatcher",
    "InvoiceCreated",
    "InvoiceStatusChanged",
    "PaymentReported",
    "NotificationsCreated",
    "MeetingRequested",
]
