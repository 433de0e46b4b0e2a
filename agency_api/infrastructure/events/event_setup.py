"""
Event system setup and configuration.
Registers all event handlers with the event dispatcher.
"""

import logging

from agency_api.domain.events.base import EventDispatcher
from agency_api.infrastructure.email.email_service import EmailService
from agency_api.infrastructure.push.push_service import PushNotificationService
from .notification_handlers import (
    InvoiceNotificationHandler,
    NotificationDeliveryHandler,
    MeetingRequestHandler,
)

logger = logging.getLogger(__name__)


def setup_event_handlers(
    email_service: EmailService,
    push_service: PushNotificationService,
    dispatcher: EventDispatcher = None,
) -> EventDispatcher:
    """Build a dispatcher with every delivery handler registered."""
    dispatcher = dispatcher or EventDispatcher()

    invoice_handler = InvoiceNotificationHandler(email_service)
    dispatcher.register_handler("InvoiceCreated", invoice_handler)
    dispatcher.register_handler("InvoiceStatusChanged", invoice_handler)
    dispatcher.register_handler("PaymentReported", invoice_handler)

    dispatcher.register_handler(
        "NotificationsCreated",
        NotificationDeliveryHandler(email_service, push_service),
    )
    dispatcher.register_handler("MeetingRequested", MeetingRequestHandler(email_service))

    registered = dispatcher.get_registered_handlers()
    for event_type, handlers in registered.items():
        logger.info(f"Event {event_type}: {', '.join(handlers)} handlers")

    return dispatcher
