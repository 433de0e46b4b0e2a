"""
Event handlers for email and web-push delivery.
Converts domain events into outbound notifications.
"""

import logging
from typing import Awaitable

from agency_api.domain.events.base import EventHandler, DomainEvent
from agency_api.domain.events.invoice_events import (
    InvoiceCreated,
    InvoiceStatusChanged,
    PaymentReported,
)
from agency_api.domain.events.notification_events import NotificationsCreated, MeetingRequested
from agency_api.domain.models.invoice import InvoiceStatus
from agency_api.infrastructure.email.email_service import EmailService
from agency_api.infrastructure.push.push_service import PushNotificationService


logger = logging.getLogger(__name__)


async def _guarded(description: str, delivery: Awaitable) -> None:
    """Await one delivery, logging instead of raising on failure."""
    try:
        result = await delivery
        if isinstance(result, dict) and not result.get("success", True):
            logger.error(f"{description} failed: {result.get('error')}")
    except Exception as e:
        logger.error(f"{description} failed: {str(e)}")


class InvoiceNotificationHandler(EventHandler):
    """Handler for invoice-related emails."""

    def __init__(self, email_service: EmailService):
        """Initialize invoice notification handler."""
        self.email_service = email_service

    def can_handle(self, event: DomainEvent) -> bool:
        """Check if this handler can process invoice events."""
        return isinstance(event, (InvoiceCreated, InvoiceStatusChanged, PaymentReported))

    async def handle(self, event: DomainEvent) -> None:
        """Handle invoice events and send appropriate notifications."""
        if isinstance(event, InvoiceCreated):
            await self._handle_invoice_created(event)
        elif isinstance(event, InvoiceStatusChanged):
            await self._handle_status_changed(event)
        elif isinstance(event, PaymentReported):
            await self._handle_payment_reported(event)

    async def _handle_invoice_created(self, event: InvoiceCreated) -> None:
        number = event.invoice.get("invoice_number")
        await _guarded(
            f"Invoice {number} client email",
            self.email_service.send_invoice_created(
                event.client_email, event.client_name, event.invoice, event.project_title
            ),
        )
        await _guarded(
            f"Invoice {number} admin email",
            self.email_service.send_invoice_created_admin(
                event.client_name, event.client_email, event.invoice, event.project_title
            ),
        )

    async def _handle_status_changed(self, event: InvoiceStatusChanged) -> None:
        number = event.invoice.get("invoice_number")
        args = (event.client_name, event.client_email, event.invoice, event.project_title)

        if event.new_status == InvoiceStatus.SENT.value:
            await _guarded(
                f"Invoice {number} sent email",
                self.email_service.send_invoice_sent(
                    event.client_email, event.client_name, event.invoice, event.project_title
                ),
            )
            await _guarded(
                f"Invoice {number} sent admin email",
                self.email_service.send_invoice_sent_admin(*args),
            )
        elif event.new_status == InvoiceStatus.PAID.value:
            await _guarded(
                f"Invoice {number} payment confirmation",
                self.email_service.send_payment_confirmed(
                    event.client_email, event.client_name, event.invoice, event.project_title
                ),
            )
            await _guarded(
                f"Invoice {number} payment admin email",
                self.email_service.send_payment_received_admin(*args),
            )
        else:
            logger.debug(f"No email for invoice {number} moving to {event.new_status}")

    async def _handle_payment_reported(self, event: PaymentReported) -> None:
        await _guarded(
            f"Payment report for invoice {event.invoice.get('invoice_number')}",
            self.email_service.send_payment_reported_admin(
                event.client_name,
                event.client_email,
                event.invoice,
                event.project_title,
                event.payment,
            ),
        )


class NotificationDeliveryHandler(EventHandler):
    """Pushes and emails the content of freshly stored notifications."""

    def __init__(self, email_service: EmailService, push_service: PushNotificationService):
        self.email_service = email_service
        self.push_service = push_service

    def can_handle(self, event: DomainEvent) -> bool:
        return isinstance(event, NotificationsCreated)

    async def handle(self, event: NotificationsCreated) -> None:
        if event.subscriptions:
            payload = self.push_service.build_payload(
                event.title,
                event.message,
                {
                    "type": event.notification_type,
                    "priority": event.priority,
                    "url": event.action_url or "/notifications",
                },
            )
            try:
                results = await self.push_service.send_to_many(event.subscriptions, payload)
                delivered = sum(1 for result in results if result.get("success"))
                logger.info(f"Push delivered to {delivered}/{len(results)} subscriptions")
            except Exception as e:
                logger.error(f"Push delivery for '{event.title}' failed: {str(e)}")

        if not event.send_email:
            return

        announcement = event.broadcast
        for recipient in event.recipients:
            if not recipient.get("email"):
                continue
            await _guarded(
                f"Notification email to {recipient['email']}",
                self.email_service.send_notification_email(
                    recipient["email"],
                    recipient.get("name") or "there",
                    event.title,
                    event.message,
                    action_url=event.action_url,
                    announcement=announcement,
                ),
            )


class MeetingRequestHandler(EventHandler):
    """Sends the automatic confirmation for meeting requests."""

    def __init__(self, email_service: EmailService):
        self.email_service = email_service

    def can_handle(self, event: DomainEvent) -> bool:
        return isinstance(event, MeetingRequested)

    async def handle(self, event: MeetingRequested) -> None:
        await _guarded(
            f"Meeting confirmation to {event.email}",
            self.email_service.send_meeting_confirmation(
                event.email, event.name, event.title, event.message
            ),
        )
