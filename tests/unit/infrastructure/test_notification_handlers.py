"""
Unit tests for the delivery event handlers.
"""

from agency_api.domain.events.invoice_events import InvoiceCreated, InvoiceStatusChanged, PaymentReported
from agency_api.domain.events.notification_events import MeetingRequested, NotificationsCreated
from agency_api.infrastructure.events.event_setup import setup_event_handlers
from agency_api.infrastructure.events.notification_handlers import (
    InvoiceNotificationHandler,
    MeetingRequestHandler,
    NotificationDeliveryHandler,
)
from agency_api.infrastructure.push.push_service import PushNotificationService


INVOICE = {"id": "inv-1", "invoice_number": "INV-0001", "total": 500.0}


class RecordingEmailService:
    """Stands in for EmailService; records which sender was called."""

    def __init__(self, fail_on=None):
        self.calls = []
        self.fail_on = fail_on

    def __getattr__(self, name):
        if not name.startswith("send_"):
            raise AttributeError(name)

        async def send(*args, **kwargs):
            self.calls.append((name, args, kwargs))
            if name == self.fail_on:
                raise RuntimeError("smtp down")
            return {"success": True}

        return send


class RecordingPushService:

    build_payload = staticmethod(PushNotificationService.build_payload)

    def __init__(self):
        self.batches = []

    async def send_to_many(self, subscriptions, payload):
        self.batches.append((subscriptions, payload))
        return [{"success": True} for _ in subscriptions]


def status_event(new_status: str) -> InvoiceStatusChanged:
    return InvoiceStatusChanged(
        invoice=INVOICE,
        old_status="draft",
        new_status=new_status,
        client_name="Dana",
        client_email="dana@example.com",
        project_title="Website",
    )


class TestInvoiceNotificationHandler:

    def setup_method(self):
        self.email = RecordingEmailService()
        self.handler = InvoiceNotificationHandler(self.email)

    def sent(self):
        return [name for name, _, _ in self.email.calls]

    async def test_created_emails_client_and_admin(self):
        await self.handler.handle(InvoiceCreated(
            invoice=INVOICE, client_name="Dana", client_email="dana@example.com", project_title="Website"
        ))

        assert self.sent() == ["send_invoice_created", "send_invoice_created_admin"]

    async def test_sent_status(self):
        await self.handler.handle(status_event("sent"))

        assert self.sent() == ["send_invoice_sent", "send_invoice_sent_admin"]

    async def test_paid_status(self):
        await self.handler.handle(status_event("paid"))

        assert self.sent() == ["send_payment_confirmed", "send_payment_received_admin"]

    async def test_other_statuses_send_nothing(self):
        for new_status in ("draft", "overdue", "cancelled"):
            await self.handler.handle(status_event(new_status))

        assert self.sent() == []

    async def test_payment_reported(self):
        await self.handler.handle(PaymentReported(
            invoice=INVOICE,
            client_name="Dana",
            client_email="dana@example.com",
            project_title="Website",
            payment={"payment_method": "paypal"},
        ))

        assert self.sent() == ["send_payment_reported_admin"]

    async def test_client_email_failure_still_alerts_admin(self):
        self.handler = InvoiceNotificationHandler(RecordingEmailService(fail_on="send_invoice_created"))

        await self.handler.handle(InvoiceCreated(
            invoice=INVOICE, client_name="Dana", client_email="dana@example.com", project_title="Website"
        ))

        names = [name for name, _, _ in self.handler.email_service.calls]
        assert names == ["send_invoice_created", "send_invoice_created_admin"]


class TestNotificationDeliveryHandler:

    def setup_method(self):
        self.email = RecordingEmailService()
        self.push = RecordingPushService()
        self.handler = NotificationDeliveryHandler(self.email, self.push)

    def event(self, **overrides) -> NotificationsCreated:
        data = {
            "title": "Maintenance",
            "message": "Tonight",
            "notification_type": "system",
            "priority": "high",
            "recipients": [
                {"name": "Dana", "email": "dana@example.com"},
                {"name": "Lee", "email": ""},
            ],
            "subscriptions": [{"endpoint": "https://push.example/1", "keys": {"p256dh": "k", "auth": "a"}}],
        }
        data.update(overrides)
        return NotificationsCreated(**data)

    async def test_push_and_email(self):
        await self.handler.handle(self.event())

        subscriptions, payload = self.push.batches[0]
        assert len(subscriptions) == 1
        assert payload["data"] == {"type": "system", "priority": "high", "url": "/notifications"}

        # Recipients without an address are skipped
        assert len(self.email.calls) == 1
        _, args, kwargs = self.email.calls[0]
        assert args[0] == "dana@example.com"
        assert kwargs["announcement"] is False

    async def test_broadcast_marks_announcement(self):
        await self.handler.handle(self.event(broadcast=True, subscriptions=[]))

        assert self.push.batches == []
        assert self.email.calls[0][2]["announcement"] is True

    async def test_email_can_be_disabled(self):
        await self.handler.handle(self.event(send_email=False))

        assert len(self.push.batches) == 1
        assert self.email.calls == []


class TestMeetingRequestHandler:

    async def test_sends_confirmation(self):
        email = RecordingEmailService()

        await MeetingRequestHandler(email).handle(MeetingRequested(
            email="lee@example.com", name="Lee", title="Kickoff", message="Tuesday?"
        ))

        assert email.calls[0][0] == "send_meeting_confirmation"
        assert email.calls[0][1][0] == "lee@example.com"


class TestEventSetup:

    def test_every_event_has_a_handler(self):
        dispatcher = setup_event_handlers(RecordingEmailService(), RecordingPushService())

        registered = dispatcher.get_registered_handlers()

        assert registered["InvoiceCreated"] == ["InvoiceNotificationHandler"]
        assert registered["InvoiceStatusChanged"] == ["InvoiceNotificationHandler"]
        assert registered["PaymentReported"] == ["InvoiceNotificationHandler"]
        assert registered["NotificationsCreated"] == ["NotificationDeliveryHandler"]
        assert registered["MeetingRequested"] == ["MeetingRequestHandler"]
