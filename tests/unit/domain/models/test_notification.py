"""
Unit tests for notifications, messages, feedback and push subscriptions.
"""

import pytest
from datetime import datetime, timedelta

from agency_api.domain.models.base import BusinessRuleViolation, Priority, UserRole, ValidationError
from agency_api.domain.models.feedback import Feedback, FeedbackStatus, ServiceCategory
from agency_api.domain.models.message import Message, MessageStatus
from agency_api.domain.models.notification import Notification, NotificationPayload, NotificationType
from agency_api.domain.models.push_subscription import PushSubscription


class TestNotification:

    def test_mark_as_read_is_idempotent(self):
        """The second call leaves read_at untouched."""
        notification = Notification(recipient_id="u1", title="Hi", message="Hello")

        assert notification.mark_as_read() is True
        first_read_at = notification.read_at

        assert notification.mark_as_read() is False
        assert notification.is_read
        assert notification.read_at == first_read_at

    def test_expiry(self):
        now = datetime(2030, 1, 1, 12)
        notification = Notification(
            recipient_id="u1", title="Hi", message="Hello", expires_at=now
        )

        assert notification.is_expired(now)
        assert not notification.is_expired(now - timedelta(minutes=1))
        assert not Notification(recipient_id="u1", title="Hi", message="Hello").is_expired(now)

    def test_payload_copies_share_creation_time(self):
        payload = NotificationPayload(
            title="Maintenance",
            message="Tonight at 10pm",
            type=NotificationType.SYSTEM,
            priority=Priority.HIGH,
            sender_id="admin",
            metadata={"window": "2h"},
        )
        sent_at = datetime(2030, 5, 1, 9, 30)

        first = payload.for_recipient("a", sent_at)
        second = payload.for_recipient("b", sent_at)

        assert first.created_at == second.created_at == sent_at
        assert first.recipient_id == "a"
        assert second.type == NotificationType.SYSTEM
        assert not first.is_read
        # Each copy gets its own metadata dict
        first.metadata["window"] = "3h"
        assert second.metadata["window"] == "2h"

    def test_payload_requires_title(self):
        payload = NotificationPayload(title=" ", message="Body")

        with pytest.raises(ValidationError, match="Title is required"):
            payload.for_recipient("a")


class TestMessage:

    def make_message(self) -> Message:
        return Message(
            id="m1",
            from_id="client-1",
            from_role=UserRole.CLIENT,
            to_role=UserRole.ADMIN,
            subject="Question",
            content="When is the launch?",
            project_id="p1",
        )

    def test_reply_links_to_original(self):
        original = self.make_message()

        reply = original.build_reply("admin-1", "Next Monday")

        assert reply.subject == "Re: Question"
        assert reply.reply_to_id == "m1"
        assert reply.to_id == "client-1"
        assert reply.from_role == UserRole.ADMIN
        assert reply.to_role == UserRole.CLIENT
        assert reply.project_id == "p1"
        assert reply.status == MessageStatus.UNREAD
        assert original.status == MessageStatus.REPLIED

    def test_read_stamps_read_at(self):
        message = self.make_message()

        message.change_status(MessageStatus.READ)

        assert message.read_at is not None

    def test_empty_reply_rejected(self):
        with pytest.raises(ValidationError):
            self.make_message().build_reply("admin-1", "   ")


class TestFeedback:

    def make_feedback(self) -> Feedback:
        return Feedback(
            client_id="c1",
            rating=5,
            title="Great work",
            content="Delivered on time",
            service_category=ServiceCategory.WEB_DEVELOPMENT,
        )

    def test_approve_publishes(self):
        feedback = self.make_feedback()

        feedback.approve("admin-1")

        assert feedback.status == FeedbackStatus.APPROVED
        assert feedback.is_public
        assert feedback.approved_by == "admin-1"
        assert feedback.approved_at is not None

    def test_approve_twice_rejected(self):
        feedback = self.make_feedback()
        feedback.approve("admin-1")

        with pytest.raises(BusinessRuleViolation, match="already approved"):
            feedback.approve("admin-1")

    def test_reject_hides_and_keeps_reason(self):
        feedback = self.make_feedback()
        feedback.approve("admin-1")

        feedback.reject("  Off topic ")

        assert feedback.status == FeedbackStatus.REJECTED
        assert not feedback.is_public
        assert feedback.rejection_reason == "Off topic"

    def test_rating_range(self):
        feedback = self.make_feedback()
        feedback.rating = 6

        with pytest.raises(ValidationError, match="Rating"):
            feedback.validate()


class TestPushSubscription:

    def test_reassign_moves_endpoint(self):
        subscription = PushSubscription(
            user_id="u1", endpoint="https://push.example/1", p256dh="k", auth="a", is_active=False
        )

        subscription.reassign("u2", "k2", "a2")

        assert subscription.user_id == "u2"
        assert subscription.is_active
        assert subscription.to_subscription_info() == {
            "endpoint": "https://push.example/1",
            "keys": {"p256dh": "k2", "auth": "a2"},
        }

    def test_keys_required(self):
        with pytest.raises(ValidationError, match="Invalid subscription data"):
            PushSubscription(user_id="u1", endpoint="https://push.example/1", p256dh="", auth="a").validate()
