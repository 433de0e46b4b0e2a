"""
Unit tests for notification fan-out and inbox use cases.
"""

import pytest
from datetime import datetime
from unittest.mock import Mock

from agency_api.application.dto.notification_dto import (
    BroadcastRequestDTO,
    CallbackRequestDTO,
    ClientRequestDTO,
    SendNotificationRequestDTO,
)
from agency_api.application.use_cases.notification_use_cases import (
    BroadcastNotificationUseCase,
    DeleteNotificationUseCase,
    ListSentNotificationsUseCase,
    MarkNotificationReadUseCase,
    SendCallbackRequestUseCase,
    SendClientRequestUseCase,
    SendNotificationUseCase,
)
from agency_api.domain.events.notification_events import MeetingRequested, NotificationsCreated
from agency_api.domain.models.base import (
    AuthorizationError,
    BusinessRuleViolation,
    EntityNotFoundError,
    UserRole,
)
from agency_api.domain.models.notification import Notification, NotificationType
from agency_api.domain.models.push_subscription import PushSubscription
from agency_api.domain.models.user import User


ADMIN = User(id="admin-1", name="Ada", email="ada@example.com", role=UserRole.ADMIN)
CLIENT_A = User(id="client-a", name="Dana", email="dana@example.com")
CLIENT_B = User(id="client-b", name="Lee", email="lee@example.com")


def notification_repository() -> Mock:
    repository = Mock()
    repository.save_many.side_effect = lambda notifications: notifications
    return repository


class TestFanOut:

    def setup_method(self):
        self.notifications = notification_repository()
        self.users = Mock()
        self.subscriptions = Mock()
        self.subscriptions.list_active_for_users.return_value = [
            PushSubscription(user_id="client-a", endpoint="https://push.example/a", p256dh="k", auth="s")
        ]
        self.dispatcher = Mock()

    def use_case(self, cls):
        return cls(self.notifications, self.users, self.subscriptions, self.dispatcher)

    async def test_send_stores_one_copy_per_recipient(self):
        self.users.get_by_ids.return_value = [CLIENT_A, CLIENT_B]
        request = SendNotificationRequestDTO(
            recipients=["client-a", "client-b", "client-a"], title="Hello", message="World"
        )

        count = await self.use_case(SendNotificationUseCase).execute(ADMIN, request)

        assert count == 2
        self.users.get_by_ids.assert_called_once_with(["client-a", "client-b"], role=UserRole.CLIENT)
        stored = self.notifications.save_many.call_args[0][0]
        assert [n.recipient_id for n in stored] == ["client-a", "client-b"]
        assert {n.sender_id for n in stored} == {"admin-1"}
        assert len({n.created_at for n in stored}) == 1

        event = self.dispatcher.publish.call_args[0][0]
        assert isinstance(event, NotificationsCreated)
        assert event.recipients == [
            {"name": "Dana", "email": "dana@example.com"},
            {"name": "Lee", "email": "lee@example.com"},
        ]
        assert event.subscriptions[0]["endpoint"] == "https://push.example/a"
        assert event.broadcast is False

    async def test_send_without_valid_recipients(self):
        self.users.get_by_ids.return_value = []
        request = SendNotificationRequestDTO(recipients=["ghost"], title="Hello", message="World")

        with pytest.raises(BusinessRuleViolation, match="No valid recipients found"):
            await self.use_case(SendNotificationUseCase).execute(ADMIN, request)

        self.notifications.save_many.assert_not_called()
        self.dispatcher.publish.assert_not_called()

    async def test_send_requires_admin(self):
        request = SendNotificationRequestDTO(recipients=["client-b"], title="Hello", message="World")

        with pytest.raises(AuthorizationError):
            await self.use_case(SendNotificationUseCase).execute(CLIENT_A, request)

    async def test_broadcast_marks_event(self):
        self.users.list_by_role.return_value = [CLIENT_A, CLIENT_B]

        count = await self.use_case(BroadcastNotificationUseCase).execute(
            ADMIN, BroadcastRequestDTO(title="Closed", message="Holiday")
        )

        assert count == 2
        self.users.list_by_role.assert_called_once_with(UserRole.CLIENT, active_only=True)
        assert self.dispatcher.publish.call_args[0][0].broadcast is True

    async def test_broadcast_without_clients(self):
        self.users.list_by_role.return_value = []

        with pytest.raises(BusinessRuleViolation, match="No active clients found"):
            await self.use_case(BroadcastNotificationUseCase).execute(
                ADMIN, BroadcastRequestDTO(title="Closed", message="Holiday")
            )

    async def test_callback_is_pushed_to_admins_without_email(self):
        self.users.list_by_role.return_value = [ADMIN]

        count = await self.use_case(SendCallbackRequestUseCase).execute(
            CallbackRequestDTO(title="Call me", message="Jane, +1 555 0100")
        )

        assert count == 1
        stored = self.notifications.save_many.call_args[0][0]
        assert stored[0].type == NotificationType.CALLBACK
        assert stored[0].sender_id is None
        event = self.dispatcher.publish.call_args[0][0]
        assert isinstance(event, NotificationsCreated)
        assert event.notification_type == "callback"
        assert event.send_email is False
        assert event.recipients == [{"name": "Ada", "email": "ada@example.com"}]

    async def test_callback_without_admins(self):
        self.users.list_by_role.return_value = []

        with pytest.raises(BusinessRuleViolation, match="No active admins found."):
            await self.use_case(SendCallbackRequestUseCase).execute(
                CallbackRequestDTO(title="Call me", message="Please")
            )

    async def test_meeting_request_sends_confirmation(self):
        self.users.list_by_role.return_value = [ADMIN]

        data = await self.use_case(SendClientRequestUseCase).execute(CLIENT_A, ClientRequestDTO(
            title="Kickoff", message="Next week?", type="meeting", email="dana@example.com"
        ))

        assert data == {"recipient_count": 1, "type": "meeting", "priority": "medium", "email_sent": True}
        event = self.dispatcher.publish.call_args[0][0]
        assert isinstance(event, MeetingRequested)
        assert event.name == "Dana"

    async def test_plain_request_sends_no_email(self):
        self.users.list_by_role.return_value = [ADMIN]

        data = await self.use_case(SendClientRequestUseCase).execute(CLIENT_A, ClientRequestDTO(
            title="Question", message="About the invoice", email="dana@example.com"
        ))

        assert data["email_sent"] is False
        self.dispatcher.publish.assert_not_called()


class TestInbox:

    def setup_method(self):
        self.notifications = Mock()
        self.notification = Notification(id="n1", recipient_id="client-a", title="Hi", message="Hello")
        self.notifications.get_by_id.return_value = self.notification

    async def test_mark_read_saves_once(self):
        use_case = MarkNotificationReadUseCase(self.notifications)

        first = await use_case.execute(CLIENT_A, "n1")
        second = await use_case.execute(CLIENT_A, "n1")

        assert first.is_read and second.is_read
        assert first.read_at == second.read_at
        assert self.notifications.save.call_count == 1

    async def test_other_users_notification_is_not_found(self):
        with pytest.raises(EntityNotFoundError):
            await MarkNotificationReadUseCase(self.notifications).execute(CLIENT_B, "n1")

    async def test_admin_may_delete_any_notification(self):
        await DeleteNotificationUseCase(self.notifications).execute(ADMIN, "n1")

        self.notifications.delete.assert_called_once_with("n1")

    async def test_client_cannot_delete_others(self):
        with pytest.raises(EntityNotFoundError):
            await DeleteNotificationUseCase(self.notifications).execute(CLIENT_B, "n1")


class TestListSent:

    async def test_groups_by_send(self):
        sent_at = datetime(2030, 3, 1, 10, 0)
        later = datetime(2030, 3, 2, 10, 0)
        documents = [
            Notification(id="1", recipient_id="client-a", sender_id="admin-1", title="Hello",
                         message="World", created_at=sent_at, is_read=True, read_at=later),
            Notification(id="2", recipient_id="client-b", sender_id="admin-1", title="Hello",
                         message="World", created_at=sent_at),
            Notification(id="3", recipient_id="client-a", sender_id="admin-1", title="Other",
                         message="Send", created_at=later),
        ]
        notifications = Mock()
        notifications.list_by_sender.return_value = documents
        users = Mock()
        users.get_by_ids.return_value = [CLIENT_A, CLIENT_B]

        groups = await ListSentNotificationsUseCase(notifications, users).execute(ADMIN)

        assert len(groups) == 2
        hello = next(group for group in groups if group.title == "Hello")
        assert hello.total_recipients == 2
        assert hello.read_count == 1
        assert hello.read_by[0]["name"] == "Dana"
        assert {r["email"] for r in hello.recipients} == {"dana@example.com", "lee@example.com"}

    async def test_requires_admin(self):
        with pytest.raises(AuthorizationError):
            await ListSentNotificationsUseCase(Mock(), Mock()).execute(CLIENT_A)
