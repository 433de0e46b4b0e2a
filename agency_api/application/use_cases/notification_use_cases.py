"""
Notification use cases.
Fan-out of in-app notifications plus the recipient's inbox operations.
"""

import logging
from typing import Dict, List, Optional, Tuple

from agency_api.application.use_cases.base_use_case import AuthorizedUseCase, normalize_page
from agency_api.application.dto.base_dto import CountResponseDTO, PaginationDTO
from agency_api.application.dto.notification_dto import (
    BroadcastRequestDTO,
    CallbackRequestDTO,
    ClientRequestDTO,
    NotificationListResponseDTO,
    NotificationResponseDTO,
    NotificationStatsDTO,
    SendNotificationRequestDTO,
    SentNotificationGroupDTO,
)
from agency_api.domain.events.base import EventDispatcher
from agency_api.domain.events.notification_events import MeetingRequested, NotificationsCreated
from agency_api.domain.models.base import (
    BusinessRuleViolation,
    EntityNotFoundError,
    Priority,
    UserRole,
    utcnow,
)
from agency_api.domain.models.notification import (
    Notification,
    NotificationPayload,
    NotificationType,
)
from agency_api.domain.models.user import User
from agency_api.domain.repositories.notification_repository import NotificationRepository
from agency_api.domain.repositories.push_subscription_repository import PushSubscriptionRepository
from agency_api.domain.repositories.user_repository import UserRepository


logger = logging.getLogger(__name__)


class _FanOutUseCase(AuthorizedUseCase):
    """Stores one notification per recipient and hands delivery to the dispatcher."""

    def __init__(
        self,
        notification_repository: NotificationRepository,
        user_repository: UserRepository,
        push_subscription_repository: Optional[PushSubscriptionRepository] = None,
        dispatcher: Optional[EventDispatcher] = None,
    ):
        super().__init__(dispatcher)
        self.notification_repository = notification_repository
        self.user_repository = user_repository
        self.push_subscription_repository = push_subscription_repository

    def _fan_out(
        self,
        recipients: List[User],
        payload: NotificationPayload,
        deliver: bool = True,
        send_email: bool = True,
        broadcast: bool = False,
    ) -> int:
        sent_at = utcnow()
        notifications = self.notification_repository.save_many(
            [payload.for_recipient(recipient.id, sent_at) for recipient in recipients]
        )
        logger.info(f"Stored {len(notifications)} '{payload.type.value}' notification(s): {payload.title}")

        if deliver:
            self._publish(NotificationsCreated(
                title=payload.title,
                message=payload.message,
                notification_type=payload.type.value,
                priority=payload.priority.value,
                recipients=[{"name": r.name, "email": r.email} for r in recipients],
                subscriptions=self._subscriptions_for(recipients),
                action_url=payload.action_url,
                send_email=send_email,
                broadcast=broadcast,
            ))
        return len(notifications)

    def _subscriptions_for(self, recipients: List[User]) -> List[dict]:
        if self.push_subscription_repository is None:
            return []
        subscriptions = self.push_subscription_repository.list_active_for_users(
            [recipient.id for recipient in recipients]
        )
        return [subscription.to_subscription_info() for subscription in subscriptions]

    def _admins(self) -> List[User]:
        admins = self.user_repository.list_by_role(UserRole.ADMIN, active_only=False)
        if not admins:
            raise BusinessRuleViolation("No active admins found.")
        return admins


class SendNotificationUseCase(_FanOutUseCase):
    """Admin sends a notification to chosen clients."""

    async def execute(self, user: User, request: SendNotificationRequestDTO) -> int:
        self._require_admin(user)

        recipients = self.user_repository.get_by_ids(
            list(dict.fromkeys(request.recipients)), role=UserRole.CLIENT
        )
        if not recipients:
            raise BusinessRuleViolation("No valid recipients found")

        return self._fan_out(recipients, request.to_payload(sender_id=user.id))


class BroadcastNotificationUseCase(_FanOutUseCase):
    """Admin sends a notification to every active user of a role."""

    async def execute(self, user: User, request: BroadcastRequestDTO) -> int:
        self._require_admin(user)

        role = UserRole(request.role)
        recipients = self.user_repository.list_by_role(role, active_only=True)
        if not recipients:
            raise BusinessRuleViolation(f"No active {role.value}s found")

        return self._fan_out(recipients, request.to_payload(sender_id=user.id), broadcast=True)


class SendCallbackRequestUseCase(_FanOutUseCase):
    """
    Public callback request.
    Every admin gets a `callback` notification without a sender, pushed to
    their devices but not emailed.
    """

    async def execute(self, request: CallbackRequestDTO) -> int:
        admins = self._admins()
        payload = NotificationPayload(
            title=request.title,
            message=request.message,
            type=NotificationType.CALLBACK,
            priority=Priority(request.priority),
        )
        return self._fan_out(admins, payload, send_email=False)


class SendClientRequestUseCase(_FanOutUseCase):
    """A signed-in user's request to the admins; meetings get a confirmation email."""

    async def execute(self, user: User, request: ClientRequestDTO) -> Dict[str, object]:
        admins = self._admins()
        notification_type = NotificationType(request.type)
        payload = NotificationPayload(
            title=request.title,
            message=request.message,
            type=notification_type,
            priority=Priority(request.priority),
            sender_id=user.id,
            action_url=request.action_url,
            action_text=request.action_text,
            related_project_id=request.related_project_id,
            related_invoice_id=request.related_invoice_id,
        )
        count = self._fan_out(admins, payload, deliver=False)

        email_sent = notification_type == NotificationType.MEETING and bool(request.email)
        if email_sent:
            self._publish(MeetingRequested(
                email=request.email,
                name=request.name or user.name or "there",
                title=request.title,
                message=request.message,
            ))

        return {
            "recipient_count": count,
            "type": notification_type.value,
            "priority": payload.priority.value,
            "email_sent": email_sent,
        }


class _InboxUseCase(AuthorizedUseCase):

    def __init__(self, notification_repository: NotificationRepository):
        super().__init__()
        self.notification_repository = notification_repository

    def _get_owned(self, user: User, notification_id: str, allow_admin: bool = False) -> Notification:
        notification = self.notification_repository.get_by_id(notification_id)
        if notification is None:
            raise EntityNotFoundError("Notification", notification_id)
        if notification.recipient_id != user.id and not (allow_admin and user.is_admin):
            # Other users' notifications are reported as missing
            raise EntityNotFoundError("Notification", notification_id)
        return notification


class ListNotificationsUseCase(_InboxUseCase):
    """The user's own notifications, newest first, expired ones left out."""

    async def execute(
        self,
        user: User,
        page: int = 1,
        limit: int = 20,
        unread_only: bool = False,
        notification_type: Optional[NotificationType] = None,
    ) -> NotificationListResponseDTO:
        page, limit, offset = normalize_page(page, limit)
        now = utcnow()

        notifications = self.notification_repository.list_for_recipient(
            user.id, now, unread_only, notification_type, offset, limit
        )
        total = self.notification_repository.count_for_recipient(
            user.id, now, unread_only, notification_type
        )
        unread = self.notification_repository.count_for_recipient(user.id, now, unread_only=True)

        return NotificationListResponseDTO(
            notifications=[NotificationResponseDTO.from_domain(n) for n in notifications],
            pagination=PaginationDTO.create(page, limit, total),
            unread_count=unread,
        )


class MarkNotificationReadUseCase(_InboxUseCase):

    async def execute(self, user: User, notification_id: str) -> NotificationResponseDTO:
        notification = self._get_owned(user, notification_id)
        if notification.mark_as_read():
            self.notification_repository.save(notification)
        return NotificationResponseDTO.from_domain(notification)


class MarkAllNotificationsReadUseCase(_InboxUseCase):

    async def execute(self, user: User) -> CountResponseDTO:
        count = self.notification_repository.mark_all_read(user.id, utcnow())
        logger.info(f"Marked {count} notification(s) read for {user.id}")
        return CountResponseDTO(count=count)


class DeleteNotificationUseCase(_InboxUseCase):

    async def execute(self, user: User, notification_id: str) -> None:
        self._get_owned(user, notification_id, allow_admin=True)
        self.notification_repository.delete(notification_id)


class ListSentNotificationsUseCase(AuthorizedUseCase):
    """
    An admin's sends, regrouped from the per-recipient documents.

    Documents of one send share their title and creation time.
    """

    def __init__(self, notification_repository: NotificationRepository, user_repository: UserRepository):
        super().__init__()
        self.notification_repository = notification_repository
        self.user_repository = user_repository

    async def execute(
        self,
        user: User,
        notification_type: Optional[NotificationType] = None,
    ) -> List[SentNotificationGroupDTO]:
        self._require_admin(user)

        sent = self.notification_repository.list_by_sender(user.id)
        if notification_type is not None:
            sent = [n for n in sent if n.type == NotificationType(notification_type)]

        people = {
            person.id: person
            for person in self.user_repository.get_by_ids(list({n.recipient_id for n in sent}))
        }

        groups: Dict[Tuple[str, object], dict] = {}
        for notification in sent:
            key = (notification.title, notification.created_at)
            group = groups.get(key)
            if group is None:
                group = groups[key] = {
                    "title": notification.title,
                    "message": notification.message,
                    "type": notification.type,
                    "priority": notification.priority,
                    "created_at": notification.created_at,
                    "action_url": notification.action_url,
                    "action_text": notification.action_text,
                    "expires_at": notification.expires_at,
                    "recipients": [],
                    "read_by": [],
                }

            person = people.get(notification.recipient_id)
            group["recipients"].append({
                "id": notification.recipient_id,
                "name": person.name if person else None,
                "email": person.email if person else None,
            })
            if notification.is_read:
                group["read_by"].append({
                    "id": notification.recipient_id,
                    "name": person.name if person else None,
                    "read_at": notification.read_at,
                })

        return [
            SentNotificationGroupDTO(
                **group,
                total_recipients=len(group["recipients"]),
                read_count=len(group["read_by"]),
            )
            for group in groups.values()
        ]


class NotificationStatsUseCase(AuthorizedUseCase):

    def __init__(self, notification_repository: NotificationRepository):
        super().__init__()
        self.notification_repository = notification_repository

    async def execute(self, user: User) -> NotificationStatsDTO:
        self._require_admin(user)
        return NotificationStatsDTO(**self.notification_repository.stats())


class PurgeExpiredNotificationsUseCase:
    """Deletes notifications whose expiry has passed."""

    def __init__(self, notification_repository: NotificationRepository):
        self.notification_repository = notification_repository

    def execute(self) -> int:
        deleted = self.notification_repository.purge_expired(utcnow())
        logger.info(f"Purged {deleted} expired notification(s)")
        return deleted
