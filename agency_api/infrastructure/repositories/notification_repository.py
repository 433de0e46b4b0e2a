"""
Notification repository implementation using SQLAlchemy.
"""

from datetime import datetime
from typing import Optional, List, Dict, Any
from sqlalchemy.orm import Session, Query
from sqlalchemy import func, or_, desc

from agency_api.domain.models.base import EntityNotFoundError, new_id
from agency_api.domain.models.notification import Notification, NotificationType
from agency_api.domain.repositories.notification_repository import NotificationRepository
from agency_api.infrastructure.db.models import NotificationModel
from agency_api.infrastructure.mappers.notification_mapper import NotificationMapper


class SQLAlchemyNotificationRepository(NotificationRepository):
    """SQLAlchemy implementation of notification repository."""

    def __init__(self, session: Session):
        self.session = session
        self.mapper = NotificationMapper()

    def save(self, notification: Notification) -> Notification:
        if notification.is_new:
            notification.id = new_id()
            self.session.add(self.mapper.domain_to_model(notification))
        else:
            model = self.session.query(NotificationModel).filter_by(id=notification.id).first()
            if not model:
                raise EntityNotFoundError("Notification", notification.id)
            self.mapper.update_model(model, notification)

        self.session.flush()
        return notification

    def save_many(self, notifications: List[Notification]) -> List[Notification]:
        for notification in notifications:
            notification.id = new_id()
        self.session.add_all([self.mapper.domain_to_model(n) for n in notifications])
        self.session.flush()
        return notifications

    def save_isolated(self, notifications: List[Notification]) -> List[Notification]:
        with self.session.begin_nested():
            self.save_many(notifications)
        return notifications

    def get_by_id(self, notification_id: str) -> Optional[Notification]:
        model = self.session.query(NotificationModel).filter_by(id=notification_id).first()
        return self.mapper.model_to_domain(model) if model else None

    def _recipient_query(
        self,
        recipient_id: str,
        now: datetime,
        unread_only: bool,
        notification_type: Optional[NotificationType],
    ) -> Query:
        query = self.session.query(NotificationModel).filter(
            NotificationModel.recipient_id == recipient_id,
            or_(NotificationModel.expires_at.is_(None), NotificationModel.expires_at > now),
        )
        if unread_only:
            query = query.filter(NotificationModel.is_read.is_(False))
        if notification_type:
            query = query.filter(NotificationModel.type == notification_type)
        return query

    def list_for_recipient(
        self,
        recipient_id: str,
        now: datetime,
        unread_only: bool = False,
        notification_type: Optional[NotificationType] = None,
        offset: int = 0,
        limit: int = 20,
    ) -> List[Notification]:
        models = (
            self._recipient_query(recipient_id, now, unread_only, notification_type)
            .order_by(desc(NotificationModel.created_at))
            .offset(offset)
            .limit(limit)
            .all()
        )
        return [self.mapper.model_to_domain(model) for model in models]

    def count_for_recipient(
        self,
        recipient_id: str,
        now: datetime,
        unread_only: bool = False,
        notification_type: Optional[NotificationType] = None,
    ) -> int:
        return self._recipient_query(recipient_id, now, unread_only, notification_type).count()

    def mark_all_read(self, recipient_id: str, read_at: datetime) -> int:
        updated = self.session.query(NotificationModel).filter(
            NotificationModel.recipient_id == recipient_id,
            NotificationModel.is_read.is_(False),
        ).update(
            {
                NotificationModel.is_read: True,
                NotificationModel.read_at: read_at,
                NotificationModel.updated_at: read_at,
            },
            synchronize_session=False,
        )
        self.session.flush()
        return updated

    def list_by_sender(self, sender_id: str, limit: int = 500) -> List[Notification]:
        models = (
            self.session.query(NotificationModel)
            .filter(NotificationModel.sender_id == sender_id)
            .order_by(desc(NotificationModel.created_at))
            .limit(limit)
            .all()
        )
        return [self.mapper.model_to_domain(model) for model in models]

    def stats(self) -> Dict[str, Any]:
        total = self.session.query(func.count(NotificationModel.id)).scalar() or 0
        unread = self.session.query(func.count(NotificationModel.id)).filter(
            NotificationModel.is_read.is_(False)
        ).scalar() or 0

        by_type = self.session.query(
            NotificationModel.type, func.count(NotificationModel.id)
        ).group_by(NotificationModel.type).all()

        by_priority = self.session.query(
            NotificationModel.priority, func.count(NotificationModel.id)
        ).group_by(NotificationModel.priority).all()

        return {
            "total": total,
            "unread": unread,
            "by_type": {kind.value: count for kind, count in by_type},
            "by_priority": {priority.value: count for priority, count in by_priority},
        }

    def delete(self, notification_id: str) -> bool:
        model = self.session.query(NotificationModel).filter_by(id=notification_id).first()
        if not model:
            return False

        self.session.delete(model)
        self.session.flush()
        return True

    def purge_expired(self, now: datetime) -> int:
        deleted = self.session.query(NotificationModel).filter(
            NotificationModel.expires_at.isnot(None),
            NotificationModel.expires_at <= now,
        ).delete(synchronize_session=False)
        self.session.flush()
        return deleted
