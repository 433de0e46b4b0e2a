"""
Notification mapper for converting between domain entities and database models.
"""

from agency_api.domain.models.notification import Notification
from agency_api.infrastructure.db.models import NotificationModel


class NotificationMapper:
    """Maps between Notification domain entity and NotificationModel."""

    def domain_to_model(self, notification: Notification) -> NotificationModel:
        model = NotificationModel(id=notification.id)
        self.update_model(model, notification)
        return model

    def update_model(self, model: NotificationModel, notification: Notification) -> None:
        model.recipient_id = notification.recipient_id
        model.sender_id = notification.sender_id
        model.title = notification.title
        model.message = notification.message
        model.type = notification.type
        model.priority = notification.priority
        model.is_read = notification.is_read
        model.read_at = notification.read_at
        model.related_project_id = notification.related_project_id
        model.related_invoice_id = notification.related_invoice_id
        model.related_message_id = notification.related_message_id
        model.action_url = notification.action_url
        model.action_text = notification.action_text
        model.expires_at = notification.expires_at
        model.meta = dict(notification.metadata or {})
        model.created_at = notification.created_at
        model.updated_at = notification.updated_at

    def model_to_domain(self, model: NotificationModel) -> Notification:
        return Notification(
            id=model.id,
            recipient_id=model.recipient_id,
            sender_id=model.sender_id,
            title=model.title,
            message=model.message,
            type=model.type,
            priority=model.priority,
            is_read=bool(model.is_read),
            read_at=model.read_at,
            related_project_id=model.related_project_id,
            related_invoice_id=model.related_invoice_id,
            related_message_id=model.related_message_id,
            action_url=model.action_url,
            action_text=model.action_text,
            expires_at=model.expires_at,
            metadata=dict(model.meta or {}),
            created_at=model.created_at,
            updated_at=model.updated_at,
        )
