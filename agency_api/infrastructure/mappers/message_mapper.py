"""
Message mapper for converting between domain entities and database models.
"""

from agency_api.domain.models.message import Message
from agency_api.infrastructure.db.models import MessageModel


class MessageMapper:

    def domain_to_model(self, message: Message) -> MessageModel:
        model = MessageModel(id=message.id)
        self.update_model(model, message)
        return model

    def update_model(self, model: MessageModel, message: Message) -> None:
        model.from_id = message.from_id
        model.to_id = message.to_id
        model.from_role = message.from_role
        model.to_role = message.to_role
        model.subject = message.subject
        model.content = message.content
        model.project_id = message.project_id
        model.status = message.status
        model.priority = message.priority
        model.read_at = message.read_at
        model.reply_to_id = message.reply_to_id
        model.created_at = message.created_at
        model.updated_at = message.updated_at

    def model_to_domain(self, model: MessageModel) -> Message:
        return Message(
            id=model.id,
            from_id=model.from_id,
            to_id=model.to_id,
            from_role=model.from_role,
            to_role=model.to_role,
            subject=model.subject,
            content=model.content,
            project_id=model.project_id,
            status=model.status,
            priority=model.priority,
            read_at=model.read_at,
            reply_to_id=model.reply_to_id,
            created_at=model.created_at,
            updated_at=model.updated_at,
        )
