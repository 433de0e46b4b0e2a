"""
Message repository implementation using SQLAlchemy.
"""

from typing import Optional, List
from sqlalchemy.orm import Session, Query
from sqlalchemy import or_, desc

from agency_api.domain.models.base import EntityNotFoundError, UserRole, new_id
from agency_api.domain.models.message import Message, MessageStatus
from agency_api.domain.repositories.message_repository import MessageRepository
from agency_api.infrastructure.db.models import MessageModel
from agency_api.infrastructure.mappers.message_mapper import MessageMapper


class SQLAlchemyMessageRepository(MessageRepository):
    """SQLAlchemy implementation of message repository."""

    def __init__(self, session: Session):
        self.session = session
        self.mapper = MessageMapper()

    def save(self, message: Message) -> Message:
        if message.is_new:
            message.id = new_id()
            self.session.add(self.mapper.domain_to_model(message))
        else:
            model = self.session.query(MessageModel).filter_by(id=message.id).first()
            if not model:
                raise EntityNotFoundError("Message", message.id)
            self.mapper.update_model(model, message)

        self.session.flush()
        return message

    def get_by_id(self, message_id: str) -> Optional[Message]:
        model = self.session.query(MessageModel).filter_by(id=message_id).first()
        return self.mapper.model_to_domain(model) if model else None

    def _filtered(
        self,
        to_role: Optional[UserRole],
        participant_id: Optional[str],
        status: Optional[MessageStatus],
    ) -> Query:
        query = self.session.query(MessageModel)
        if to_role:
            query = query.filter(MessageModel.to_role == to_role)
        if participant_id:
            query = query.filter(
                or_(MessageModel.from_id == participant_id, MessageModel.to_id == participant_id)
            )
        if status:
            query = query.filter(MessageModel.status == status)
        return query

    def list(
        self,
        to_role: Optional[UserRole] = None,
        participant_id: Optional[str] = None,
        status: Optional[MessageStatus] = None,
        offset: int = 0,
        limit: int = 20,
    ) -> List[Message]:
        models = (
            self._filtered(to_role, participant_id, status)
            .order_by(desc(MessageModel.created_at))
            .offset(offset)
            .limit(limit)
            .all()
        )
        return [self.mapper.model_to_domain(model) for model in models]

    def count(
        self,
        to_role: Optional[UserRole] = None,
        participant_id: Optional[str] = None,
        status: Optional[MessageStatus] = None,
    ) -> int:
        return self._filtered(to_role, participant_id, status).count()

    def count_unread(self, to_role: Optional[UserRole] = None, to_id: Optional[str] = None) -> int:
        query = self.session.query(MessageModel).filter(MessageModel.status == MessageStatus.UNREAD)
        if to_role:
            query = query.filter(MessageModel.to_role == to_role)
        if to_id:
            query = query.filter(MessageModel.to_id == to_id)
        return query.count()

    def delete(self, message_id: str) -> bool:
        model = self.session.query(MessageModel).filter_by(id=message_id).first()
        if not model:
            return False

        self.session.delete(model)
        self.session.flush()
        return True
