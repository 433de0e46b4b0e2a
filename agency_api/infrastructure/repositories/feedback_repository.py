"""
Feedback repository implementation using SQLAlchemy.
"""

from typing import Optional, List
from sqlalchemy.orm import Session
from sqlalchemy import desc

from agency_api.domain.models.base import EntityNotFoundError, new_id
from agency_api.domain.models.feedback import Feedback, FeedbackStatus
from agency_api.domain.repositories.feedback_repository import FeedbackRepository
from agency_api.infrastructure.db.models import FeedbackModel
from agency_api.infrastructure.mappers.feedback_mapper import FeedbackMapper


class SQLAlchemyFeedbackRepository(FeedbackRepository):

    def __init__(self, session: Session):
        self.session = session
        self.mapper = FeedbackMapper()

    def save(self, feedback: Feedback) -> Feedback:
        if feedback.is_new:
            feedback.id = new_id()
            self.session.add(self.mapper.domain_to_model(feedback))
        else:
            model = self.session.query(FeedbackModel).filter_by(id=feedback.id).first()
            if not model:
                raise EntityNotFoundError("Feedback", feedback.id)
            self.mapper.update_model(model, feedback)

        self.session.flush()
        return feedback

    def get_by_id(self, feedback_id: str) -> Optional[Feedback]:
        model = self.session.query(FeedbackModel).filter_by(id=feedback_id).first()
        return self.mapper.model_to_domain(model) if model else None

    def list(
        self,
        client_id: Optional[str] = None,
        status: Optional[FeedbackStatus] = None,
        public_only: bool = False,
    ) -> List[Feedback]:
        query = self.session.query(FeedbackModel)
        if client_id:
            query = query.filter(FeedbackModel.client_id == client_id)
        if status:
            query = query.filter(FeedbackModel.status == status)
        if public_only:
            query = query.filter(
                FeedbackModel.status == FeedbackStatus.APPROVED,
                FeedbackModel.is_public.is_(True),
            )
        models = query.order_by(desc(FeedbackModel.created_at)).all()
        return [self.mapper.model_to_domain(model) for model in models]

    def delete(self, feedback_id: str) -> bool:
        model = self.session.query(FeedbackModel).filter_by(id=feedback_id).first()
        if not model:
            return False

        self.session.delete(model)
        self.session.flush()
        return True
