"""
Push subscription repository implementation using SQLAlchemy.
"""

from typing import Optional, List
from sqlalchemy.orm import Session

from agency_api.domain.models.base import EntityNotFoundError, new_id
from agency_api.domain.models.push_subscription import PushSubscription
from agency_api.domain.repositories.push_subscription_repository import PushSubscriptionRepository
from agency_api.infrastructure.db.models import PushSubscriptionModel
from agency_api.infrastructure.mappers.push_subscription_mapper import PushSubscriptionMapper


class SQLAlchemyPushSubscriptionRepository(PushSubscriptionRepository):

    def __init__(self, session: Session):
        self.session = session
        self.mapper = PushSubscriptionMapper()

    def save(self, subscription: PushSubscription) -> PushSubscription:
        if subscription.is_new:
            subscription.id = new_id()
            self.session.add(self.mapper.domain_to_model(subscription))
        else:
            model = self.session.query(PushSubscriptionModel).filter_by(id=subscription.id).first()
            if not model:
                raise EntityNotFoundError("PushSubscription", subscription.id)
            self.mapper.update_model(model, subscription)

        self.session.flush()
        return subscription

    def get_by_endpoint(self, endpoint: str) -> Optional[PushSubscription]:
        model = self.session.query(PushSubscriptionModel).filter_by(endpoint=endpoint).first()
        return self.mapper.model_to_domain(model) if model else None

    def list_active_for_users(self, user_ids: List[str]) -> List[PushSubscription]:
        if not user_ids:
            return []
        models = self.session.query(PushSubscriptionModel).filter(
            PushSubscriptionModel.user_id.in_(user_ids),
            PushSubscriptionModel.is_active.is_(True),
        ).all()
        return [self.mapper.model_to_domain(model) for model in models]

    def delete_for_user(self, user_id: str, endpoint: str) -> bool:
        model = self.session.query(PushSubscriptionModel).filter_by(
            user_id=user_id, endpoint=endpoint
        ).first()
        if not model:
            return False

        self.session.delete(model)
        self.session.flush()
        return True
