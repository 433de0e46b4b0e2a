"""
Push subscription mapper.
"""

from agency_api.domain.models.push_subscription import PushSubscription
from agency_api.infrastructure.db.models import PushSubscriptionModel


class PushSubscriptionMapper:

    def domain_to_model(self, subscription: PushSubscription) -> PushSubscriptionModel:
        model = PushSubscriptionModel(id=subscription.id)
        self.update_model(model, subscription)
        return model

    def update_model(self, model: PushSubscriptionModel, subscription: PushSubscription) -> None:
        model.user_id = subscription.user_id
        model.endpoint = subscription.endpoint
        model.p256dh = subscription.p256dh
        model.auth = subscription.auth
        model.is_active = subscription.is_active
        model.last_used_at = subscription.last_used_at
        model.created_at = subscription.created_at
        model.updated_at = subscription.updated_at

    def model_to_domain(self, model: PushSubscriptionModel) -> PushSubscription:
        return PushSubscription(
            id=model.id,
            user_id=model.user_id,
            endpoint=model.endpoint,
            p256dh=model.p256dh,
            auth=model.auth,
            is_active=model.is_active,
            last_used_at=model.last_used_at,
            created_at=model.created_at,
            updated_at=model.updated_at,
        )
