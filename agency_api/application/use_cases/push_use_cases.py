"""
Web-push subscription use cases.
"""

import logging

from agency_api.application.use_cases.base_use_case import AuthorizedUseCase
from agency_api.application.dto.push_dto import (
    PushSendResultDTO,
    SendPushRequestDTO,
    SubscribeRequestDTO,
    UnsubscribeRequestDTO,
)
from agency_api.domain.models.base import EntityNotFoundError, ValidationError
from agency_api.domain.models.push_subscription import PushSubscription
from agency_api.domain.models.user import User
from agency_api.domain.repositories.push_subscription_repository import PushSubscriptionRepository
from agency_api.infrastructure.push.push_service import PushNotificationService


logger = logging.getLogger(__name__)


class SubscribePushUseCase(AuthorizedUseCase):
    """
    Register a browser endpoint for the user.
    An endpoint already on file is re-activated and moves to the caller.
    """

    def __init__(self, subscription_repository: PushSubscriptionRepository):
        super().__init__()
        self.subscription_repository = subscription_repository

    async def execute(self, user: User, request: SubscribeRequestDTO) -> PushSubscription:
        keys = request.keys
        if not request.endpoint or keys is None or not keys.p256dh or not keys.auth:
            raise ValidationError("Invalid subscription data", "subscription")

        subscription = self.subscription_repository.get_by_endpoint(request.endpoint)
        if subscription:
            subscription.reassign(user.id, keys.p256dh, keys.auth)
        else:
            subscription = PushSubscription(
                user_id=user.id,
                endpoint=request.endpoint,
                p256dh=keys.p256dh,
                auth=keys.auth,
            )
            subscription.validate()

        saved = self.subscription_repository.save(subscription)
        logger.info(f"Push subscription {saved.id} registered for {user.id}")
        return saved


class UnsubscribePushUseCase(AuthorizedUseCase):

    def __init__(self, subscription_repository: PushSubscriptionRepository):
        super().__init__()
        self.subscription_repository = subscription_repository

    async def execute(self, user: User, request: UnsubscribeRequestDTO) -> None:
        if not self.subscription_repository.delete_for_user(user.id, request.endpoint):
            raise EntityNotFoundError("Subscription", message="Subscription not found")


class SendPushToUserUseCase(AuthorizedUseCase):
    """Admin pushes a message straight to every active endpoint of one user."""

    def __init__(
        self,
        subscription_repository: PushSubscriptionRepository,
        push_service: PushNotificationService,
    ):
        super().__init__()
        self.subscription_repository = subscription_repository
        self.push_service = push_service

    async def execute(self, user: User, request: SendPushRequestDTO) -> PushSendResultDTO:
        self._require_admin(user)

        subscriptions = self.subscription_repository.list_active_for_users([request.user_id])
        if not subscriptions:
            raise EntityNotFoundError(
                "Subscription", message="User has no active push subscriptions"
            )

        payload = self.push_service.build_payload(request.title, request.body, request.data)
        results = await self.push_service.send_to_many(
            [subscription.to_subscription_info() for subscription in subscriptions],
            payload,
        )
        sent = sum(1 for result in results if result.get("success"))
        return PushSendResultDTO(results=results, sent=sent, failed=len(results) - sent)

