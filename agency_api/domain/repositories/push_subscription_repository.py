"""Push subscription repository interface."""

from abc import ABC, abstractmethod
from typing import List, Optional

from agency_api.domain.models.push_subscription import PushSubscription


class PushSubscriptionRepository(ABC):

    @abstractmethod
    def save(self, subscription: PushSubscription) -> PushSubscription:
        pass

    @abstractmethod
    def get_by_endpoint(self, endpoint: str) -> Optional[PushSubscription]:
        pass

    @abstractmethod
    def list_active_for_users(self, user_ids: List[str]) -> List[PushSubscription]:
        pass

    @abstractmethod
    def delete_for_user(self, user_id: str, endpoint: str) -> bool:
        pass
