"""
Push subscription domain model.
A browser endpoint registered for web-push delivery.
"""

from dataclasses import dataclass
from datetime import datetime
from typing import Optional, Dict, Any

from agency_api.domain.models.base import BaseEntity, ValidationError, utcnow


@dataclass(eq=False)
class PushSubscription(BaseEntity):
    """Web-push endpoint with its encryption keys."""

    user_id: str
    endpoint: str
    p256dh: str
    auth: str
    is_active: bool = True
    last_used_at: Optional[datetime] = None

    def __post_init__(self):
        super().__post_init__()
        if self.last_used_at is None:
            self.last_used_at = self.created_at

    def validate(self) -> None:
        if not self.endpoint or not self.p256dh or not self.auth:
            raise ValidationError("Invalid subscription data", "subscription")

    def reassign(self, user_id: str, p256dh: str, auth: str) -> None:
        """Re-activate the endpoint for the user that registered it last."""
        self.user_id = user_id
        self.p256dh = p256dh
        self.auth = auth
        self.is_active = True
        self.last_used_at = utcnow()
        self.mark_as_updated()

    def to_subscription_info(self) -> Dict[str, Any]:
        """Shape expected by the web-push protocol library."""
        return {
            "endpoint": self.endpoint,
            "keys": {"p256dh": self.p256dh, "auth": self.auth},
        }
