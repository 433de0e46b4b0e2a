"""
Web-push DTOs.
"""

from typing import Any, Dict, List, Optional
from pydantic import BaseModel, Field

from .base_dto import BaseDTO, RequestDTO


class SubscriptionKeysDTO(BaseModel):
    p256dh: Optional[str] = None
    auth: Optional[str] = None


class SubscribeRequestDTO(BaseDTO):
    """Browser PushSubscription as serialised by the service worker."""

    endpoint: Optional[str] = None
    keys: Optional[SubscriptionKeysDTO] = None
    expiration_time: Optional[float] = Field(default=None, alias="expirationTime")


class UnsubscribeRequestDTO(RequestDTO):
    endpoint: str = Field(min_length=1)


class SendPushRequestDTO(RequestDTO):
    user_id: str = Field(min_length=1)
    title: str = Field(min_length=1, max_length=100)
    body: str = Field(min_length=1, max_length=500)
    data: Dict[str, Any] = Field(default_factory=dict)


class PushSendResultDTO(BaseModel):
    results: List[Dict[str, Any]]
    sent: int
    failed: int


class VapidKeyDTO(BaseModel):
    public_key: Optional[str] = None
