"""
Web-push router.
Browser subscription management and direct pushes by admins.
"""

from typing import Any, Dict

from fastapi import APIRouter

from agency_api.application.dto.base_dto import ApiResponse
from agency_api.application.dto.push_dto import (
    PushSendResultDTO,
    SendPushRequestDTO,
    SubscribeRequestDTO,
    UnsubscribeRequestDTO,
    VapidKeyDTO,
)
from agency_api.application.use_cases.push_use_cases import (
    SendPushToUserUseCase,
    SubscribePushUseCase,
    UnsubscribePushUseCase,
)
from agency_api.infrastructure.auth import AdminUser, CurrentUser
from agency_api.infrastructure.web.dependencies import PushService, PushSubscriptionRepo


router = APIRouter()


@router.get("/vapid-public-key", response_model=ApiResponse[VapidKeyDTO])
async def vapid_public_key(push_service: PushService):
    """Public key browsers need to create a subscription."""
    return ApiResponse(data=VapidKeyDTO(public_key=push_service.public_key))


@router.post("/subscribe", response_model=ApiResponse[Dict[str, Any]])
async def subscribe(request: SubscribeRequestDTO, user: CurrentUser, subscriptions: PushSubscriptionRepo):
    subscription = await SubscribePushUseCase(subscriptions).execute(user, request)
    return ApiResponse(
        message="Successfully subscribed to push notifications",
        data={"subscription_id": subscription.id},
    )


@router.delete("/unsubscribe", response_model=ApiResponse[None])
async def unsubscribe(request: UnsubscribeRequestDTO, user: CurrentUser, subscriptions: PushSubscriptionRepo):
    await UnsubscribePushUseCase(subscriptions).execute(user, request)
    return ApiResponse(message="Successfully unsubscribed from push notifications")


@router.post("/send", response_model=ApiResponse[PushSendResultDTO])
async def send_push(
    request: SendPushRequestDTO,
    user: AdminUser,
    subscriptions: PushSubscriptionRepo,
    push_service: PushService,
):
    """Push straight to every active endpoint of one user."""
    data = await SendPushToUserUseCase(subscriptions, push_service).execute(user, request)
    return ApiResponse(message="Push notifications sent", data=data)
