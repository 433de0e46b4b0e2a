"""
Notification router.
Admin fan-out, public callback requests and each user's notification inbox.
"""

from typing import Any, Dict, List, Optional

from fastapi import APIRouter, Query, status

from agency_api.application.dto.base_dto import ApiResponse, CountResponseDTO
from agency_api.application.dto.notification_dto import (
    BroadcastRequestDTO,
    CallbackRequestDTO,
    ClientRequestDTO,
    NotificationListResponseDTO,
    NotificationResponseDTO,
    NotificationStatsDTO,
    SendNotificationRequestDTO,
    SendResultDTO,
    SentNotificationGroupDTO,
)
from agency_api.application.use_cases.notification_use_cases import (
    BroadcastNotificationUseCase,
    DeleteNotificationUseCase,
    ListNotificationsUseCase,
    ListSentNotificationsUseCase,
    MarkAllNotificationsReadUseCase,
    MarkNotificationReadUseCase,
    NotificationStatsUseCase,
    SendCallbackRequestUseCase,
    SendClientRequestUseCase,
    SendNotificationUseCase,
)
from agency_api.domain.models.notification import NotificationType
from agency_api.infrastructure.auth import AdminUser, CurrentUser
from agency_api.infrastructure.web.dependencies import (
    Dispatcher,
    NotificationRepo,
    PushSubscriptionRepo,
    UserRepo,
    parse_filter,
)


router = APIRouter()


@router.get("", response_model=ApiResponse[NotificationListResponseDTO])
async def list_notifications(
    user: CurrentUser,
    notifications: NotificationRepo,
    page: int = Query(1, ge=1),
    limit: int = Query(20, ge=1, le=100),
    unread_only: bool = Query(False),
    type_filter: Optional[str] = Query(None, alias="type"),
):
    """The caller's notifications, newest first. Expired ones are left out."""
    use_case = ListNotificationsUseCase(notifications)
    data = await use_case.execute(
        user, page, limit, unread_only, parse_filter(NotificationType, type_filter, "type")
    )
    return ApiResponse(data=data)


@router.post("", status_code=status.HTTP_201_CREATED, response_model=ApiResponse[SendResultDTO])
async def send_notification(
    request: SendNotificationRequestDTO,
    user: AdminUser,
    notifications: NotificationRepo,
    users: UserRepo,
    subscriptions: PushSubscriptionRepo,
    dispatcher: Dispatcher,
):
    """
    Send a notification to selected clients.

    - **recipients**: Client ids; ids that are not clients are ignored
    - **title** / **message**: Notification content (required)
    - **type**: info, success, warning, error, project_update, payment, message or system
    - **priority**: low, medium, high or urgent
    """
    use_case = SendNotificationUseCase(notifications, users, subscriptions, dispatcher)
    count = await use_case.execute(user, request)
    return ApiResponse(message=f"Notification sent to {count} recipient(s)", data=SendResultDTO(count=count))


@router.post("/broadcast", status_code=status.HTTP_201_CREATED, response_model=ApiResponse[SendResultDTO])
async def broadcast_notification(
    request: BroadcastRequestDTO,
    user: AdminUser,
    notifications: NotificationRepo,
    users: UserRepo,
    subscriptions: PushSubscriptionRepo,
    dispatcher: Dispatcher,
):
    """Send a notification to every active client."""
    use_case = BroadcastNotificationUseCase(notifications, users, subscriptions, dispatcher)
    count = await use_case.execute(user, request)
    return ApiResponse(message=f"Broadcast sent to {count} recipient(s)", data=SendResultDTO(count=count))


@router.post("/callback", response_model=ApiResponse[SendResultDTO])
async def request_callback(
    request: CallbackRequestDTO,
    notifications: NotificationRepo,
    users: UserRepo,
    subscriptions: PushSubscriptionRepo,
    dispatcher: Dispatcher,
):
    """Public callback request; every admin is notified and pushed."""
    use_case = SendCallbackRequestUseCase(notifications, users, subscriptions, dispatcher)
    count = await use_case.execute(request)
    return ApiResponse(
        message="Callback request sent successfully! We'll get back to you soon.",
        data=SendResultDTO(count=count),
    )


@router.post("/request", response_model=ApiResponse[Dict[str, Any]])
async def send_request(
    request: ClientRequestDTO,
    user: CurrentUser,
    notifications: NotificationRepo,
    users: UserRepo,
    dispatcher: Dispatcher,
):
    """Send a request to the admins. Meeting requests with an email get a confirmation."""
    use_case = SendClientRequestUseCase(notifications, users, dispatcher=dispatcher)
    data = await use_case.execute(user, request)
    message = f"Request sent to {data['recipient_count']} admin(s) successfully"
    if data["email_sent"]:
        message += ". Confirmation email sent!"
    return ApiResponse(message=message, data=data)


@router.put("/read-all", response_model=ApiResponse[CountResponseDTO])
async def mark_all_read(user: CurrentUser, notifications: NotificationRepo):
    data = await MarkAllNotificationsReadUseCase(notifications).execute(user)
    return ApiResponse(message="All notifications marked as read", data=data)


@router.get("/sent", response_model=ApiResponse[List[SentNotificationGroupDTO]])
async def list_sent_notifications(
    user: AdminUser,
    notifications: NotificationRepo,
    users: UserRepo,
    type_filter: Optional[str] = Query(None, alias="type"),
):
    """Notifications sent by the caller, one entry per send."""
    use_case = ListSentNotificationsUseCase(notifications, users)
    data = await use_case.execute(user, parse_filter(NotificationType, type_filter, "type"))
    return ApiResponse(data=data)


@router.get("/stats", response_model=ApiResponse[NotificationStatsDTO])
async def notification_stats(user: AdminUser, notifications: NotificationRepo):
    return ApiResponse(data=await NotificationStatsUseCase(notifications).execute(user))


@router.put("/{notification_id}/read", response_model=ApiResponse[NotificationResponseDTO])
async def mark_read(notification_id: str, user: CurrentUser, notifications: NotificationRepo):
    data = await MarkNotificationReadUseCase(notifications).execute(user, notification_id)
    return ApiResponse(message="Notification marked as read", data=data)


@router.delete("/{notification_id}", response_model=ApiResponse[None])
async def delete_notification(notification_id: str, user: CurrentUser, notifications: NotificationRepo):
    await DeleteNotificationUseCase(notifications).execute(user, notification_id)
    return ApiResponse(message="Notification deleted successfully")
