"""
Contact form router.
"""

from typing import List, Optional

from fastapi import APIRouter, Query, status

from agency_api.application.dto.base_dto import ApiResponse
from agency_api.application.dto.contact_dto import (
    ContactRequestDTO,
    ContactResponseDTO,
    UpdateContactStatusRequestDTO,
)
from agency_api.application.use_cases.contact_use_cases import (
    DeleteContactUseCase,
    ListContactsUseCase,
    SubmitContactUseCase,
    UpdateContactStatusUseCase,
)
from agency_api.application.use_cases.notification_use_cases import SendCallbackRequestUseCase
from agency_api.domain.models.contact import ContactStatus
from agency_api.infrastructure.auth import AdminUser
from agency_api.infrastructure.web.dependencies import (
    ContactRepo,
    Dispatcher,
    NotificationRepo,
    PushSubscriptionRepo,
    UserRepo,
    parse_filter,
)


router = APIRouter()


@router.post("", status_code=status.HTTP_201_CREATED, response_model=ApiResponse[ContactResponseDTO])
async def submit_contact(
    request: ContactRequestDTO,
    contacts: ContactRepo,
    notifications: NotificationRepo,
    users: UserRepo,
    subscriptions: PushSubscriptionRepo,
    dispatcher: Dispatcher,
):
    """Public contact form."""
    callback = SendCallbackRequestUseCase(notifications, users, subscriptions, dispatcher)
    use_case = SubmitContactUseCase(contacts, callback)
    data = await use_case.execute(request)
    return ApiResponse(message="Thank you for your message! We'll get back to you soon.", data=data)


@router.get("", response_model=ApiResponse[List[ContactResponseDTO]])
async def list_contacts(
    user: AdminUser,
    contacts: ContactRepo,
    status_filter: Optional[str] = Query(None, alias="status"),
):
    data = await ListContactsUseCase(contacts).execute(
        user, parse_filter(ContactStatus, status_filter, "status")
    )
    return ApiResponse(data=data)


@router.put("/{contact_id}/status", response_model=ApiResponse[ContactResponseDTO])
async def update_contact_status(
    contact_id: str,
    request: UpdateContactStatusRequestDTO,
    user: AdminUser,
    contacts: ContactRepo,
):
    data = await UpdateContactStatusUseCase(contacts).execute(user, contact_id, request)
    return ApiResponse(message="Contact status updated", data=data)


@router.delete("/{contact_id}", response_model=ApiResponse[None])
async def delete_contact(contact_id: str, user: AdminUser, contacts: ContactRepo):
    await DeleteContactUseCase(contacts).execute(user, contact_id)
    return ApiResponse(message="Contact deleted successfully")
