"""
FastAPI dependencies for the web layer.
Repositories are bound to the request's session; services live on app.state.
"""

from typing import Annotated

from fastapi import Depends, Request
from sqlalchemy.orm import Session

from agency_api.domain.events.base import EventDispatcher
from agency_api.domain.models.base import ValidationError
from agency_api.infrastructure.db.database import get_db
from agency_api.infrastructure.email.email_service import EmailService
from agency_api.infrastructure.push.push_service import PushNotificationService
from agency_api.infrastructure.repositories import (
    SQLAlchemyContactRepository,
    SQLAlchemyFeedbackRepository,
    SQLAlchemyInvoiceRepository,
    SQLAlchemyMessageRepository,
    SQLAlchemyNotificationRepository,
    SQLAlchemyProjectRepository,
    SQLAlchemyPushSubscriptionRepository,
    SQLAlchemyUserRepository,
)


DbSession = Annotated[Session, Depends(get_db)]


def get_user_repository(db: DbSession) -> SQLAlchemyUserRepository:
    return SQLAlchemyUserRepository(db)


def get_project_repository(db: DbSession) -> SQLAlchemyProjectRepository:
    return SQLAlchemyProjectRepository(db)


def get_invoice_repository(db: DbSession) -> SQLAlchemyInvoiceRepository:
    return SQLAlchemyInvoiceRepository(db)


def get_notification_repository(db: DbSession) -> SQLAlchemyNotificationRepository:
    return SQLAlchemyNotificationRepository(db)


def get_message_repository(db: DbSession) -> SQLAlchemyMessageRepository:
    return SQLAlchemyMessageRepository(db)


def get_push_subscription_repository(db: DbSession) -> SQLAlchemyPushSubscriptionRepository:
    return SQLAlchemyPushSubscriptionRepository(db)


def get_contact_repository(db: DbSession) -> SQLAlchemyContactRepository:
    return SQLAlchemyContactRepository(db)


def get_feedback_repository(db: DbSession) -> SQLAlchemyFeedbackRepository:
    return SQLAlchemyFeedbackRepository(db)


def get_dispatcher(request: Request) -> EventDispatcher:
    """Dispatcher built at startup with every delivery handler registered."""
    return request.app.state.dispatcher


def get_email_service(request: Request) -> EmailService:
    return request.app.state.email_service


def get_push_service(request: Request) -> PushNotificationService:
    return request.app.state.push_service


UserRepo = Annotated[SQLAlchemyUserRepository, Depends(get_user_repository)]
ProjectRepo = Annotated[SQLAlchemyProjectRepository, Depends(get_project_repository)]
InvoiceRepo = Annotated[SQLAlchemyInvoiceRepository, Depends(get_invoice_repository)]
NotificationRepo = Annotated[SQLAlchemyNotificationRepository, Depends(get_notification_repository)]
MessageRepo = Annotated[SQLAlchemyMessageRepository, Depends(get_message_repository)]
PushSubscriptionRepo = Annotated[SQLAlchemyPushSubscriptionRepository, Depends(get_push_subscription_repository)]
ContactRepo = Annotated[SQLAlchemyContactRepository, Depends(get_contact_repository)]
FeedbackRepo = Annotated[SQLAlchemyFeedbackRepository, Depends(get_feedback_repository)]
Dispatcher = Annotated[EventDispatcher, Depends(get_dispatcher)]
PushService = Annotated[PushNotificationService, Depends(get_push_service)]


def parse_filter(enum_cls, value, field: str):
    """Turn a query-string filter into an enum member; empty or "all" means no filter."""
    if value is None or value == "" or value == "all":
        return None
    try:
        return enum_cls(value)
    except ValueError:
        raise ValidationError(f"Invalid {field}: {value}", field)
