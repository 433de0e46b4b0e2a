"""
Base use case classes for the application layer.
Provides common patterns and structure for use case implementations.
"""

import logging
from typing import Any, Optional, Tuple

from agency_api.domain.events.base import DomainEvent, EventDispatcher
from agency_api.domain.models.base import AuthorizationError, EntityNotFoundError, ValidationError
from agency_api.domain.models.user import User


logger = logging.getLogger(__name__)


class BaseUseCase:
    """
    Base class for all use cases.

    Use cases return domain objects and raise domain exceptions; the web
    layer maps both to HTTP responses.
    """

    def __init__(self, dispatcher: Optional[EventDispatcher] = None):
        self.dispatcher = dispatcher

    def _publish(self, event: DomainEvent) -> None:
        """Hand an event to the dispatcher without waiting for its handlers."""
        if self.dispatcher is None:
            logger.debug(f"No dispatcher configured, skipping {event.event_type}")
            return
        self.dispatcher.publish(event)

    @staticmethod
    def _require_found(entity: Any, entity_type: str, entity_id: Any = None) -> Any:
        if entity is None:
            raise EntityNotFoundError(entity_type, entity_id)
        return entity


class AuthorizedUseCase(BaseUseCase):
    """
    Use case acting on behalf of a signed-in user.
    """

    @staticmethod
    def _require_admin(user: User) -> None:
        if user is None or not user.is_admin:
            raise AuthorizationError("Admin access required")

    @staticmethod
    def _require_owner_or_admin(user: User, owner_id: Optional[str]) -> None:
        """Check if user is owner or an admin."""
        if user.is_admin:
            return
        if owner_id is None or user.id != owner_id:
            raise AuthorizationError("Access denied")

    @staticmethod
    def _scope_client_id(user: User) -> Optional[str]:
        """Clients only ever see their own records; admins see everything."""
        return None if user.is_admin else user.id


def normalize_page(page: int, limit: int, max_limit: int = 100) -> Tuple[int, int, int]:
    """Clamp page/limit and return (page, limit, offset)."""
    if page < 1:
        raise ValidationError("Page must be positive", "page")
    if limit < 1:
        raise ValidationError("Limit must be positive", "limit")
    limit = min(limit, max_limit)
    return page, limit, (page - 1) * limit
