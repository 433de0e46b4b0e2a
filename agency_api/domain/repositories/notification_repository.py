"""Notification repository interface."""

from abc import ABC, abstractmethod
from datetime import datetime
from typing import List, Optional, Dict, Any

from agency_api.domain.models.notification import Notification, NotificationType


class NotificationRepository(ABC):
    """Persistence contract for in-app notifications."""

    @abstractmethod
    def save(self, notification: Notification) -> Notification:
        pass

    @abstractmethod
    def save_many(self, notifications: List[Notification]) -> List[Notification]:
        """
        Insert several notifications in one flush.
        No transaction spans the batch beyond the request session.
        """
        pass

    @abstractmethod
    def save_isolated(self, notifications: List[Notification]) -> List[Notification]:
        """
        Insert notifications inside a savepoint.
        A failure rolls back only these rows and leaves the caller's pending work usable.
        """
        pass

    @abstractmethod
    def get_by_id(self, notification_id: str) -> Optional[Notification]:
        pass

    @abstractmethod
    def list_for_recipient(
        self,
        recipient_id: str,
        now: datetime,
        unread_only: bool = False,
        notification_type: Optional[NotificationType] = None,
        offset: int = 0,
        limit: int = 20,
    ) -> List[Notification]:
        """Newest first; notifications expired at `now` are left out."""
        pass

    @abstractmethod
    def count_for_recipient(
        self,
        recipient_id: str,
        now: datetime,
        unread_only: bool = False,
        notification_type: Optional[NotificationType] = None,
    ) -> int:
        pass

    @abstractmethod
    def mark_all_read(self, recipient_id: str, read_at: datetime) -> int:
        """Flag every unread notification of the recipient; returns the count."""
        pass

    @abstractmethod
    def list_by_sender(self, sender_id: str, limit: int = 500) -> List[Notification]:
        pass

    @abstractmethod
    def stats(self) -> Dict[str, Any]:
        """Totals plus counts grouped by type and by priority."""
        pass

    @abstractmethod
    def delete(self, notification_id: str) -> bool:
        pass

    @abstractmethod
    def purge_expired(self, now: datetime) -> int:
        """Delete notifications whose expiry is in the past."""
        pass
