"""Message repository interface."""

from abc import ABC, abstractmethod
from typing import List, Optional

from agency_api.domain.models.base import UserRole
from agency_api.domain.models.message import Message, MessageStatus


class MessageRepository(ABC):

    @abstractmethod
    def save(self, message: Message) -> Message:
        pass

    @abstractmethod
    def get_by_id(self, message_id: str) -> Optional[Message]:
        pass

    @abstractmethod
    def list(
        self,
        to_role: Optional[UserRole] = None,
        participant_id: Optional[str] = None,
        status: Optional[MessageStatus] = None,
        offset: int = 0,
        limit: int = 20,
    ) -> List[Message]:
        """
        Newest first. to_role selects the admin inbox; participant_id selects
        the messages a user sent or received.
        """
        pass

    @abstractmethod
    def count(
        self,
        to_role: Optional[UserRole] = None,
        participant_id: Optional[str] = None,
        status: Optional[MessageStatus] = None,
    ) -> int:
        pass

    @abstractmethod
    def count_unread(self, to_role: Optional[UserRole] = None, to_id: Optional[str] = None) -> int:
        pass

    @abstractmethod
    def delete(self, message_id: str) -> bool:
        pass
