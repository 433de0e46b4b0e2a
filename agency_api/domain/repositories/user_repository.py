"""
User repository interface.
Defines the contract for user persistence operations.
"""

from abc import ABC, abstractmethod
from typing import List, Optional

from agency_api.domain.models.base import UserRole
from agency_api.domain.models.user import User


class UserRepository(ABC):
    """Abstract user repository interface."""

    @abstractmethod
    def save(self, user: User) -> User:
        pass

    @abstractmethod
    def get_by_id(self, user_id: str) -> Optional[User]:
        pass

    @abstractmethod
    def get_by_email(self, email: str) -> Optional[User]:
        pass

    @abstractmethod
    def get_by_ids(self, user_ids: List[str], role: Optional[UserRole] = None) -> List[User]:
        """Existing users among the ids, optionally restricted to one role."""
        pass

    @abstractmethod
    def list_by_role(self, role: UserRole, active_only: bool = True) -> List[User]:
        pass
