"""Contact repository interface."""

from abc import ABC, abstractmethod
from typing import List, Optional

from agency_api.domain.models.contact import Contact, ContactStatus


class ContactRepository(ABC):

    @abstractmethod
    def save(self, contact: Contact) -> Contact:
        pass

    @abstractmethod
    def get_by_id(self, contact_id: str) -> Optional[Contact]:
        pass

    @abstractmethod
    def list(self, status: Optional[ContactStatus] = None) -> List[Contact]:
        pass

    @abstractmethod
    def delete(self, contact_id: str) -> bool:
        pass
