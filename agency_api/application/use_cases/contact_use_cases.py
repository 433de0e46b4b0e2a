"""
Contact form use cases.
"""

import logging
from typing import List, Optional

from agency_api.application.use_cases.base_use_case import AuthorizedUseCase, BaseUseCase
from agency_api.application.use_cases.notification_use_cases import SendCallbackRequestUseCase
from agency_api.application.dto.contact_dto import (
    ContactRequestDTO,
    ContactResponseDTO,
    UpdateContactStatusRequestDTO,
)
from agency_api.application.dto.notification_dto import CallbackRequestDTO
from agency_api.domain.models.base import BusinessRuleViolation, EntityNotFoundError
from agency_api.domain.models.contact import Contact, ContactStatus, ContactSubject
from agency_api.domain.models.user import User
from agency_api.domain.repositories.contact_repository import ContactRepository


logger = logging.getLogger(__name__)


class SubmitContactUseCase(BaseUseCase):
    """
    Store a public enquiry.
    Callback requests also reach every admin's notification inbox.
    """

    def __init__(
        self,
        contact_repository: ContactRepository,
        callback_use_case: Optional[SendCallbackRequestUseCase] = None,
    ):
        super().__init__()
        self.contact_repository = contact_repository
        self.callback_use_case = callback_use_case

    async def execute(self, request: ContactRequestDTO) -> ContactResponseDTO:
        contact = Contact(
            first_name=request.first_name,
            last_name=request.last_name,
            email=request.email,
            company=request.company,
            subject=ContactSubject(request.subject),
            message=request.message,
        )
        contact.validate()
        saved = self.contact_repository.save(contact)
        logger.info(f"Contact enquiry {saved.id} received ({saved.subject.value})")

        if saved.wants_callback and self.callback_use_case is not None:
            await self._request_callback(saved)

        return ContactResponseDTO.from_domain(saved)

    async def _request_callback(self, contact: Contact) -> None:
        details = f"{contact.full_name} ({contact.email}) asked to be called back: {contact.message}"
        try:
            await self.callback_use_case.execute(CallbackRequestDTO(
                title=f"Callback request from {contact.full_name}"[:100],
                message=details[:500],
            ))
        except BusinessRuleViolation as e:
            logger.warning(f"Callback request {contact.id} not forwarded: {e.message}")


class ListContactsUseCase(AuthorizedUseCase):

    def __init__(self, contact_repository: ContactRepository):
        super().__init__()
        self.contact_repository = contact_repository

    async def execute(self, user: User, status: Optional[ContactStatus] = None) -> List[ContactResponseDTO]:
        self._require_admin(user)
        return [ContactResponseDTO.from_domain(c) for c in self.contact_repository.list(status=status)]


class UpdateContactStatusUseCase(AuthorizedUseCase):

    def __init__(self, contact_repository: ContactRepository):
        super().__init__()
        self.contact_repository = contact_repository

    async def execute(
        self,
        user: User,
        contact_id: str,
        request: UpdateContactStatusRequestDTO,
    ) -> ContactResponseDTO:
        self._require_admin(user)
        contact = self._require_found(self.contact_repository.get_by_id(contact_id), "Contact", contact_id)

        contact.status = ContactStatus(request.status)
        if request.admin_notes:
            contact.admin_notes = request.admin_notes
        contact.mark_as_updated()
        return ContactResponseDTO.from_domain(self.contact_repository.save(contact))


class DeleteContactUseCase(AuthorizedUseCase):

    def __init__(self, contact_repository: ContactRepository):
        super().__init__()
        self.contact_repository = contact_repository

    async def execute(self, user: User, contact_id: str) -> None:
        self._require_admin(user)
        if not self.contact_repository.delete(contact_id):
            raise EntityNotFoundError("Contact", contact_id)
