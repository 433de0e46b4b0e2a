"""
Contact form DTOs.
"""

from pydantic import EmailStr, Field

from agency_api.domain.models.contact import Contact, ContactStatus, ContactSubject
from .base_dto import RequestDTO, ResponseDTO


class ContactRequestDTO(RequestDTO):
    first_name: str = Field(min_length=1, max_length=50)
    last_name: str = Field(min_length=1, max_length=50)
    email: EmailStr
    company: str = Field(default="", max_length=100)
    subject: ContactSubject
    message: str = Field(min_length=10, max_length=2000)


class UpdateContactStatusRequestDTO(RequestDTO):
    status: ContactStatus
    admin_notes: str = Field(default="", max_length=1000)


class ContactResponseDTO(ResponseDTO):
    first_name: str
    last_name: str
    email: str
    company: str = ""
    subject: ContactSubject
    message: str
    status: ContactStatus
    admin_notes: str = ""

    @classmethod
    def from_domain(cls, contact: Contact) -> "ContactResponseDTO":
        return cls(
            id=contact.id,
            first_name=contact.first_name,
            last_name=contact.last_name,
            email=contact.email,
            company=contact.company,
            subject=contact.subject,
            message=contact.message,
            status=contact.status,
            admin_notes=contact.admin_notes,
            created_at=contact.created_at,
            updated_at=contact.updated_at,
        )
