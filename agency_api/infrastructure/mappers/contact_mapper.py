"""
Contact mapper.
"""

from agency_api.domain.models.contact import Contact
from agency_api.infrastructure.db.models import ContactModel


class ContactMapper:

    def domain_to_model(self, contact: Contact) -> ContactModel:
        model = ContactModel(id=contact.id)
        self.update_model(model, contact)
        return model

    def update_model(self, model: ContactModel, contact: Contact) -> None:
        model.first_name = contact.first_name
        model.last_name = contact.last_name
        model.email = contact.email
        model.company = contact.company
        model.subject = contact.subject
        model.message = contact.message
        model.status = contact.status
        model.admin_notes = contact.admin_notes
        model.created_at = contact.created_at
        model.updated_at = contact.updated_at

    def model_to_domain(self, model: ContactModel) -> Contact:
        return Contact(
            id=model.id,
            first_name=model.first_name,
            last_name=model.last_name,
            email=model.email,
            company=model.company or "",
            subject=model.subject,
            message=model.message,
            status=model.status,
            admin_notes=model.admin_notes or "",
            created_at=model.created_at,
            updated_at=model.updated_at,
        )
