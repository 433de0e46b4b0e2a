"""
Contact repository implementation using SQLAlchemy.
"""

from typing import Optional, List
from sqlalchemy.orm import Session
from sqlalchemy import desc

from agency_api.domain.models.base import EntityNotFoundError, new_id
from agency_api.domain.models.contact import Contact, ContactStatus
from agency_api.domain.repositories.contact_repository import ContactRepository
from agency_api.infrastructure.db.models import ContactModel
from agency_api.infrastructure.mappers.contact_mapper import ContactMapper


class SQLAlchemyContactRepository(ContactRepository):

    def __init__(self, session: Session):
        self.session = session
        self.mapper = ContactMapper()

    def save(self, contact: Contact) -> Contact:
        if contact.is_new:
            contact.id = new_id()
            self.session.add(self.mapper.domain_to_model(contact))
        else:
            model = self.session.query(ContactModel).filter_by(id=contact.id).first()
            if not model:
                raise EntityNotFoundError("Contact", contact.id)
            self.mapper.update_model(model, contact)

        self.session.flush()
        return contact

    def get_by_id(self, contact_id: str) -> Optional[Contact]:
        model = self.session.query(ContactModel).filter_by(id=contact_id).first()
        return self.mapper.model_to_domain(model) if model else None

    def list(self, status: Optional[ContactStatus] = None) -> List[Contact]:
        query = self.session.query(ContactModel)
        if status:
            query = query.filter(ContactModel.status == status)
        models = query.order_by(desc(ContactModel.created_at)).all()
        return [self.mapper.model_to_domain(model) for model in models]

    def delete(self, contact_id: str) -> bool:
        model = self.session.query(ContactModel).filter_by(id=contact_id).first()
        if not model:
            return False

        self.session.delete(model)
        self.session.flush()
        return True
