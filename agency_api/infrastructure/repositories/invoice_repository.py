"""
Invoice repository implementation using SQLAlchemy.
"""

from typing import Optional, List
from sqlalchemy.orm import Session
from sqlalchemy import func, or_, desc

from agency_api.domain.models.base import EntityNotFoundError, DuplicateEntityError, new_id
from agency_api.domain.models.invoice import Invoice, InvoiceStatus
from agency_api.domain.repositories.invoice_repository import InvoiceRepository as InvoiceRepositoryInterface
from agency_api.infrastructure.db.models import InvoiceModel, ProjectModel
from agency_api.infrastructure.mappers.invoice_mapper import InvoiceMapper


class SQLAlchemyInvoiceRepository(InvoiceRepositoryInterface):
    """SQLAlchemy implementation of invoice repository."""

    def __init__(self, session: Session):
        self.session = session
        self.mapper = InvoiceMapper()

    def save(self, invoice: Invoice) -> Invoice:
        """Save an invoice entity."""
        invoice.recalculate_totals()

        if invoice.is_new:
            # Check for duplicate invoice number
            existing = self.session.query(InvoiceModel.id).filter_by(
                invoice_number=invoice.invoice_number
            ).first()
            if existing:
                raise DuplicateEntityError("Invoice", "invoice_number", invoice.invoice_number)

            invoice.id = new_id()
            self.session.add(self.mapper.domain_to_model(invoice))
        else:
            model = self.session.query(InvoiceModel).filter_by(id=invoice.id).first()
            if not model:
                raise EntityNotFoundError("Invoice", invoice.id)
            self.mapper.update_model(model, invoice)

        self.session.flush()
        return invoice

    def get_by_id(self, invoice_id: str) -> Optional[Invoice]:
        """Get invoice by ID."""
        model = self.session.query(InvoiceModel).filter_by(id=invoice_id).first()
        return self.mapper.model_to_domain(model) if model else None

    def list(
        self,
        client_id: Optional[str] = None,
        status: Optional[InvoiceStatus] = None,
        search: Optional[str] = None,
    ) -> List[Invoice]:
        query = self.session.query(InvoiceModel)

        if client_id:
            query = query.filter(InvoiceModel.client_id == client_id)
        if status:
            query = query.filter(InvoiceModel.status == status)
        if search:
            pattern = f"%{search.strip()}%"
            query = query.outerjoin(ProjectModel, InvoiceModel.project_id == ProjectModel.id).filter(
                or_(
                    InvoiceModel.invoice_number.ilike(pattern),
                    InvoiceModel.description.ilike(pattern),
                    ProjectModel.title.ilike(pattern),
                )
            )

        models = query.order_by(desc(InvoiceModel.created_at)).all()
        return [self.mapper.model_to_domain(model) for model in models]

    def count(self) -> int:
        """Get total invoice count."""
        return self.session.query(func.count(InvoiceModel.id)).scalar() or 0

    def delete(self, invoice_id: str) -> bool:
        """Delete invoice by ID."""
        model = self.session.query(InvoiceModel).filter_by(id=invoice_id).first()
        if not model:
            return False

        self.session.delete(model)
        self.session.flush()
        return True
