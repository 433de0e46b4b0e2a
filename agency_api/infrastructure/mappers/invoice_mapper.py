"""
Invoice mapper for converting between domain entities and database models.
"""

from agency_api.domain.models.invoice import Invoice, InvoiceLineItem
from agency_api.infrastructure.db.models import InvoiceModel


class InvoiceMapper:
    """Maps between Invoice domain entity and InvoiceModel database model."""

    def domain_to_model(self, invoice: Invoice) -> InvoiceModel:
        """Convert Invoice domain entity to InvoiceModel."""
        model = InvoiceModel(id=invoice.id)
        self.update_model(model, invoice)
        return model

    def update_model(self, model: InvoiceModel, invoice: Invoice) -> None:
        """Copy every persisted field of the entity onto the model."""
        model.invoice_number = invoice.invoice_number
        model.client_id = invoice.client_id
        model.project_id = invoice.project_id
        model.amount = invoice.amount
        model.description = invoice.description
        model.status = invoice.status
        model.payment_method = invoice.payment_method
        model.notes = invoice.notes
        model.items = [item.to_dict() for item in invoice.items]
        model.tax_rate = invoice.tax_rate
        model.tax_amount = invoice.tax_amount
        model.subtotal = invoice.subtotal
        model.total = invoice.total
        model.issue_date = invoice.issue_date
        model.due_date = invoice.due_date
        model.payment_date = invoice.payment_date
        model.created_at = invoice.created_at
        model.updated_at = invoice.updated_at

    def model_to_domain(self, model: InvoiceModel) -> Invoice:
        """Convert InvoiceModel to Invoice domain entity."""
        return Invoice(
            id=model.id,
            invoice_number=model.invoice_number,
            client_id=model.client_id,
            project_id=model.project_id,
            amount=model.amount,
            description=model.description,
            status=model.status,
            payment_method=model.payment_method,
            notes=model.notes,
            items=[InvoiceLineItem.from_dict(item) for item in (model.items or [])],
            tax_rate=model.tax_rate or 0,
            issue_date=model.issue_date,
            due_date=model.due_date,
            payment_date=model.payment_date,
            created_at=model.created_at,
            updated_at=model.updated_at,
        )
