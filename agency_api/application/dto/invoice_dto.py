"""
Invoice DTOs for the application layer.
"""

from typing import List, Optional
from datetime import datetime
from pydantic import BaseModel, Field

from agency_api.domain.models.invoice import (
    Invoice,
    InvoiceLineItem,
    InvoiceStatus,
    PaymentMethod,
)
from .base_dto import RequestDTO, ResponseDTO


class InvoiceItemDTO(BaseModel):
    """Line item as sent by the admin; amount defaults to quantity * rate."""

    description: str = Field(min_length=1, max_length=500)
    quantity: float = Field(default=1, ge=0)
    rate: float = Field(default=0, ge=0)
    amount: Optional[float] = Field(default=None, ge=0)

    def to_domain(self) -> InvoiceLineItem:
        return InvoiceLineItem(
            description=self.description,
            quantity=self.quantity,
            rate=self.rate,
            amount=self.amount,
        )


class CreateInvoiceRequestDTO(RequestDTO):
    """DTO for creating a new invoice."""

    project_id: str = Field(min_length=1, description="Project being invoiced")
    amount: float = Field(ge=0)
    due_date: datetime
    description: str = Field(min_length=1, max_length=1000)
    items: Optional[List[InvoiceItemDTO]] = None
    tax_rate: Optional[float] = Field(default=None, ge=0, le=100)
    notes: Optional[str] = Field(default=None, max_length=1000)


class UpdateInvoiceStatusRequestDTO(RequestDTO):
    status: InvoiceStatus
    payment_method: Optional[PaymentMethod] = None


class ReportPaymentRequestDTO(RequestDTO):
    """A client's statement that an invoice has been paid."""

    payment_method: Optional[PaymentMethod] = None
    transaction_id: Optional[str] = Field(default=None, max_length=100)
    payment_date: Optional[datetime] = None
    notes: Optional[str] = Field(default=None, max_length=500)


class InvoiceResponseDTO(ResponseDTO):
    """DTO for invoice response."""

    invoice_number: str
    client_id: str
    project_id: str
    project_title: Optional[str] = None
    amount: float
    description: str
    status: InvoiceStatus
    issue_date: Optional[datetime] = None
    due_date: datetime
    payment_date: Optional[datetime] = None
    payment_method: Optional[PaymentMethod] = None
    items: List[InvoiceItemDTO] = Field(default_factory=list)
    tax_rate: float = 0
    tax_amount: float = 0
    subtotal: float = 0
    total: float = 0
    notes: Optional[str] = None

    @classmethod
    def from_domain(cls, invoice: Invoice, project_title: Optional[str] = None) -> "InvoiceResponseDTO":
        return cls(
            id=invoice.id,
            invoice_number=invoice.invoice_number,
            client_id=invoice.client_id,
            project_id=invoice.project_id,
            project_title=project_title,
            amount=invoice.amount,
            description=invoice.description,
            status=invoice.status,
            issue_date=invoice.issue_date,
            due_date=invoice.due_date,
            payment_date=invoice.payment_date,
            payment_method=invoice.payment_method,
            items=[InvoiceItemDTO(**item.to_dict()) for item in invoice.items],
            tax_rate=invoice.tax_rate,
            tax_amount=invoice.tax_amount,
            subtotal=invoice.subtotal,
            total=invoice.total,
            notes=invoice.notes,
            created_at=invoice.created_at,
            updated_at=invoice.updated_at,
        )


class InvoiceSummaryResponseDTO(BaseModel):
    """Billing summary figures."""

    total_amount: float = 0
    paid_amount: float = 0
    pending_amount: float = 0
    overdue_amount: float = 0
    total_invoices: int = 0
    paid_invoices: int = 0
    pending_invoices: int = 0
    overdue_invoices: int = 0
