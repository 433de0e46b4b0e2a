"""
Invoice domain model.
Represents invoices raised by an admin against a client's project.
"""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional, List, Dict, Any, Iterable
from enum import Enum

from agency_api.domain.models.base import (
    BaseEntity,
    ValidationError,
    utcnow,
)


class InvoiceStatus(str, Enum):
    """Invoice status."""
    DRAFT = "draft"
    SENT = "sent"
    PAID = "paid"
    OVERDUE = "overdue"
    CANCELLED = "cancelled"


class PaymentMethod(str, Enum):
    """Payment method."""
    BANK_TRANSFER = "bank_transfer"
    CREDIT_CARD = "credit_card"
    PAYPAL = "paypal"
    MOBILE_MONEY = "mobile_money"
    CASH = "cash"
    CHECK = "check"
    OTHER = "other"


# Statuses a client may report a payment against
PAYMENT_REPORTABLE_STATUSES = (InvoiceStatus.SENT, InvoiceStatus.OVERDUE)


@dataclass
class InvoiceLineItem:
    """Individual line item in an invoice."""

    description: str
    quantity: float = 1
    rate: float = 0
    amount: Optional[float] = None

    def __post_init__(self):
        # Auto-calculate amount if not provided
        if self.amount is None:
            self.amount = (self.quantity or 0) * (self.rate or 0)

    def validate(self) -> None:
        """Validate line item."""
        if self.quantity is not None and self.quantity < 0:
            raise ValidationError("Quantity cannot be negative", "quantity")

        if self.rate is not None and self.rate < 0:
            raise ValidationError("Rate cannot be negative", "rate")

    def to_dict(self) -> dict:
        """Convert to dictionary."""
        return {
            "description": self.description,
            "quantity": self.quantity,
            "rate": self.rate,
            "amount": self.amount,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "InvoiceLineItem":
        return cls(
            description=data.get("description") or "",
            quantity=data.get("quantity", 1),
            rate=data.get("rate", 0),
            amount=data.get("amount"),
        )


@dataclass(frozen=True)
class InvoiceTotals:
    """Derived financial fields of an invoice."""

    subtotal: float
    tax_amount: float
    total: float


def compute_invoice_totals(items: Iterable[InvoiceLineItem], tax_rate: float) -> InvoiceTotals:
    """
    Compute subtotal, tax and total from line items.

    subtotal is the sum of item amounts, tax_amount is subtotal * tax_rate / 100
    and total is subtotal + tax_amount.
    """
    subtotal = sum((item.amount or 0) for item in items)
    tax_amount = subtotal * ((tax_rate or 0) / 100)
    return InvoiceTotals(
        subtotal=subtotal,
        tax_amount=tax_amount,
        total=subtotal + tax_amount,
    )


@dataclass(eq=False)
class Invoice(BaseEntity):
    """
    Invoice aggregate root.
    Financial fields are derived from the line items on every save.
    """

    client_id: str
    project_id: str
    amount: float
    due_date: datetime
    description: str
    invoice_number: Optional[str] = None
    issue_date: Optional[datetime] = None
    status: InvoiceStatus = InvoiceStatus.DRAFT
    payment_date: Optional[datetime] = None
    payment_method: Optional[PaymentMethod] = None
    items: List[InvoiceLineItem] = field(default_factory=list)
    tax_rate: float = 0
    tax_amount: float = 0
    subtotal: float = 0
    total: float = 0
    notes: Optional[str] = None

    def __post_init__(self):
        """Initialize invoice after creation."""
        super().__post_init__()
        if self.issue_date is None:
            self.issue_date = self.created_at
        if isinstance(self.status, str):
            self.status = InvoiceStatus(self.status)
        if isinstance(self.payment_method, str):
            self.payment_method = PaymentMethod(self.payment_method)
        if not self.items:
            self.items = [self.default_line_item()]
        self.recalculate_totals()

    @classmethod
    def create(
        cls,
        client_id: str,
        project_id: str,
        amount: float,
        due_date: datetime,
        description: str,
        items: Optional[List[InvoiceLineItem]] = None,
        tax_rate: Optional[float] = None,
        notes: Optional[str] = None,
    ) -> "Invoice":
        """Build a draft invoice; a missing item list becomes one line equal to amount."""
        invoice = cls(
            client_id=client_id,
            project_id=project_id,
            amount=amount,
            due_date=due_date,
            description=description,
            items=list(items or []),
            tax_rate=tax_rate or 0,
            notes=notes,
        )
        invoice.validate()
        return invoice

    def default_line_item(self) -> InvoiceLineItem:
        return InvoiceLineItem(
            description=self.description,
            quantity=1,
            rate=self.amount,
            amount=self.amount,
        )

    def recalculate_totals(self) -> InvoiceTotals:
        """Recompute subtotal, tax and total from the line items."""
        totals = compute_invoice_totals(self.items, self.tax_rate)
        self.subtotal = totals.subtotal
        self.tax_amount = totals.tax_amount
        self.total = totals.total
        return totals

    def validate(self) -> None:
        """Validate invoice state."""
        if not self.client_id:
            raise ValidationError("Client ID is required", "client_id")

        if not self.project_id:
            raise ValidationError("Project ID is required", "project_id")

        if not self.description or not self.description.strip():
            raise ValidationError("Description is required", "description")

        if self.due_date is None:
            raise ValidationError("Valid due date is required", "due_date")

        if self.tax_rate is not None and self.tax_rate < 0:
            raise ValidationError("Tax rate cannot be negative", "tax_rate")

        for item in self.items:
            item.validate()

    def change_status(
        self,
        status: InvoiceStatus,
        payment_method: Optional[PaymentMethod] = None,
    ) -> None:
        """
        Move the invoice to a new status.

        Any status may follow any other; marking paid stamps the payment date.
        """
        self.status = InvoiceStatus(status)
        if self.status == InvoiceStatus.PAID:
            self.payment_date = utcnow()
            if payment_method:
                self.payment_method = PaymentMethod(payment_method)
        self.mark_as_updated()

    def can_report_payment(self) -> bool:
        return self.status in PAYMENT_REPORTABLE_STATUSES

    @property
    def is_paid(self) -> bool:
        return self.status == InvoiceStatus.PAID

    @property
    def is_pending(self) -> bool:
        """Draft and sent invoices count as pending in billing summaries."""
        return self.status in (InvoiceStatus.DRAFT, InvoiceStatus.SENT)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        return {
            "id": self.id,
            "invoice_number": self.invoice_number,
            "client_id": self.client_id,
            "project_id": self.project_id,
            "amount": self.amount,
            "description": self.description,
            "due_date": self.due_date.isoformat() if self.due_date else None,
            "issue_date": self.issue_date.isoformat() if self.issue_date else None,
            "status": self.status.value,
            "payment_date": self.payment_date.isoformat() if self.payment_date else None,
            "payment_method": self.payment_method.value if self.payment_method else None,
            "items": [item.to_dict() for item in self.items],
            "tax_rate": self.tax_rate,
            "tax_amount": self.tax_amount,
            "subtotal": self.subtotal,
            "total": self.total,
            "notes": self.notes,
        }
