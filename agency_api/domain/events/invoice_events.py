"""
Domain events related to invoices.
Events carry the addresses and figures their handlers need, so handlers
never go back to the store.
"""

from typing import Dict, Any, Optional
from dataclasses import dataclass, field

from .base import DomainEvent


@dataclass
class InvoiceCreated(DomainEvent):
    """Event fired when an admin raises a new invoice."""

    invoice: Dict[str, Any]
    client_name: str
    client_email: str
    project_title: str

    def _get_event_data(self) -> Dict[str, Any]:
        return {
            "invoice_id": self.invoice.get("id"),
            "invoice_number": self.invoice.get("invoice_number"),
            "client_email": self.client_email,
            "project_title": self.project_title,
        }


@dataclass
class InvoiceStatusChanged(DomainEvent):
    """Event fired when an admin moves an invoice to another status."""

    invoice: Dict[str, Any]
    old_status: str
    new_status: str
    client_name: str
    client_email: str
    project_title: str

    def _get_event_data(self) -> Dict[str, Any]:
        return {
            "invoice_id": self.invoice.get("id"),
            "invoice_number": self.invoice.get("invoice_number"),
            "old_status": self.old_status,
            "new_status": self.new_status,
        }


@dataclass
class PaymentReported(DomainEvent):
    """Event fired when a client reports having paid an invoice."""

    invoice: Dict[str, Any]
    client_name: str
    client_email: str
    project_title: str
    payment: Dict[str, Any] = field(default_factory=dict)

    def _get_event_data(self) -> Dict[str, Any]:
        return {
            "invoice_id": self.invoice.get("id"),
            "invoice_number": self.invoice.get("invoice_number"),
            "payment_method": self.payment.get("payment_method"),
            "transaction_id": self.payment.get("transaction_id"),
        }
