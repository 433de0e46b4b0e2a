"""
Unit tests for the Invoice domain model.
"""

import pytest
from datetime import datetime, timedelta

from agency_api.domain.models.base import ValidationError, utcnow
from agency_api.domain.models.invoice import (
    Invoice,
    InvoiceLineItem,
    InvoiceStatus,
    PaymentMethod,
    compute_invoice_totals,
)


def make_invoice(**overrides) -> Invoice:
    data = {
        "client_id": "client-1",
        "project_id": "project-1",
        "amount": 1000.0,
        "due_date": datetime(2030, 1, 31),
        "description": "Website build",
    }
    data.update(overrides)
    return Invoice.create(**data)


class TestInvoiceTotals:
    """Derived financial fields."""

    def test_items_and_tax(self):
        """Subtotal sums the items and tax is a percentage of it."""
        invoice = make_invoice(
            items=[
                InvoiceLineItem(description="Design", quantity=2, rate=250),
                InvoiceLineItem(description="Hosting", quantity=1, rate=100),
            ],
            tax_rate=10,
        )

        assert invoice.subtotal == 600
        assert invoice.tax_amount == pytest.approx(60)
        assert invoice.total == pytest.approx(660)

    def test_missing_items_become_single_line(self):
        """Without items the whole amount is invoiced as one line."""
        invoice = make_invoice(amount=450.0)

        assert len(invoice.items) == 1
        assert invoice.items[0].description == "Website build"
        assert invoice.items[0].amount == 450.0
        assert invoice.subtotal == 450.0
        assert invoice.total == 450.0

    def test_explicit_item_amount_wins(self):
        """An explicit amount is kept even when it differs from quantity * rate."""
        item = InvoiceLineItem(description="Discounted", quantity=3, rate=100, amount=250)

        totals = compute_invoice_totals([item], 0)

        assert totals.subtotal == 250
        assert totals.total == 250

    def test_new_invoice_is_draft(self):
        invoice = make_invoice()

        assert invoice.status == InvoiceStatus.DRAFT
        assert invoice.issue_date == invoice.created_at

    def test_negative_quantity_rejected(self):
        with pytest.raises(ValidationError, match="Quantity cannot be negative"):
            make_invoice(items=[InvoiceLineItem(description="Bad", quantity=-1, rate=10)])

    def test_description_required(self):
        with pytest.raises(ValidationError, match="Description is required"):
            make_invoice(description="   ")


class TestInvoiceStatus:
    """Status changes and payment reporting."""

    def test_any_transition_is_allowed(self):
        """A cancelled invoice can be moved back to draft."""
        invoice = make_invoice()
        invoice.change_status(InvoiceStatus.CANCELLED)
        invoice.change_status(InvoiceStatus.DRAFT)

        assert invoice.status == InvoiceStatus.DRAFT

    def test_paid_stamps_payment(self):
        invoice = make_invoice()
        before = utcnow() - timedelta(seconds=1)

        invoice.change_status(InvoiceStatus.PAID, PaymentMethod.PAYPAL)

        assert invoice.is_paid
        assert invoice.payment_date >= before
        assert invoice.payment_method == PaymentMethod.PAYPAL

    @pytest.mark.parametrize("status,allowed", [
        (InvoiceStatus.DRAFT, False),
        (InvoiceStatus.SENT, True),
        (InvoiceStatus.OVERDUE, True),
        (InvoiceStatus.PAID, False),
        (InvoiceStatus.CANCELLED, False),
    ])
    def test_can_report_payment(self, status, allowed):
        invoice = make_invoice()
        invoice.change_status(status)

        assert invoice.can_report_payment() is allowed

    def test_pending_covers_draft_and_sent(self):
        invoice = make_invoice()
        assert invoice.is_pending

        invoice.change_status(InvoiceStatus.SENT)
        assert invoice.is_pending

        invoice.change_status(InvoiceStatus.OVERDUE)
        assert not invoice.is_pending

    def test_to_dict_serializes_enums_and_dates(self):
        invoice = make_invoice()
        invoice.invoice_number = "INV-0001"

        data = invoice.to_dict()

        assert data["status"] == "draft"
        assert data["invoice_number"] == "INV-0001"
        assert data["due_date"] == "2030-01-31T00:00:00"
        assert data["items"][0]["amount"] == 1000.0
