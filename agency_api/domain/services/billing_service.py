"""Billing service for invoice summaries and currency rounding.
Handles aggregate billing figures shown on the dashboard.
"""

from typing import Iterable, Dict, Any
from decimal import Decimal, ROUND_HALF_UP

from agency_api.domain.models.invoice import Invoice, InvoiceStatus


class BillingService:
    """
    Domain service for billing calculations.
    Aggregates invoice values by status for the billing summary.
    """

    def summarize(self, invoices: Iterable[Invoice]) -> Dict[str, Any]:
        """
        Total, paid, pending and overdue values and counts.

        Pending covers draft and sent invoices; cancelled invoices only add
        to the overall total.
        """
        summary = {
            "total_amount": 0.0,
            "paid_amount": 0.0,
            "pending_amount": 0.0,
            "overdue_amount": 0.0,
            "total_invoices": 0,
            "paid_invoices": 0,
            "pending_invoices": 0,
            "overdue_invoices": 0,
        }

        for invoice in invoices:
            value = invoice.total or 0
            summary["total_amount"] += value
            summary["total_invoices"] += 1

            if invoice.status == InvoiceStatus.PAID:
                summary["paid_amount"] += value
                summary["paid_invoices"] += 1
            elif invoice.is_pending:
                summary["pending_amount"] += value
                summary["pending_invoices"] += 1
            elif invoice.status == InvoiceStatus.OVERDUE:
                summary["overdue_amount"] += value
                summary["overdue_invoices"] += 1

        for key in ("total_amount", "paid_amount", "pending_amount", "overdue_amount"):
            summary[key] = self._round_currency(summary[key])

        return summary

    def _round_currency(self, amount: float) -> float:
        """
        Round currency amount to 2 decimal places.
        """
        return float(Decimal(str(amount)).quantize(Decimal('0.01'), rounding=ROUND_HALF_UP))
