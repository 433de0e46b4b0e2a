"""Numbering service for generating sequential invoice numbers."""

from agency_api.domain.models.base import InvoiceNumber


class NumberingService:
    """
    Domain service for the invoice numbering sequence.

    The next number is derived from how many invoices exist, so deleting an
    invoice can make a later create reuse a number.
    """

    def __init__(self, prefix: str = "INV", width: int = 4):
        self.prefix = prefix
        self.width = width

    def next_invoice_number(self, existing_count: int) -> InvoiceNumber:
        return InvoiceNumber(self.prefix, existing_count + 1, self.width)
