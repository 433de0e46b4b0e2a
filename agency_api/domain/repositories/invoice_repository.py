"""Invoice repository interface.
Defines the contract for invoice data persistence operations.
"""

from abc import ABC, abstractmethod
from typing import List, Optional

from agency_api.domain.models.invoice import Invoice, InvoiceStatus


class InvoiceRepository(ABC):
    """
    Repository interface for Invoice aggregate.
    Defines all operations needed for invoice data persistence.
    """

    @abstractmethod
    def save(self, invoice: Invoice) -> Invoice:
        """
        Save an invoice entity.
        Totals are recomputed from the line items before writing.
        """
        pass

    @abstractmethod
    def get_by_id(self, invoice_id: str) -> Optional[Invoice]:
        """
        Find an invoice by its ID.
        Returns None if not found.
        """
        pass

    @abstractmethod
    def list(
        self,
        client_id: Optional[str] = None,
        status: Optional[InvoiceStatus] = None,
        search: Optional[str] = None,
    ) -> List[Invoice]:
        """
        List invoices newest first.

        client_id restricts to one client's invoices; search matches the
        invoice number, the description or the project title, ignoring case.
        """
        pass

    @abstractmethod
    def count(self) -> int:
        """Count every stored invoice."""
        pass

    @abstractmethod
    def delete(self, invoice_id: str) -> bool:
        pass
