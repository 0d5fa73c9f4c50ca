"""Invoice Line Item Repository Interface

Defines the contract for invoice line item persistence operations.
"""

from abc import ABC, abstractmethod
from typing import Dict, List, Sequence
from src.domain.invoice_line import InvoiceLineItem


class InvoiceLineRepository(ABC):
    """
    Repository interface for InvoiceLineItem persistence

    Line items are only reached through their invoice, which callers have
    already resolved within the tenant.
    """

    @abstractmethod
    async def get_by_invoice_id(self, invoice_id: str) -> List[InvoiceLineItem]:
        """
        Retrieve all line items for an invoice in display order

        Args:
            invoice_id: Invoice ID

        Returns:
            List of InvoiceLineItem ordered by position
        """
        pass

    @abstractmethod
    async def get_by_invoice_ids(
        self, invoice_ids: Sequence[str]
    ) -> Dict[str, List[InvoiceLineItem]]:
        """Line items grouped by invoice ID, each group in display order"""
        pass

    @abstractmethod
    async def create_many(self, line_items: List[InvoiceLineItem]) -> List[InvoiceLineItem]:
        """
        Persist line items

        Args:
            line_items: InvoiceLineItem entities, already bound to an invoice

        Returns:
            Created line items
        """
        pass

    @abstractmethod
    async def delete_by_invoice_id(self, invoice_id: str) -> int:
        """
        Delete every line item of an invoice

        Returns:
            Number of deleted rows
        """
        pass
