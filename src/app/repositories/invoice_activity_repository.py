"""Invoice Activity Repository Interface

Append-only: there is deliberately no update or delete.
"""

from abc import ABC, abstractmethod
from typing import List
from src.domain.invoice_activity import InvoiceActivity


class InvoiceActivityRepository(ABC):

    @abstractmethod
    async def create(self, activity: InvoiceActivity) -> InvoiceActivity:
        """Append an activity entry"""
        pass

    @abstractmethod
    async def get_by_invoice_id(self, org_id: str, invoice_id: str) -> List[InvoiceActivity]:
        """
        Retrieve the activity log of an invoice, newest first

        Args:
            org_id: Organization (tenant) ID
            invoice_id: Invoice ID

        Returns:
            List of InvoiceActivity
        """
        pass
