"""Invoice Repository Interface

Defines the contract for tenant-scoped invoice persistence operations.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional, List, Sequence, Tuple
from src.domain.invoice import Invoice, InvoiceStatus


@dataclass
class InvoiceFilters:
    """Optional list filters; empty fields do not filter"""

    statuses: List[InvoiceStatus] = field(default_factory=list)
    contact_id: Optional[str] = None
    owner_id: Optional[str] = None
    created_from: Optional[datetime] = None
    created_to: Optional[datetime] = None
    search: Optional[str] = None


@dataclass
class StatusSummary:
    status: InvoiceStatus
    count: int
    total: int


class InvoiceRepository(ABC):
    """
    Repository interface for Invoice persistence

    Every method takes org_id and never returns rows of another tenant.
    """

    @abstractmethod
    async def create(self, invoice: Invoice) -> Invoice:
        """
        Create a new invoice

        Args:
            invoice: Invoice entity to persist

        Returns:
            Created Invoice
        """
        pass

    @abstractmethod
    async def get_by_id(
        self, org_id: str, invoice_id: str, for_update: bool = False
    ) -> Optional[Invoice]:
        """
        Retrieve invoice by ID within a tenant

        Args:
            org_id: Organization (tenant) ID
            invoice_id: Invoice ID
            for_update: If True, locks the row with SELECT FOR UPDATE

        Returns:
            Invoice if found in the tenant, None otherwise
        """
        pass

    @abstractmethod
    async def get_many(
        self, org_id: str, invoice_ids: Sequence[str], for_update: bool = False
    ) -> List[Invoice]:
        """
        Retrieve the invoices of a tenant matching the given IDs

        IDs that do not exist or belong to another tenant are ignored.
        """
        pass

    @abstractmethod
    async def list_by_org(
        self,
        org_id: str,
        filters: Optional[InvoiceFilters] = None,
        limit: int = 20,
        offset: int = 0,
    ) -> Tuple[List[Invoice], int]:
        """
        List invoices of a tenant, newest first

        Args:
            org_id: Organization (tenant) ID
            filters: Optional InvoiceFilters
            limit: Maximum number of invoices to return
            offset: Offset for pagination

        Returns:
            Tuple of (page of invoices, total matching count)
        """
        pass

    @abstractmethod
    async def update(self, invoice: Invoice) -> Invoice:
        """
        Update an existing invoice (bumps updated_at)

        Args:
            invoice: Invoice entity with updated values

        Returns:
            Updated Invoice
        """
        pass

    @abstractmethod
    async def delete(self, invoice: Invoice) -> None:
        """Hard delete an invoice row"""
        pass

    @abstractmethod
    async def get_latest_number(self, org_id: str) -> Optional[str]:
        """
        Number of the most recently created invoice of a tenant

        Returns:
            The number string, or None when the tenant has no invoices
        """
        pass

    @abstractmethod
    async def reserve_invoice_number(self, org_id: str) -> str:
        """
        Reserve the next invoice number for a tenant

        Format: INV-NNNNNN (e.g., INV-000001). The tenant's counter row is
        locked until the surrounding transaction ends, so two concurrent
        creations never receive the same number.

        Returns:
            Invoice number string
        """
        pass

    @abstractmethod
    async def get_status_summary(self, org_id: str) -> List[StatusSummary]:
        """Count and total amount of a tenant's invoices per status"""
        pass
