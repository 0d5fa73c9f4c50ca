"""SQLAlchemy Invoice Line Item Repository Implementation

Implements invoice line item persistence using SQLAlchemy async session.
"""

from typing import Dict, List, Sequence
from sqlalchemy import delete
from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession
from src.app.repositories.invoice_line_repository import InvoiceLineRepository
from src.domain.invoice_line import InvoiceLineItem


class SqlAlchemyInvoiceLineRepository(InvoiceLineRepository):
    """
    SQLAlchemy implementation of InvoiceLineRepository

    Uses async session for database operations.
    """

    def __init__(self, session: AsyncSession):
        self.session = session

    async def get_by_invoice_id(self, invoice_id: str) -> List[InvoiceLineItem]:
        statement = (
            select(InvoiceLineItem)
            .where(InvoiceLineItem.invoice_id == invoice_id)
            .order_by(InvoiceLineItem.position)
        )
        result = await self.session.execute(statement)
        return list(result.scalars().all())

    async def get_by_invoice_ids(
        self, invoice_ids: Sequence[str]
    ) -> Dict[str, List[InvoiceLineItem]]:
        grouped: Dict[str, List[InvoiceLineItem]] = {invoice_id: [] for invoice_id in invoice_ids}
        if not invoice_ids:
            return grouped

        statement = (
            select(InvoiceLineItem)
            .where(InvoiceLineItem.invoice_id.in_(list(invoice_ids)))
            .order_by(InvoiceLineItem.invoice_id, InvoiceLineItem.position)
        )
        result = await self.session.execute(statement)
        for item in result.scalars().all():
            grouped.setdefault(item.invoice_id, []).append(item)
        return grouped

    async def create_many(self, line_items: List[InvoiceLineItem]) -> List[InvoiceLineItem]:
        self.session.add_all(line_items)
        await self.session.flush()
        for item in line_items:
            await self.session.refresh(item)
        return line_items

    async def delete_by_invoice_id(self, invoice_id: str) -> int:
        # Explicit delete: SQLite only honours ON DELETE CASCADE with the
        # foreign_keys pragma enabled
        statement = delete(InvoiceLineItem).where(InvoiceLineItem.invoice_id == invoice_id)
        result = await self.session.execute(statement)
        await self.session.flush()
        return result.rowcount or 0
