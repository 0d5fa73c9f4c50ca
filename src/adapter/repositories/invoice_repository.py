"""SQLAlchemy Invoice Repository Implementation

Implements tenant-scoped invoice persistence using SQLAlchemy async session.
"""

from typing import Optional, List, Sequence, Tuple
from sqlalchemy import or_
from sqlmodel import select, func
from sqlmodel.ext.asyncio.session import AsyncSession
from src.app.repositories.invoice_repository import (
    InvoiceRepository,
    InvoiceFilters,
    StatusSummary,
)
from src.domain.base import utcnow
from src.domain.directory import Contact
from src.domain.invoice import Invoice
from src.domain.invoice_sequence import InvoiceSequence
from src.domain.numbering import format_invoice_number, parse_sequence


def escape_like(term: str) -> str:
    """Make LIKE wildcards in user input match literally (escape char is backslash)"""
    return term.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")


class SqlAlchemyInvoiceRepository(InvoiceRepository):
    """
    SQLAlchemy implementation of InvoiceRepository

    Features:
    - Every statement filtered by org_id
    - Per-tenant invoice number counter locked via SELECT FOR UPDATE
    """

    def __init__(self, session: AsyncSession):
        self.session = session

    async def create(self, invoice: Invoice) -> Invoice:
        self.session.add(invoice)
        await self.session.flush()
        await self.session.refresh(invoice)
        return invoice

    async def get_by_id(
        self, org_id: str, invoice_id: str, for_update: bool = False
    ) -> Optional[Invoice]:
        statement = (
            select(Invoice)
            .where(Invoice.org_id == org_id)
            .where(Invoice.id == invoice_id)
        )
        if for_update:
            statement = statement.with_for_update()

        result = await self.session.execute(statement)
        return result.scalar_one_or_none()

    async def get_many(
        self, org_id: str, invoice_ids: Sequence[str], for_update: bool = False
    ) -> List[Invoice]:
        if not invoice_ids:
            return []

        statement = (
            select(Invoice)
            .where(Invoice.org_id == org_id)
            .where(Invoice.id.in_(list(invoice_ids)))
        )
        if for_update:
            statement = statement.with_for_update()

        result = await self.session.execute(statement)
        return list(result.scalars().all())

    async def list_by_org(
        self,
        org_id: str,
        filters: Optional[InvoiceFilters] = None,
        limit: int = 20,
        offset: int = 0,
    ) -> Tuple[List[Invoice], int]:
        """
        List invoices of a tenant, newest first

        Search matches the invoice number, notes, or the name/email of the
        billed contact.
        """
        conditions = [Invoice.org_id == org_id]
        filters = filters or InvoiceFilters()

        if filters.statuses:
            conditions.append(Invoice.status.in_(filters.statuses))
        if filters.contact_id:
            conditions.append(Invoice.contact_id == filters.contact_id)
        if filters.owner_id:
            conditions.append(Invoice.owner_id == filters.owner_id)
        if filters.created_from:
            conditions.append(Invoice.created_at >= filters.created_from)
        if filters.created_to:
            conditions.append(Invoice.created_at <= filters.created_to)
        if filters.search:
            pattern = f"%{escape_like(filters.search)}%"
            matching_contacts = (
                select(Contact.id)
                .where(Contact.org_id == org_id)
                .where(
                    or_(
                        Contact.first_name.ilike(pattern, escape="\\"),
                        Contact.last_name.ilike(pattern, escape="\\"),
                        Contact.email.ilike(pattern, escape="\\"),
                    )
                )
            )
            conditions.append(
                or_(
                    Invoice.number.ilike(pattern, escape="\\"),
                    Invoice.notes.ilike(pattern, escape="\\"),
                    Invoice.contact_id.in_(matching_contacts),
                )
            )

        count_statement = select(func.count()).select_from(Invoice).where(*conditions)
        count_result = await self.session.execute(count_statement)
        total = count_result.scalar_one()

        statement = (
            select(Invoice)
            .where(*conditions)
            .order_by(Invoice.created_at.desc())
            .limit(limit)
            .offset(offset)
        )
        result = await self.session.execute(statement)
        return list(result.scalars().all()), total

    async def update(self, invoice: Invoice) -> Invoice:
        invoice.updated_at = utcnow()
        self.session.add(invoice)
        await self.session.flush()
        await self.session.refresh(invoice)
        return invoice

    async def delete(self, invoice: Invoice) -> None:
        await self.session.delete(invoice)
        await self.session.flush()

    async def get_latest_number(self, org_id: str) -> Optional[str]:
        statement = (
            select(Invoice.number)
            .where(Invoice.org_id == org_id)
            .order_by(Invoice.created_at.desc())
            .limit(1)
        )
        result = await self.session.execute(statement)
        return result.scalar_one_or_none()

    async def reserve_invoice_number(self, org_id: str) -> str:
        """
        Reserve the next invoice number for a tenant

        The counter row is created on first use, seeded from the trailing
        digits of the tenant's latest invoice number (0 when there is none
        or it has no digits), then locked and incremented.
        """
        statement = (
            select(InvoiceSequence)
            .where(InvoiceSequence.org_id == org_id)
            .with_for_update()
        )
        result = await self.session.execute(statement)
        sequence = result.scalar_one_or_none()

        if sequence is None:
            latest_number = await self.get_latest_number(org_id)
            sequence = InvoiceSequence(
                org_id=org_id,
                last_number=parse_sequence(latest_number),
            )

        sequence.last_number += 1
        sequence.updated_at = utcnow()
        self.session.add(sequence)
        await self.session.flush()

        return format_invoice_number(sequence.last_number)

    async def get_status_summary(self, org_id: str) -> List[StatusSummary]:
        statement = (
            select(
                Invoice.status,
                func.count(Invoice.id),
                func.coalesce(func.sum(Invoice.total), 0),
            )
            .where(Invoice.org_id == org_id)
            .group_by(Invoice.status)
        )
        result = await self.session.execute(statement)
        return [
            StatusSummary(status=status, count=count, total=int(total))
            for status, count, total in result.all()
        ]
