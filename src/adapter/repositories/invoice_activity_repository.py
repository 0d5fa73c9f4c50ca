"""SQLAlchemy Invoice Activity Repository Implementation"""

from typing import List
from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession
from src.app.repositories.invoice_activity_repository import InvoiceActivityRepository
from src.domain.invoice_activity import InvoiceActivity


class SqlAlchemyInvoiceActivityRepository(InvoiceActivityRepository):

    def __init__(self, session: AsyncSession):
        self.session = session

    async def create(self, activity: InvoiceActivity) -> InvoiceActivity:
        self.session.add(activity)
        await self.session.flush()
        await self.session.refresh(activity)
        return activity

    async def get_by_invoice_id(self, org_id: str, invoice_id: str) -> List[InvoiceActivity]:
        statement = (
            select(InvoiceActivity)
            .where(InvoiceActivity.org_id == org_id)
            .where(InvoiceActivity.invoice_id == invoice_id)
            .order_by(InvoiceActivity.created_at.desc())
        )
        result = await self.session.execute(statement)
        return list(result.scalars().all())
