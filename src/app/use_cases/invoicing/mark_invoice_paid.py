"""MarkInvoicePaid Use Case

Records payment of a sent or overdue invoice.
"""

import logging
from typing import Optional
from libs.result import Result, Return, Error
from src.app.services.unit_of_work import UnitOfWork
from src.app.repositories.directory_repository import DirectoryRepository
from src.app.repositories.invoice_repository import InvoiceRepository
from src.app.repositories.invoice_line_repository import InvoiceLineRepository
from src.app.repositories.invoice_activity_repository import InvoiceActivityRepository
from .dtos import ActorDTO, InvoiceResponseDTO, PaymentDTO
from .invoice_reader import InvoiceReader
from . import transitions

logger = logging.getLogger(__name__)


class MarkInvoicePaid:
    """
    Use Case: Mark invoice as paid

    Business Rules:
    1. Only sent or overdue invoices can be paid; drafts are rejected
       (INVALID_INVOICE_STATUS) because they were never issued
    2. paid_at = payment.payment_date if given, else now; set once
    3. One "paid" activity is appended, with {amount, method, reference}
       metadata when payment details are given
    """

    def __init__(
        self,
        uow: UnitOfWork,
        invoice_repo: InvoiceRepository,
        invoice_line_repo: InvoiceLineRepository,
        activity_repo: InvoiceActivityRepository,
        directory_repo: DirectoryRepository,
    ):
        self.uow = uow
        self.invoice_repo = invoice_repo
        self.activity_repo = activity_repo
        self.reader = InvoiceReader(invoice_line_repo, directory_repo)

    async def execute(
        self,
        actor: ActorDTO,
        invoice_id: str,
        payment: Optional[PaymentDTO] = None,
    ) -> Result[InvoiceResponseDTO]:
        try:
            invoice = await self.invoice_repo.get_by_id(actor.org_id, invoice_id, for_update=True)
            if not invoice:
                return Return.err(
                    Error(
                        code="INVOICE_NOT_FOUND",
                        message=f"Invoice with ID {invoice_id} not found",
                    )
                )

            if not invoice.can_mark_paid():
                return Return.err(
                    Error(
                        code="INVALID_INVOICE_STATUS",
                        message=f"Only sent or overdue invoices can be marked as paid. "
                                f"Current status: {invoice.status.value}",
                        reason="Invoice must be sent before it is paid",
                    )
                )

            activity = transitions.mark_invoice_paid(invoice, actor, payment)
            updated_invoice = await self.invoice_repo.update(invoice)
            await self.activity_repo.create(activity)

            await self.uow.commit()
            logger.info(f"Invoice {updated_invoice.number} ({updated_invoice.id}) marked as paid")

            return Return.ok(await self.reader.hydrate_one(updated_invoice))

        except Exception as e:
            await self.uow.rollback()
            logger.error(f"Failed to mark invoice {invoice_id} as paid: {e}")
            return Return.err(
                Error(
                    code="MARK_INVOICE_PAID_FAILED",
                    message="Failed to mark invoice as paid",
                    reason=str(e),
                )
            )
