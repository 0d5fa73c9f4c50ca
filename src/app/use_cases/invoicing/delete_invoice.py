"""DeleteInvoice Use Case

Hard-deletes an invoice and its line items. Activity entries are kept.
"""

import logging
from libs.result import Result, Return, Error
from src.app.services.unit_of_work import UnitOfWork
from src.app.repositories.invoice_repository import InvoiceRepository
from src.app.repositories.invoice_line_repository import InvoiceLineRepository
from .dtos import ActorDTO, DeleteInvoiceResponseDTO

logger = logging.getLogger(__name__)


class DeleteInvoice:
    """
    Use Case: Delete invoice

    Allowed from any status. Line items and the invoice row are removed in
    one transaction; no activity is appended.
    """

    def __init__(
        self,
        uow: UnitOfWork,
        invoice_repo: InvoiceRepository,
        invoice_line_repo: InvoiceLineRepository,
    ):
        self.uow = uow
        self.invoice_repo = invoice_repo
        self.invoice_line_repo = invoice_line_repo

    async def execute(self, actor: ActorDTO, invoice_id: str) -> Result[DeleteInvoiceResponseDTO]:
        try:
            invoice = await self.invoice_repo.get_by_id(actor.org_id, invoice_id, for_update=True)
            if not invoice:
                return Return.err(
                    Error(
                        code="INVOICE_NOT_FOUND",
                        message=f"Invoice with ID {invoice_id} not found",
                    )
                )

            number = invoice.number
            deleted_lines = await self.invoice_line_repo.delete_by_invoice_id(invoice.id)
            await self.invoice_repo.delete(invoice)

            await self.uow.commit()
            logger.info(f"Deleted invoice {number} ({invoice_id}) with {deleted_lines} line items")

            return Return.ok(
                DeleteInvoiceResponseDTO(
                    invoice_id=invoice_id,
                    number=number,
                    deleted_line_items=deleted_lines,
                )
            )

        except Exception as e:
            await self.uow.rollback()
            logger.error(f"Failed to delete invoice {invoice_id}: {e}")
            return Return.err(
                Error(
                    code="DELETE_INVOICE_FAILED",
                    message="Failed to delete invoice",
                    reason=str(e),
                )
            )
