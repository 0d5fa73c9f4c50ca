"""UpdateInvoice Use Case

Edits invoice header fields and/or replaces its line items.
"""

import logging
from libs.result import Result, Return, Error
from src.app.services.unit_of_work import UnitOfWork
from src.app.repositories.directory_repository import DirectoryRepository
from src.app.repositories.invoice_repository import InvoiceRepository
from src.app.repositories.invoice_line_repository import InvoiceLineRepository
from src.domain.totals import compute_totals
from .dtos import ActorDTO, InvoiceResponseDTO, UpdateInvoiceCommandDTO
from .invoice_reader import InvoiceReader
from .line_items import build_line_items

logger = logging.getLogger(__name__)

HEADER_FIELDS = ("notes", "terms", "due_date", "payment_terms")


class UpdateInvoice:
    """
    Use Case: Update invoice

    Business Rules:
    1. Paid invoices are locked (INVALID_INVOICE_STATUS)
    2. Only fields present in the command are changed
    3. New line items replace the old set; all totals are recomputed in full
    4. Status, number, sent_at, paid_at and owner are never changed here
    5. No activity is appended for updates
    """

    def __init__(
        self,
        uow: UnitOfWork,
        invoice_repo: InvoiceRepository,
        invoice_line_repo: InvoiceLineRepository,
        directory_repo: DirectoryRepository,
    ):
        self.uow = uow
        self.invoice_repo = invoice_repo
        self.invoice_line_repo = invoice_line_repo
        self.directory_repo = directory_repo
        self.reader = InvoiceReader(invoice_line_repo, directory_repo)

    async def execute(
        self, actor: ActorDTO, invoice_id: str, command: UpdateInvoiceCommandDTO
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

            if not invoice.is_editable():
                return Return.err(
                    Error(
                        code="INVALID_INVOICE_STATUS",
                        message=f"Invoice {invoice.number} can no longer be edited. "
                                f"Current status: {invoice.status.value}",
                        reason="Paid invoices are locked",
                    )
                )

            changed = command.model_fields_set

            if "contact_id" in changed:
                if not command.contact_id:
                    return Return.err(
                        Error(
                            code="VALIDATION_ERROR",
                            message="An invoice must have a contact",
                        )
                    )
                contact = await self.directory_repo.get_contact(actor.org_id, command.contact_id)
                if not contact:
                    return Return.err(
                        Error(
                            code="CONTACT_NOT_FOUND",
                            message=f"Contact {command.contact_id} not found",
                        )
                    )
                invoice.contact_id = command.contact_id

            for field_name in HEADER_FIELDS:
                if field_name in changed:
                    setattr(invoice, field_name, getattr(command, field_name))

            if "line_items" in changed and command.line_items is not None:
                built = await build_line_items(
                    self.directory_repo, actor.org_id, invoice.id, command.line_items
                )
                if built.is_err():
                    await self.uow.rollback()
                    return Return.err(built.error)
                line_items = built.value

                await self.invoice_line_repo.delete_by_invoice_id(invoice.id)
                if line_items:
                    await self.invoice_line_repo.create_many(line_items)

                totals = compute_totals(line_items)
                invoice.subtotal = totals.subtotal
                invoice.tax_total = totals.tax_total
                invoice.total = totals.total

            updated_invoice = await self.invoice_repo.update(invoice)
            await self.uow.commit()
            logger.info(f"Updated invoice {updated_invoice.number} ({updated_invoice.id})")

            return Return.ok(await self.reader.hydrate_one(updated_invoice))

        except Exception as e:
            await self.uow.rollback()
            logger.error(f"Failed to update invoice {invoice_id}: {e}")
            return Return.err(
                Error(
                    code="UPDATE_INVOICE_FAILED",
                    message="Failed to update invoice",
                    reason=str(e),
                )
            )
