"""SendInvoice Use Case

Delivers a draft invoice to its contact and moves it to sent.
"""

import logging
from typing import Optional
from libs.result import Result, Return, Error
from src.app.services.unit_of_work import UnitOfWork
from src.app.services.delivery_service import InvoiceDeliveryService
from src.app.repositories.directory_repository import DirectoryRepository
from src.app.repositories.invoice_repository import InvoiceRepository
from src.app.repositories.invoice_line_repository import InvoiceLineRepository
from src.app.repositories.invoice_activity_repository import InvoiceActivityRepository
from src.domain.invoice import Invoice
from .dtos import ActorDTO, InvoiceResponseDTO, SendInvoiceCommandDTO
from .invoice_reader import InvoiceReader
from . import transitions

logger = logging.getLogger(__name__)


async def check_sendable(
    invoice: Invoice,
    directory_repo: DirectoryRepository,
    invoice_line_repo: InvoiceLineRepository,
):
    """
    Validate an invoice can be sent

    Returns:
        Tuple of (contact, None) when sendable, else (None, Error)
    """
    if not invoice.can_send():
        return None, Error(
            code="INVALID_INVOICE_STATUS",
            message=f"Only draft invoices can be sent. Current status: {invoice.status.value}",
            reason="Invoices are sent once",
        )

    contact = await directory_repo.get_contact(invoice.org_id, invoice.contact_id)
    if not contact:
        return None, Error(
            code="VALIDATION_ERROR",
            message="Please select a contact for this invoice.",
            reason=f"Contact {invoice.contact_id} not found",
        )

    line_items = await invoice_line_repo.get_by_invoice_id(invoice.id)
    if not line_items:
        return None, Error(
            code="VALIDATION_ERROR",
            message="Please add at least one line item.",
            reason="Empty invoices cannot be sent",
        )

    return contact, None


class SendInvoice:
    """
    Use Case: Send invoice

    Business Rules:
    1. Only draft invoices can be sent (INVALID_INVOICE_STATUS)
    2. Invoice needs an existing contact and at least one line item (VALIDATION_ERROR)
    3. Status change and activity are written first, then delivered;
       a rejected delivery rolls both back (DELIVERY_FAILED)
    4. sent_at is set once; one "sent" activity is appended

    Flow:
    1. Load invoice with lock
    2. Validate sendable
    3. Transition to sent, append activity
    4. Deliver
    5. Commit transaction
    """

    def __init__(
        self,
        uow: UnitOfWork,
        invoice_repo: InvoiceRepository,
        invoice_line_repo: InvoiceLineRepository,
        activity_repo: InvoiceActivityRepository,
        directory_repo: DirectoryRepository,
        delivery_service: InvoiceDeliveryService,
    ):
        self.uow = uow
        self.invoice_repo = invoice_repo
        self.invoice_line_repo = invoice_line_repo
        self.activity_repo = activity_repo
        self.directory_repo = directory_repo
        self.delivery_service = delivery_service
        self.reader = InvoiceReader(invoice_line_repo, directory_repo)

    async def execute(
        self,
        actor: ActorDTO,
        invoice_id: str,
        command: Optional[SendInvoiceCommandDTO] = None,
    ) -> Result[InvoiceResponseDTO]:
        command = command or SendInvoiceCommandDTO()
        try:
            # Step 1: Load invoice with lock
            invoice = await self.invoice_repo.get_by_id(actor.org_id, invoice_id, for_update=True)
            if not invoice:
                return Return.err(
                    Error(
                        code="INVOICE_NOT_FOUND",
                        message=f"Invoice with ID {invoice_id} not found",
                    )
                )

            # Step 2: Validate
            contact, error = await check_sendable(
                invoice, self.directory_repo, self.invoice_line_repo
            )
            if error:
                return Return.err(error)

            # Step 3: Transition and log (flushed, not yet committed)
            number = invoice.number
            activity = transitions.send_invoice(
                invoice, actor, command.channels, command.subject, command.custom_message
            )
            updated_invoice = await self.invoice_repo.update(invoice)
            await self.activity_repo.create(activity)

            # Step 4: Deliver
            delivered = await self.delivery_service.deliver_invoice(
                updated_invoice, contact, command.channels, command.custom_message
            )
            if not delivered:
                await self.uow.rollback()
                return Return.err(
                    Error(
                        code="DELIVERY_FAILED",
                        message=f"Invoice {number} could not be delivered",
                        reason="Delivery service rejected the invoice",
                    )
                )

            # Step 5: Commit transaction
            await self.uow.commit()
            logger.info(
                f"Sent invoice {updated_invoice.number} ({updated_invoice.id}) via "
                f"{', '.join(c.value for c in command.channels)}"
            )

            return Return.ok(await self.reader.hydrate_one(updated_invoice))

        except Exception as e:
            await self.uow.rollback()
            logger.error(f"Failed to send invoice {invoice_id}: {e}")
            return Return.err(
                Error(
                    code="SEND_INVOICE_FAILED",
                    message="Failed to send invoice",
                    reason=str(e),
                )
            )
