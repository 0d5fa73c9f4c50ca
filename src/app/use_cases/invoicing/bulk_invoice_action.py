"""BulkInvoiceAction Use Case

Applies send, mark_paid or delete to a set of invoices in one transaction.
"""

import logging
from libs.result import Result, Return, Error
from src.app.services.unit_of_work import UnitOfWork
from src.app.services.delivery_service import InvoiceDeliveryService
from src.app.repositories.directory_repository import DirectoryRepository
from src.app.repositories.invoice_repository import InvoiceRepository
from src.app.repositories.invoice_line_repository import InvoiceLineRepository
from src.app.repositories.invoice_activity_repository import InvoiceActivityRepository
from src.domain.invoice import Invoice
from .dtos import (
    ActorDTO,
    BulkActionType,
    BulkInvoiceActionCommandDTO,
    BulkInvoiceActionResponseDTO,
)
from .send_invoice import check_sendable
from . import transitions

logger = logging.getLogger(__name__)


class DeliveryRejected(Exception):
    """Raised inside a send savepoint to undo the invoice's writes"""


class BulkInvoiceAction:
    """
    Use Case: Bulk invoice action

    Business Rules:
    1. send only affects draft invoices that pass send validation and
       whose delivery is accepted
    2. mark_paid only affects sent or overdue invoices
    3. delete affects every listed invoice of the tenant
    4. One activity per affected invoice (none for delete)
    5. IDs of other tenants, unknown IDs and invoices failing the
       precondition are reported as skipped and left untouched
    6. send writes each invoice in its own savepoint before delivering it;
       an invoice whose writes or delivery fail is skipped on its own
    7. All kept changes commit together
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

    async def execute(
        self, actor: ActorDTO, command: BulkInvoiceActionCommandDTO
    ) -> Result[BulkInvoiceActionResponseDTO]:
        requested_ids = list(dict.fromkeys(command.invoice_ids))
        try:
            invoices = await self.invoice_repo.get_many(
                actor.org_id, requested_ids, for_update=True
            )
            by_id = {invoice.id: invoice for invoice in invoices}

            affected_ids = []
            for invoice_id in requested_ids:
                invoice = by_id.get(invoice_id)
                if invoice is None:
                    continue
                if await self._apply(actor, command, invoice):
                    affected_ids.append(invoice_id)

            await self.uow.commit()

            skipped_ids = [i for i in requested_ids if i not in set(affected_ids)]
            logger.info(
                f"Bulk {command.action.value} for org {actor.org_id}: "
                f"{len(affected_ids)} affected, {len(skipped_ids)} skipped"
            )

            return Return.ok(
                BulkInvoiceActionResponseDTO(
                    action=command.action,
                    affected_ids=affected_ids,
                    skipped_ids=skipped_ids,
                )
            )

        except Exception as e:
            await self.uow.rollback()
            logger.error(f"Bulk {command.action.value} failed for org {actor.org_id}: {e}")
            return Return.err(
                Error(
                    code="BULK_INVOICE_ACTION_FAILED",
                    message=f"Failed to {command.action.value} invoices",
                    reason=str(e),
                )
            )

    async def _apply(
        self, actor: ActorDTO, command: BulkInvoiceActionCommandDTO, invoice: Invoice
    ) -> bool:
        """Apply the action to one invoice; False when it does not qualify"""
        if command.action == BulkActionType.DELETE:
            await self.invoice_line_repo.delete_by_invoice_id(invoice.id)
            await self.invoice_repo.delete(invoice)
            return True

        if command.action == BulkActionType.MARK_PAID:
            if not invoice.can_mark_paid():
                return False
            activity = transitions.mark_invoice_paid(invoice, actor)
            await self.invoice_repo.update(invoice)
            await self.activity_repo.create(activity)
            return True

        return await self._send(actor, command, invoice)

    async def _send(
        self, actor: ActorDTO, command: BulkInvoiceActionCommandDTO, invoice: Invoice
    ) -> bool:
        """
        Send one invoice inside its own savepoint

        The status change and activity are written before delivery, so a
        write failure skips the invoice without delivering it. A rejected
        delivery rolls the savepoint back and skips the invoice. Either
        way the rest of the batch goes on.
        """
        contact, error = await check_sendable(
            invoice, self.directory_repo, self.invoice_line_repo
        )
        if error:
            logger.debug(f"Skipping invoice {invoice.id} in bulk send: {error.message}")
            return False

        # Rolled-back objects are expired, so read the number up front
        number = invoice.number
        try:
            async with self.uow.savepoint():
                activity = transitions.send_invoice(invoice, actor, command.channels)
                await self.invoice_repo.update(invoice)
                await self.activity_repo.create(activity)

                delivered = await self.delivery_service.deliver_invoice(
                    invoice, contact, command.channels
                )
                if not delivered:
                    raise DeliveryRejected(number)
        except DeliveryRejected:
            logger.warning(f"Skipping invoice {number} in bulk send: delivery failed")
            return False
        except Exception as e:
            logger.error(f"Skipping invoice {number} in bulk send: {e}")
            return False

        return True
