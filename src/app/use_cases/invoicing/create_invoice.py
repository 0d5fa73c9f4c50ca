"""CreateInvoice Use Case

Creates a draft invoice with its line items and its first activity entry.
"""

import logging
from libs.result import Result, Return, Error
from src.app.services.unit_of_work import UnitOfWork
from src.app.repositories.directory_repository import DirectoryRepository
from src.app.repositories.invoice_repository import InvoiceRepository
from src.app.repositories.invoice_line_repository import InvoiceLineRepository
from src.app.repositories.invoice_activity_repository import InvoiceActivityRepository
from src.domain.base import generate_uuid
from src.domain.invoice import Invoice, InvoiceStatus
from src.domain.invoice_activity import InvoiceActivity, ActivityType
from src.domain.totals import compute_totals
from .dtos import ActorDTO, CreateInvoiceCommandDTO, InvoiceResponseDTO
from .invoice_reader import InvoiceReader
from .line_items import build_line_items

logger = logging.getLogger(__name__)


class CreateInvoice:
    """
    Use Case: Create draft invoice

    Business Rules:
    1. The billed contact must exist in the actor's organization
    2. Line totals and invoice aggregates are computed from the line items
    3. Invoice number is reserved from the tenant counter (INV-NNNNNN)
    4. Invoice is created with status=draft and the configured currency
    5. Header, line items and the "created" activity commit together

    Flow:
    1. Validate contact
    2. Build and price line items
    3. Compute totals
    4. Reserve invoice number
    5. Persist header, line items, activity
    6. Commit transaction
    7. Return hydrated invoice
    """

    def __init__(
        self,
        uow: UnitOfWork,
        invoice_repo: InvoiceRepository,
        invoice_line_repo: InvoiceLineRepository,
        activity_repo: InvoiceActivityRepository,
        directory_repo: DirectoryRepository,
        currency: str = "USD",
    ):
        self.uow = uow
        self.invoice_repo = invoice_repo
        self.invoice_line_repo = invoice_line_repo
        self.activity_repo = activity_repo
        self.directory_repo = directory_repo
        self.currency = currency
        self.reader = InvoiceReader(invoice_line_repo, directory_repo)

    async def execute(
        self, actor: ActorDTO, command: CreateInvoiceCommandDTO
    ) -> Result[InvoiceResponseDTO]:
        """
        Execute invoice creation

        Args:
            actor: Resolved acting user and organization
            command: CreateInvoiceCommandDTO with contact, line items, billing metadata

        Returns:
            Result[InvoiceResponseDTO]: Success with the created invoice or error
        """
        try:
            # Step 1: Contact must belong to the tenant
            contact = await self.directory_repo.get_contact(actor.org_id, command.contact_id)
            if not contact:
                return Return.err(
                    Error(
                        code="CONTACT_NOT_FOUND",
                        message=f"Contact {command.contact_id} not found",
                        reason="Invoices can only bill contacts of the same organization",
                    )
                )

            # Step 2: Price line items
            invoice_id = generate_uuid()
            built = await build_line_items(
                self.directory_repo, actor.org_id, invoice_id, command.line_items
            )
            if built.is_err():
                return Return.err(built.error)
            line_items = built.value

            # Step 3: Aggregates
            totals = compute_totals(line_items)

            # Step 4: Reserve number (locks the tenant counter until commit)
            number = await self.invoice_repo.reserve_invoice_number(actor.org_id)

            # Step 5: Persist header, line items and activity
            invoice = Invoice(
                id=invoice_id,
                org_id=actor.org_id,
                number=number,
                status=InvoiceStatus.DRAFT,
                contact_id=command.contact_id,
                subtotal=totals.subtotal,
                tax_total=totals.tax_total,
                total=totals.total,
                currency=self.currency,
                notes=command.notes,
                terms=command.terms,
                due_date=command.due_date,
                payment_terms=command.payment_terms,
                owner_id=actor.user_id,
            )
            created_invoice = await self.invoice_repo.create(invoice)

            if line_items:
                await self.invoice_line_repo.create_many(line_items)

            await self.activity_repo.create(
                InvoiceActivity(
                    org_id=actor.org_id,
                    invoice_id=created_invoice.id,
                    type=ActivityType.CREATED,
                    title=f"Invoice {number} created",
                    created_by=actor.user_id,
                    details={"total": totals.total, "currency": self.currency},
                )
            )

            # Step 6: Commit transaction
            await self.uow.commit()
            logger.info(
                f"Created invoice {number} ({created_invoice.id}) for org {actor.org_id}, "
                f"total={totals.total}"
            )

            # Step 7: Re-read with contact, owner and line items
            return Return.ok(await self.reader.hydrate_one(created_invoice))

        except Exception as e:
            await self.uow.rollback()
            logger.error(f"Failed to create invoice for org {actor.org_id}: {e}")
            return Return.err(
                Error(
                    code="CREATE_INVOICE_FAILED",
                    message="Failed to create invoice",
                    reason=str(e),
                )
            )
