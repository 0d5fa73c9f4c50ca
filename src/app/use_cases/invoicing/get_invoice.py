"""GetInvoice Use Case

Retrieves a single invoice within the caller's organization.
"""

from libs.result import Result, Return, Error
from src.app.repositories.directory_repository import DirectoryRepository
from src.app.repositories.invoice_repository import InvoiceRepository
from src.app.repositories.invoice_line_repository import InvoiceLineRepository
from .dtos import ActorDTO, InvoiceResponseDTO
from .invoice_reader import InvoiceReader


class GetInvoice:
    """
    Read-only operation returning a hydrated invoice

    An invoice of another organization is reported exactly like a missing
    one (INVOICE_NOT_FOUND).
    """

    def __init__(
        self,
        invoice_repo: InvoiceRepository,
        invoice_line_repo: InvoiceLineRepository,
        directory_repo: DirectoryRepository,
    ):
        self.invoice_repo = invoice_repo
        self.reader = InvoiceReader(invoice_line_repo, directory_repo)

    async def execute(self, actor: ActorDTO, invoice_id: str) -> Result[InvoiceResponseDTO]:
        invoice = await self.invoice_repo.get_by_id(actor.org_id, invoice_id)

        if not invoice:
            return Return.err(
                Error(
                    code="INVOICE_NOT_FOUND",
                    message=f"Invoice with ID {invoice_id} not found",
                )
            )

        return Return.ok(await self.reader.hydrate_one(invoice))
