"""
List Invoices Use Case

Retrieves a filtered, paginated page of an organization's invoices.
"""
from libs.result import Result, Return, Error
from src.app.repositories.directory_repository import DirectoryRepository
from src.app.repositories.invoice_repository import InvoiceRepository, InvoiceFilters
from src.app.repositories.invoice_line_repository import InvoiceLineRepository
from src.domain.invoice import InvoiceStatus
from .dtos import ActorDTO, ListInvoicesQueryDTO, ListInvoicesResponseDTO
from .invoice_reader import InvoiceReader


class ListInvoices:
    """
    Use case: List invoices

    Invoices are ordered by created_at DESC (most recent first).
    """

    def __init__(
        self,
        invoice_repo: InvoiceRepository,
        invoice_line_repo: InvoiceLineRepository,
        directory_repo: DirectoryRepository,
    ):
        self.invoice_repo = invoice_repo
        self.reader = InvoiceReader(invoice_line_repo, directory_repo)

    async def execute(
        self, actor: ActorDTO, query: ListInvoicesQueryDTO
    ) -> Result[ListInvoicesResponseDTO]:
        """
        List invoices for the actor's organization

        Args:
            actor: Resolved acting user and organization
            query: Filters and pagination

        Returns:
            Result[ListInvoicesResponseDTO]: Page of invoices, or VALIDATION_ERROR
            for an unknown status filter
        """
        try:
            # Accepts repeated values and comma-joined ones (status=draft,sent)
            statuses = [
                InvoiceStatus(part.strip())
                for value in query.statuses
                for part in value.split(",")
                if part.strip()
            ]
        except ValueError as e:
            return Return.err(
                Error(
                    code="VALIDATION_ERROR",
                    message="Unknown invoice status filter",
                    reason=str(e),
                )
            )

        filters = InvoiceFilters(
            statuses=statuses,
            contact_id=query.contact_id,
            owner_id=query.owner_id,
            created_from=query.created_from,
            created_to=query.created_to,
            search=query.search,
        )

        invoices, total = await self.invoice_repo.list_by_org(
            actor.org_id, filters, limit=query.limit, offset=query.offset
        )

        return Return.ok(
            ListInvoicesResponseDTO(
                invoices=await self.reader.hydrate(invoices),
                total=total,
                limit=query.limit,
                offset=query.offset,
            )
        )
