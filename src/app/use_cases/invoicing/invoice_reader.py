"""Loads the related records an invoice response needs"""

from typing import List
from src.app.repositories.directory_repository import DirectoryRepository
from src.app.repositories.invoice_line_repository import InvoiceLineRepository
from src.domain.invoice import Invoice
from .dtos import InvoiceResponseDTO
from .mappers import to_invoice_dto


class InvoiceReader:
    """
    Hydrates invoices with line items, contact and owner

    Batches lookups so a page of invoices costs three queries, not three
    per invoice.
    """

    def __init__(
        self,
        invoice_line_repo: InvoiceLineRepository,
        directory_repo: DirectoryRepository,
    ):
        self.invoice_line_repo = invoice_line_repo
        self.directory_repo = directory_repo

    async def hydrate(self, invoices: List[Invoice]) -> List[InvoiceResponseDTO]:
        if not invoices:
            return []

        org_id = invoices[0].org_id
        invoice_ids = [invoice.id for invoice in invoices]

        line_items = await self.invoice_line_repo.get_by_invoice_ids(invoice_ids)
        contacts = await self.directory_repo.get_contacts(
            org_id, list({invoice.contact_id for invoice in invoices})
        )
        owners = await self.directory_repo.get_profiles(
            list({invoice.owner_id for invoice in invoices})
        )

        return [
            to_invoice_dto(
                invoice,
                line_items.get(invoice.id, []),
                contacts.get(invoice.contact_id),
                owners.get(invoice.owner_id),
            )
            for invoice in invoices
        ]

    async def hydrate_one(self, invoice: Invoice) -> InvoiceResponseDTO:
        return (await self.hydrate([invoice]))[0]
