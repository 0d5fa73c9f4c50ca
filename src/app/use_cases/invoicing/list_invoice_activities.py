"""ListInvoiceActivities Use Case

Returns the activity log of an invoice, newest first.
"""

from typing import List
from libs.result import Result, Return, Error
from src.app.repositories.directory_repository import DirectoryRepository
from src.app.repositories.invoice_repository import InvoiceRepository
from src.app.repositories.invoice_activity_repository import InvoiceActivityRepository
from .dtos import ActorDTO, InvoiceActivityDTO
from .mappers import to_activity_dto


class ListInvoiceActivities:

    def __init__(
        self,
        invoice_repo: InvoiceRepository,
        activity_repo: InvoiceActivityRepository,
        directory_repo: DirectoryRepository,
    ):
        self.invoice_repo = invoice_repo
        self.activity_repo = activity_repo
        self.directory_repo = directory_repo

    async def execute(self, actor: ActorDTO, invoice_id: str) -> Result[List[InvoiceActivityDTO]]:
        invoice = await self.invoice_repo.get_by_id(actor.org_id, invoice_id)
        if not invoice:
            return Return.err(
                Error(
                    code="INVOICE_NOT_FOUND",
                    message=f"Invoice with ID {invoice_id} not found",
                )
            )

        activities = await self.activity_repo.get_by_invoice_id(actor.org_id, invoice_id)
        creators = await self.directory_repo.get_profiles(
            list({activity.created_by for activity in activities})
        )

        return Return.ok(
            [to_activity_dto(activity, creators.get(activity.created_by)) for activity in activities]
        )
