"""GetInvoiceStats Use Case

Per-status counts and money totals for an organization's invoices.
"""

from libs.result import Result, Return
from src.app.repositories.invoice_repository import InvoiceRepository
from src.domain.invoice import InvoiceStatus
from src.domain.totals import round_minor
from decimal import Decimal
from .dtos import (
    ActorDTO,
    InvoiceStatsResponseDTO,
    InvoiceStatsTotalsDTO,
    StatusBreakdownDTO,
)


class GetInvoiceStats:
    """
    Read-only invoice statistics

    total_value sums every invoice total; total_paid sums paid invoices;
    average_value is total_value / total_invoices rounded half up (0 when
    there are no invoices).
    """

    def __init__(self, invoice_repo: InvoiceRepository):
        self.invoice_repo = invoice_repo

    async def execute(self, actor: ActorDTO) -> Result[InvoiceStatsResponseDTO]:
        summary = await self.invoice_repo.get_status_summary(actor.org_id)
        by_status = {row.status: row for row in summary}

        breakdown = [
            StatusBreakdownDTO(
                status=status.value,
                count=by_status[status].count if status in by_status else 0,
                total=by_status[status].total if status in by_status else 0,
            )
            for status in InvoiceStatus
        ]

        total_invoices = sum(row.count for row in summary)
        total_value = sum(row.total for row in summary)
        average_value = (
            round_minor(Decimal(total_value) / Decimal(total_invoices)) if total_invoices else 0
        )

        paid = by_status.get(InvoiceStatus.PAID)
        overdue = by_status.get(InvoiceStatus.OVERDUE)

        return Return.ok(
            InvoiceStatsResponseDTO(
                status_breakdown=breakdown,
                totals=InvoiceStatsTotalsDTO(
                    total_invoices=total_invoices,
                    total_value=total_value,
                    total_paid=paid.total if paid else 0,
                    average_value=average_value,
                    overdue_count=overdue.count if overdue else 0,
                ),
            )
        )
