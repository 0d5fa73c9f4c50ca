from .invoice_repository import InvoiceRepository, InvoiceFilters, StatusSummary
from .invoice_line_repository import InvoiceLineRepository
from .invoice_activity_repository import InvoiceActivityRepository
from .directory_repository import DirectoryRepository

__all__ = [
    "InvoiceRepository",
    "InvoiceFilters",
    "StatusSummary",
    "InvoiceLineRepository",
    "InvoiceActivityRepository",
    "DirectoryRepository",
]
