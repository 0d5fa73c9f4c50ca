from .invoice_repository import SqlAlchemyInvoiceRepository
from .invoice_line_repository import SqlAlchemyInvoiceLineRepository
from .invoice_activity_repository import SqlAlchemyInvoiceActivityRepository
from .directory_repository import SqlAlchemyDirectoryRepository

__all__ = [
    "SqlAlchemyInvoiceRepository",
    "SqlAlchemyInvoiceLineRepository",
    "SqlAlchemyInvoiceActivityRepository",
    "SqlAlchemyDirectoryRepository",
]
