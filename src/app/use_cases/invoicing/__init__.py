"""Invoicing use cases"""
from .resolve_actor import ResolveActor
from .create_invoice import CreateInvoice
from .get_invoice import GetInvoice
from .list_invoices import ListInvoices
from .update_invoice import UpdateInvoice
from .send_invoice import SendInvoice
from .mark_invoice_paid import MarkInvoicePaid
from .delete_invoice import DeleteInvoice
from .bulk_invoice_action import BulkInvoiceAction
from .list_invoice_activities import ListInvoiceActivities
from .get_invoice_stats import GetInvoiceStats
from .dtos import (
    ActorDTO,
    LineItemInputDTO,
    CreateInvoiceCommandDTO,
    UpdateInvoiceCommandDTO,
    SendInvoiceCommandDTO,
    PaymentDTO,
    BulkActionType,
    BulkInvoiceActionCommandDTO,
    ListInvoicesQueryDTO,
    LineItemDTO,
    InvoiceResponseDTO,
    ListInvoicesResponseDTO,
    DeleteInvoiceResponseDTO,
    InvoiceActivityDTO,
    BulkInvoiceActionResponseDTO,
    InvoiceStatsResponseDTO,
)

__all__ = [
    "ResolveActor",
    "CreateInvoice",
    "GetInvoice",
    "ListInvoices",
    "UpdateInvoice",
    "SendInvoice",
    "MarkInvoicePaid",
    "DeleteInvoice",
    "BulkInvoiceAction",
    "ListInvoiceActivities",
    "GetInvoiceStats",
    "ActorDTO",
    "LineItemInputDTO",
    "CreateInvoiceCommandDTO",
    "UpdateInvoiceCommandDTO",
    "SendInvoiceCommandDTO",
    "PaymentDTO",
    "BulkActionType",
    "BulkInvoiceActionCommandDTO",
    "ListInvoicesQueryDTO",
    "LineItemDTO",
    "InvoiceResponseDTO",
    "ListInvoicesResponseDTO",
    "DeleteInvoiceResponseDTO",
    "InvoiceActivityDTO",
    "BulkInvoiceActionResponseDTO",
    "InvoiceStatsResponseDTO",
]
