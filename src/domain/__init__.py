from .base import BaseModel, generate_uuid
from .invoice import Invoice, InvoiceStatus
from .invoice_line import InvoiceLineItem
from .invoice_activity import InvoiceActivity, ActivityType, DeliveryChannel
from .invoice_sequence import InvoiceSequence
from .directory import Profile, Contact, Product
from .totals import InvoiceTotals, compute_totals, line_total
from .numbering import next_invoice_number, format_invoice_number, parse_sequence
from .due_date import DueDateStatus, due_date_status

__all__ = [
    "BaseModel",
    "generate_uuid",
    "Invoice",
    "InvoiceStatus",
    "InvoiceLineItem",
    "InvoiceActivity",
    "ActivityType",
    "DeliveryChannel",
    "InvoiceSequence",
    "Profile",
    "Contact",
    "Product",
    "InvoiceTotals",
    "compute_totals",
    "line_total",
    "next_invoice_number",
    "format_invoice_number",
    "parse_sequence",
    "DueDateStatus",
    "due_date_status",
]
