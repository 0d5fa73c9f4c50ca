"""Explicit entity -> DTO conversions for the invoicing use cases"""

from datetime import date
from typing import List, Optional
from src.domain.directory import Contact, Profile
from src.domain.due_date import due_date_status
from src.domain.invoice import Invoice
from src.domain.invoice_activity import InvoiceActivity
from src.domain.invoice_line import InvoiceLineItem
from .dtos import InvoiceActivityDTO, InvoiceResponseDTO, LineItemDTO

UNKNOWN_NAME = "Unknown"


def to_line_item_dto(item: InvoiceLineItem) -> LineItemDTO:
    return LineItemDTO(
        id=item.id,
        product_id=item.product_id,
        product_name=item.product_name,
        description=item.description,
        quantity=item.quantity,
        unit_price=item.unit_price,
        tax_rate=item.tax_rate,
        line_total=item.line_total,
    )


def to_invoice_dto(
    invoice: Invoice,
    line_items: List[InvoiceLineItem],
    contact: Optional[Contact] = None,
    owner: Optional[Profile] = None,
    today: Optional[date] = None,
) -> InvoiceResponseDTO:
    return InvoiceResponseDTO(
        id=invoice.id,
        org_id=invoice.org_id,
        number=invoice.number,
        status=invoice.status.value,
        contact_id=invoice.contact_id,
        contact_name=contact.full_name if contact else UNKNOWN_NAME,
        contact_email=contact.email if contact else None,
        line_items=[to_line_item_dto(item) for item in line_items],
        subtotal=invoice.subtotal,
        tax_total=invoice.tax_total,
        total=invoice.total,
        currency=invoice.currency,
        notes=invoice.notes,
        terms=invoice.terms,
        due_date=invoice.due_date,
        due_date_status=due_date_status(invoice.due_date, today).value,
        payment_terms=invoice.payment_terms,
        sent_at=invoice.sent_at,
        paid_at=invoice.paid_at,
        owner_id=invoice.owner_id,
        owner_name=owner.full_name if owner else UNKNOWN_NAME,
        created_at=invoice.created_at,
        updated_at=invoice.updated_at,
    )


def to_activity_dto(
    activity: InvoiceActivity, creator: Optional[Profile] = None
) -> InvoiceActivityDTO:
    return InvoiceActivityDTO(
        id=activity.id,
        invoice_id=activity.invoice_id,
        type=activity.type.value,
        title=activity.title,
        description=activity.description,
        channel=activity.channel.value if activity.channel else None,
        created_by=activity.created_by,
        created_by_name=creator.full_name if creator else UNKNOWN_NAME,
        created_at=activity.created_at,
        metadata=activity.details,
    )
