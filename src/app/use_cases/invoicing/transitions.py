"""Status transitions shared by the single and bulk invoice actions

Each function mutates the invoice in memory and returns the one activity
entry the transition appends. Callers persist both and commit.
"""

from datetime import datetime
from typing import List, Optional
from src.domain.base import as_utc, utcnow
from src.domain.invoice import Invoice
from src.domain.invoice_activity import InvoiceActivity, ActivityType, DeliveryChannel
from .dtos import ActorDTO, PaymentDTO


def send_invoice(
    invoice: Invoice,
    actor: ActorDTO,
    channels: List[DeliveryChannel],
    subject: Optional[str] = None,
    message: Optional[str] = None,
    now: Optional[datetime] = None,
) -> InvoiceActivity:
    """draft -> sent; sent_at is stamped once"""
    invoice.mark_sent(now or utcnow())

    channel_names = [channel.value for channel in channels]
    details = {"channels": channel_names}
    if subject:
        details["subject"] = subject

    return InvoiceActivity(
        org_id=invoice.org_id,
        invoice_id=invoice.id,
        type=ActivityType.SENT,
        title=f"Invoice sent via {', '.join(channel_names)}",
        description=message,
        channel=channels[0],
        created_by=actor.user_id,
        details=details,
    )


def mark_invoice_paid(
    invoice: Invoice,
    actor: ActorDTO,
    payment: Optional[PaymentDTO] = None,
    now: Optional[datetime] = None,
) -> InvoiceActivity:
    """sent/overdue -> paid; paid_at is the payment date when one is given"""
    paid_at = as_utc(payment.payment_date) if payment and payment.payment_date else (now or utcnow())
    invoice.mark_paid(paid_at)

    details = None
    description = None
    if payment:
        details = {
            "amount": payment.amount if payment.amount is not None else invoice.total,
            "method": payment.payment_method,
            "reference": payment.reference,
        }
        if payment.payment_method:
            description = f"Payment received via {payment.payment_method}"

    return InvoiceActivity(
        org_id=invoice.org_id,
        invoice_id=invoice.id,
        type=ActivityType.PAID,
        title=f"Invoice {invoice.number} marked as paid",
        description=description,
        created_by=actor.user_id,
        details=details,
    )
