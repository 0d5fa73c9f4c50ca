"""Invoice Domain Entity

Tracks customer invoices, their money totals and payment status.
"""

from datetime import datetime, date
from enum import Enum
from typing import Optional
from sqlmodel import Field, Column, Index, UniqueConstraint
from sqlalchemy import BigInteger, String, Date, Text, Integer
from src.domain.base import BaseModel, UTCDateTime, as_utc, generate_uuid, utcnow


class InvoiceStatus(str, Enum):
    """Invoice status types"""
    DRAFT = "draft"
    SENT = "sent"
    PAID = "paid"
    OVERDUE = "overdue"


# Event -> statuses the event may be applied from
SENDABLE_STATUSES = (InvoiceStatus.DRAFT,)
PAYABLE_STATUSES = (InvoiceStatus.SENT, InvoiceStatus.OVERDUE)
EDITABLE_STATUSES = (InvoiceStatus.DRAFT, InvoiceStatus.SENT, InvoiceStatus.OVERDUE)


class Invoice(BaseModel, table=True):
    """
    Invoice - Customer invoice owned by one organization (tenant)

    Domain Rules:
    - number is unique per org_id and never changes once assigned
    - Status transitions: draft -> sent -> paid, overdue -> paid
    - subtotal/tax_total/total are derived from the line items
    - total = subtotal + tax_total
    - sent_at and paid_at are set once, on their transition
    - Amounts are integer minor currency units (cents)
    """

    __tablename__ = "invoices"
    __table_args__ = (
        UniqueConstraint("org_id", "number", name="uq_invoices_org_number"),
        Index("ix_invoices_org_id_created_at", "org_id", "created_at"),
        Index("ix_invoices_status", "status"),
    )

    id: str = Field(
        default_factory=generate_uuid,
        primary_key=True,
        description="Unique invoice identifier"
    )

    org_id: str = Field(
        index=True,
        description="Owning organization (tenant) ID"
    )

    number: str = Field(
        sa_column=Column(String(32), nullable=False),
        description="Tenant-scoped invoice number (e.g., INV-000042)"
    )

    status: InvoiceStatus = Field(
        default=InvoiceStatus.DRAFT,
        description="Invoice status (draft, sent, paid, overdue)"
    )

    contact_id: str = Field(
        index=True,
        description="Billed contact ID"
    )

    subtotal: int = Field(
        default=0,
        sa_column=Column(BigInteger, nullable=False),
        description="Sum of quantity * unit_price, tax exclusive (minor units)"
    )

    tax_total: int = Field(
        default=0,
        sa_column=Column(BigInteger, nullable=False),
        description="Sum of line tax amounts (minor units)"
    )

    total: int = Field(
        default=0,
        sa_column=Column(BigInteger, nullable=False),
        description="subtotal + tax_total (minor units)"
    )

    currency: str = Field(
        default="USD",
        sa_column=Column(String(3), nullable=False),
        description="Currency code (ISO 4217)"
    )

    notes: Optional[str] = Field(
        default=None,
        sa_column=Column(Text, nullable=True),
    )

    terms: Optional[str] = Field(
        default=None,
        sa_column=Column(Text, nullable=True),
    )

    due_date: Optional[date] = Field(
        default=None,
        sa_column=Column(Date, nullable=True),
    )

    payment_terms: Optional[int] = Field(
        default=None,
        sa_column=Column(Integer, nullable=True),
        description="Payment terms in days"
    )

    sent_at: Optional[datetime] = Field(
        default=None,
        sa_column=Column(UTCDateTime(), nullable=True),
        description="Timestamp when invoice was sent"
    )

    paid_at: Optional[datetime] = Field(
        default=None,
        sa_column=Column(UTCDateTime(), nullable=True),
        description="Timestamp when invoice was paid"
    )

    owner_id: str = Field(
        description="User who created the invoice"
    )

    created_at: datetime = Field(
        default_factory=utcnow,
        sa_column=Column(UTCDateTime(), nullable=False),
        description="Invoice creation timestamp"
    )

    updated_at: datetime = Field(
        default_factory=utcnow,
        sa_column=Column(UTCDateTime(), nullable=False),
        description="Last update timestamp"
    )

    def can_send(self) -> bool:
        return self.status in SENDABLE_STATUSES

    def can_mark_paid(self) -> bool:
        return self.status in PAYABLE_STATUSES

    def is_editable(self) -> bool:
        return self.status in EDITABLE_STATUSES

    def mark_sent(self, sent_at: Optional[datetime] = None) -> None:
        """Move draft -> sent. Caller checks can_send() first."""
        self.status = InvoiceStatus.SENT
        if self.sent_at is None:
            self.sent_at = as_utc(sent_at) or utcnow()

    def mark_paid(self, paid_at: Optional[datetime] = None) -> None:
        """Move sent/overdue -> paid. Caller checks can_mark_paid() first."""
        self.status = InvoiceStatus.PAID
        if self.paid_at is None:
            self.paid_at = as_utc(paid_at) or utcnow()
