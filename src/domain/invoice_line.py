"""Invoice Line Item Domain Entity

Tracks individual billable rows within an invoice.
"""

from datetime import datetime
from decimal import Decimal
from typing import Optional
from sqlmodel import Field, Column, Index
from sqlalchemy import BigInteger, ForeignKey, Integer, Numeric, String, Text
from src.domain.base import BaseModel, UTCDateTime, generate_uuid, utcnow


class InvoiceLineItem(BaseModel, table=True):
    """
    Invoice Line Item - One billable row on an invoice

    Domain Rules:
    - Each line item belongs to exactly one invoice (deleted with it)
    - position preserves insertion order for display
    - line_total = round(quantity * unit_price * (1 + tax_rate / 100))
    - line_total is recomputed whenever the line item set is replaced
    """

    __tablename__ = "invoice_line_items"
    __table_args__ = (
        Index("ix_invoice_line_items_invoice_id", "invoice_id"),
    )

    id: str = Field(
        default_factory=generate_uuid,
        primary_key=True,
        description="Unique line item identifier"
    )

    invoice_id: str = Field(
        sa_column=Column(String(36), ForeignKey("invoices.id", ondelete="CASCADE"), nullable=False),
        description="Foreign key to Invoice"
    )

    position: int = Field(
        default=0,
        sa_column=Column(Integer, nullable=False),
        description="Zero-based display order within the invoice"
    )

    product_id: Optional[str] = Field(
        default=None,
        description="Catalog product reference (absent for ad-hoc items)"
    )

    product_name: str = Field(
        sa_column=Column(String(255), nullable=False),
        description="Display name of the billed item"
    )

    description: Optional[str] = Field(
        default=None,
        sa_column=Column(Text, nullable=True),
    )

    quantity: Decimal = Field(
        sa_column=Column(Numeric(18, 6), nullable=False),
        description="Quantity billed"
    )

    unit_price: int = Field(
        sa_column=Column(BigInteger, nullable=False),
        description="Price per unit in minor currency units"
    )

    tax_rate: Decimal = Field(
        default=Decimal("0"),
        sa_column=Column(Numeric(7, 4), nullable=False),
        description="Tax rate in percent (e.g., 10 for 10%)"
    )

    line_total: int = Field(
        sa_column=Column(BigInteger, nullable=False),
        description="Tax inclusive line amount in minor currency units"
    )

    created_at: datetime = Field(
        default_factory=utcnow,
        sa_column=Column(UTCDateTime(), nullable=False),
        description="Line item creation timestamp"
    )
