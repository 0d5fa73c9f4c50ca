"""Invoice Sequence Domain Entity

Per-tenant invoice number counter. Locked with SELECT FOR UPDATE while a
new number is reserved so concurrent creations never share a number.
"""

from datetime import datetime
from sqlmodel import Field, Column
from sqlalchemy import BigInteger
from src.domain.base import BaseModel, UTCDateTime, utcnow


class InvoiceSequence(BaseModel, table=True):
    __tablename__ = "invoice_sequences"

    org_id: str = Field(
        primary_key=True,
        description="Organization (tenant) the counter belongs to"
    )

    last_number: int = Field(
        default=0,
        sa_column=Column(BigInteger, nullable=False),
        description="Last invoice number handed out"
    )

    updated_at: datetime = Field(
        default_factory=utcnow,
        sa_column=Column(UTCDateTime(), nullable=False),
    )
