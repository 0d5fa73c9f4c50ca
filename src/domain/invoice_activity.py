"""Invoice Activity Domain Entity

Immutable append-only audit trail of invoice state changes.
"""

from datetime import datetime
from enum import Enum
from typing import Optional, Dict, Any
from sqlmodel import Field, Column, Index
from sqlalchemy import JSON, String, Text
from src.domain.base import BaseModel, UTCDateTime, generate_uuid, utcnow


class ActivityType(str, Enum):
    """Invoice activity types"""
    CREATED = "created"
    SENT = "sent"
    VIEWED = "viewed"
    PAID = "paid"
    REMINDER_SENT = "reminder_sent"
    STATUS_CHANGED = "status_changed"


class DeliveryChannel(str, Enum):
    """Channels an invoice can be delivered through"""
    EMAIL = "email"
    SMS = "sms"


class InvoiceActivity(BaseModel, table=True):
    """
    Invoice Activity - Append-only log entry attached to an invoice

    Domain Rules:
    - Activities are never updated or deleted
    - Every create/send/mark-paid appends exactly one activity
    - invoice_id is not a foreign key: the log outlives a deleted invoice
    """

    __tablename__ = "invoice_activities"
    __table_args__ = (
        Index("ix_invoice_activities_invoice_id_created_at", "invoice_id", "created_at"),
    )

    id: str = Field(
        default_factory=generate_uuid,
        primary_key=True,
    )

    org_id: str = Field(
        index=True,
        description="Owning organization (tenant) ID"
    )

    invoice_id: str = Field(
        sa_column=Column(String(36), nullable=False),
        description="Invoice this entry belongs to"
    )

    type: ActivityType = Field(
        description="Activity type (created, sent, paid, ...)"
    )

    title: str = Field(
        sa_column=Column(String(255), nullable=False),
    )

    description: Optional[str] = Field(
        default=None,
        sa_column=Column(Text, nullable=True),
    )

    channel: Optional[DeliveryChannel] = Field(
        default=None,
        description="Delivery channel for sent activities"
    )

    created_by: str = Field(
        description="User who performed the action"
    )

    # "metadata" is reserved on declarative models, so the attribute is renamed
    details: Optional[Dict[str, Any]] = Field(
        default=None,
        sa_column=Column("metadata", JSON, nullable=True),
    )

    created_at: datetime = Field(
        default_factory=utcnow,
        sa_column=Column(UTCDateTime(), nullable=False),
        description="Activity timestamp (immutable)"
    )
