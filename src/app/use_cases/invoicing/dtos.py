"""Data Transfer Objects for Invoicing Use Cases

Pydantic models for command inputs and response outputs. Attributes are
snake_case in Python and camelCase on the wire (e.g. tax_total <-> taxTotal).
"""

from datetime import date, datetime
from decimal import Decimal
from enum import Enum
from typing import Optional, Dict, Any, List
from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel
from src.domain.invoice_activity import DeliveryChannel


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class ActorDTO(CamelModel):
    """Authenticated user resolved to their organization (tenant)"""

    user_id: str
    org_id: str
    name: Optional[str] = None


class LineItemInputDTO(CamelModel):
    """
    Line item as submitted by a client

    product_name and unit_price may be omitted when product_id points at a
    catalog product; the catalog then supplies them.
    """

    product_id: Optional[str] = Field(
        default=None,
        description="Catalog product ID (omit for ad-hoc items)"
    )

    product_name: Optional[str] = Field(
        default=None,
        description="Display name (defaults to the catalog product name)"
    )

    description: Optional[str] = None

    quantity: Decimal = Field(
        ...,
        gt=0,
        description="Quantity billed (must be > 0)"
    )

    unit_price: Optional[int] = Field(
        default=None,
        ge=0,
        description="Price per unit in minor currency units (cents)"
    )

    tax_rate: Optional[Decimal] = Field(
        default=None,
        ge=0,
        le=100,
        description="Tax rate in percent (defaults to the catalog rate, else 0)"
    )


class CreateInvoiceCommandDTO(CamelModel):
    """
    Command DTO for creating an invoice

    Used as input to CreateInvoice use case.
    """

    contact_id: str = Field(
        ...,
        min_length=1,
        description="Billed contact ID"
    )

    line_items: List[LineItemInputDTO] = Field(
        default_factory=list,
        description="Line items in display order"
    )

    notes: Optional[str] = None
    terms: Optional[str] = None
    due_date: Optional[date] = None

    payment_terms: Optional[int] = Field(
        default=None,
        ge=0,
        description="Payment terms in days"
    )

    class Config:
        json_schema_extra = {
            "example": {
                "contactId": "c0ffee00-0000-4000-8000-000000000001",
                "lineItems": [
                    {"productName": "Consulting", "quantity": "2", "unitPrice": 1000, "taxRate": "10"},
                    {"productName": "Setup fee", "quantity": "1", "unitPrice": 500, "taxRate": "0"},
                ],
                "dueDate": "2024-02-15",
                "paymentTerms": 30,
            }
        }


class UpdateInvoiceCommandDTO(CamelModel):
    """
    Command DTO for updating an invoice

    Only fields present in the request are applied; passing line_items
    replaces the whole line item set and recomputes every total.
    """

    contact_id: Optional[str] = Field(default=None, min_length=1)
    line_items: Optional[List[LineItemInputDTO]] = None
    notes: Optional[str] = None
    terms: Optional[str] = None
    due_date: Optional[date] = None
    payment_terms: Optional[int] = Field(default=None, ge=0)


class SendInvoiceCommandDTO(CamelModel):
    channels: List[DeliveryChannel] = Field(
        default_factory=lambda: [DeliveryChannel.EMAIL],
        min_length=1,
        description="Delivery channels; the first one is recorded on the activity"
    )
    subject: Optional[str] = None
    custom_message: Optional[str] = None
    attach_pdf: bool = False


class PaymentDTO(CamelModel):
    """Manual payment details recorded when marking an invoice paid"""

    amount: Optional[int] = Field(default=None, ge=0, description="Amount paid in minor units")
    payment_date: Optional[datetime] = None
    payment_method: Optional[str] = None
    reference: Optional[str] = None


class BulkActionType(str, Enum):
    SEND = "send"
    MARK_PAID = "mark_paid"
    DELETE = "delete"


class BulkInvoiceActionCommandDTO(CamelModel):
    action: BulkActionType
    invoice_ids: List[str] = Field(..., min_length=1)
    channels: List[DeliveryChannel] = Field(
        default_factory=lambda: [DeliveryChannel.EMAIL],
        min_length=1,
        description="Delivery channels used by the send action"
    )


class ListInvoicesQueryDTO(CamelModel):
    statuses: List[str] = Field(default_factory=list)
    contact_id: Optional[str] = None
    owner_id: Optional[str] = None
    created_from: Optional[datetime] = None
    created_to: Optional[datetime] = None
    search: Optional[str] = None
    limit: int = Field(default=20, ge=1, le=100)
    offset: int = Field(default=0, ge=0)


class LineItemDTO(CamelModel):
    id: str
    product_id: Optional[str] = None
    product_name: str
    description: Optional[str] = None
    quantity: Decimal
    unit_price: int
    tax_rate: Decimal
    line_total: int


class InvoiceResponseDTO(CamelModel):
    """
    Response DTO for a fully hydrated invoice

    Returned by CreateInvoice, GetInvoice, UpdateInvoice, SendInvoice and
    MarkInvoicePaid.
    """

    id: str
    org_id: str
    number: str
    status: str
    contact_id: str
    contact_name: str
    contact_email: Optional[str] = None
    line_items: List[LineItemDTO]
    subtotal: int
    tax_total: int
    total: int
    currency: str
    notes: Optional[str] = None
    terms: Optional[str] = None
    due_date: Optional[date] = None
    due_date_status: str
    payment_terms: Optional[int] = None
    sent_at: Optional[datetime] = None
    paid_at: Optional[datetime] = None
    owner_id: str
    owner_name: str
    created_at: datetime
    updated_at: datetime

    class Config:
        json_schema_extra = {
            "example": {
                "id": "7d0f3e5c-7a43-4b8e-9d8e-3c2b1a0f9e8d",
                "orgId": "org_acme",
                "number": "INV-000042",
                "status": "draft",
                "contactId": "c0ffee00-0000-4000-8000-000000000001",
                "contactName": "Ada Lovelace",
                "contactEmail": "ada@example.com",
                "lineItems": [],
                "subtotal": 2500,
                "taxTotal": 200,
                "total": 2700,
                "currency": "USD",
                "dueDateStatus": "not_set",
                "ownerId": "user_1",
                "ownerName": "Grace Hopper",
                "createdAt": "2024-01-31T00:00:00Z",
                "updatedAt": "2024-01-31T00:00:00Z",
            }
        }


class ListInvoicesResponseDTO(CamelModel):
    invoices: List[InvoiceResponseDTO]
    total: int
    limit: int
    offset: int


class DeleteInvoiceResponseDTO(CamelModel):
    invoice_id: str
    number: str
    deleted_line_items: int


class InvoiceActivityDTO(CamelModel):
    id: str
    invoice_id: str
    type: str
    title: str
    description: Optional[str] = None
    channel: Optional[str] = None
    created_by: str
    created_by_name: str
    created_at: datetime
    metadata: Optional[Dict[str, Any]] = None


class BulkInvoiceActionResponseDTO(CamelModel):
    """
    Result of a bulk action

    affected_ids: invoices the action was applied to
    skipped_ids: invoices not found in the tenant or not in a valid status
    """

    action: BulkActionType
    affected_ids: List[str]
    skipped_ids: List[str]


class StatusBreakdownDTO(CamelModel):
    status: str
    count: int
    total: int


class InvoiceStatsTotalsDTO(CamelModel):
    total_invoices: int
    total_value: int
    total_paid: int
    average_value: int
    overdue_count: int


class InvoiceStatsResponseDTO(CamelModel):
    status_breakdown: List[StatusBreakdownDTO]
    totals: InvoiceStatsTotalsDTO
