"""Invoice API Routes

FastAPI routes for the invoice lifecycle: create, list, edit, send,
mark paid, delete, bulk actions, activity log and statistics.
"""

from datetime import datetime
from typing import List, Optional
from fastapi import APIRouter, Body, Depends, Query, status
from sqlmodel.ext.asyncio.session import AsyncSession

from config import ApplicationConfig
from libs.result import Error
from src.app.services.delivery_service import InvoiceDeliveryService
from src.app.use_cases.invoicing.dtos import (
    ActorDTO,
    BulkInvoiceActionCommandDTO,
    BulkInvoiceActionResponseDTO,
    CreateInvoiceCommandDTO,
    DeleteInvoiceResponseDTO,
    InvoiceActivityDTO,
    InvoiceResponseDTO,
    InvoiceStatsResponseDTO,
    ListInvoicesQueryDTO,
    ListInvoicesResponseDTO,
    PaymentDTO,
    SendInvoiceCommandDTO,
    UpdateInvoiceCommandDTO,
)
from src.app.use_cases.invoicing.create_invoice import CreateInvoice
from src.app.use_cases.invoicing.get_invoice import GetInvoice
from src.app.use_cases.invoicing.list_invoices import ListInvoices
from src.app.use_cases.invoicing.update_invoice import UpdateInvoice
from src.app.use_cases.invoicing.send_invoice import SendInvoice
from src.app.use_cases.invoicing.mark_invoice_paid import MarkInvoicePaid
from src.app.use_cases.invoicing.delete_invoice import DeleteInvoice
from src.app.use_cases.invoicing.bulk_invoice_action import BulkInvoiceAction
from src.app.use_cases.invoicing.list_invoice_activities import ListInvoiceActivities
from src.app.use_cases.invoicing.get_invoice_stats import GetInvoiceStats
from src.adapter.repositories.invoice_repository import SqlAlchemyInvoiceRepository
from src.adapter.repositories.invoice_line_repository import SqlAlchemyInvoiceLineRepository
from src.adapter.repositories.invoice_activity_repository import SqlAlchemyInvoiceActivityRepository
from src.adapter.repositories.directory_repository import SqlAlchemyDirectoryRepository
from src.adapter.services.unit_of_work import SqlAlchemyUnitOfWork
from src.depends import get_session, get_delivery_service
from src.api.auth import get_actor
from src.api.error import ClientError

router = APIRouter(prefix="/invoices", tags=["Invoices"])

ERROR_STATUS_CODES = {
    "INVOICE_NOT_FOUND": status.HTTP_404_NOT_FOUND,
    "INVALID_INVOICE_STATUS": status.HTTP_409_CONFLICT,
    "DELIVERY_FAILED": status.HTTP_502_BAD_GATEWAY,
}


def _error_example(code: str, message: str) -> dict:
    return {
        "content": {
            "application/json": {"example": {"error": {"code": code, "message": message}}}
        }
    }


NOT_FOUND_RESPONSE = {
    "description": "Invoice not found",
    **_error_example("INVOICE_NOT_FOUND", "Invoice with ID 123 not found"),
}
INVALID_STATUS_RESPONSE = {
    "description": "Invoice is not in a valid status for this action",
    **_error_example("INVALID_INVOICE_STATUS", "Only draft invoices can be sent"),
}


def raise_client_error(error: Error):
    raise ClientError(error, status_code=ERROR_STATUS_CODES.get(error.code, status.HTTP_400_BAD_REQUEST))


@router.post(
    "",
    response_model=InvoiceResponseDTO,
    status_code=status.HTTP_201_CREATED,
    responses={
        400: {
            "description": "Unknown contact or product, or invalid line items",
            **_error_example("CONTACT_NOT_FOUND", "Contact with ID c_1 not found"),
        }
    },
)
async def create_invoice(
    request: CreateInvoiceCommandDTO,
    actor: ActorDTO = Depends(get_actor),
    session: AsyncSession = Depends(get_session),
):
    """
    Create a draft invoice with the next INV-NNNNNN number.

    Line items referencing a catalog product inherit its name, price and
    tax rate unless given. Totals are computed server side.

    **Returns:**
    - 201: Invoice created
    - 400: Unknown contact or product, or invalid line items
    """
    use_case = CreateInvoice(
        SqlAlchemyUnitOfWork(session),
        SqlAlchemyInvoiceRepository(session),
        SqlAlchemyInvoiceLineRepository(session),
        SqlAlchemyInvoiceActivityRepository(session),
        SqlAlchemyDirectoryRepository(session),
        currency=ApplicationConfig.INVOICE_CURRENCY,
    )
    result = await use_case.execute(actor, request)

    if result.is_err():
        raise_client_error(result.error)

    return result.value


@router.get("", response_model=ListInvoicesResponseDTO, status_code=status.HTTP_200_OK)
async def list_invoices(
    statuses: List[str] = Query(default=[], alias="status"),
    contact_id: Optional[str] = Query(default=None, alias="contactId"),
    owner_id: Optional[str] = Query(default=None, alias="ownerId"),
    created_from: Optional[datetime] = Query(default=None, alias="createdFrom"),
    created_to: Optional[datetime] = Query(default=None, alias="createdTo"),
    search: Optional[str] = Query(default=None),
    limit: int = Query(default=20, ge=1, le=100),
    offset: int = Query(default=0, ge=0),
    actor: ActorDTO = Depends(get_actor),
    session: AsyncSession = Depends(get_session),
):
    """
    List invoices of the caller's organization, newest first.

    **Query parameters:**
    - `status` (repeatable): draft, sent, paid, overdue
    - `contactId`, `ownerId`: exact match filters
    - `createdFrom`, `createdTo`: creation time range
    - `search`: matches number, notes, contact name or email
    - `limit` (1-100, default 20), `offset`
    """
    query = ListInvoicesQueryDTO(
        statuses=statuses,
        contact_id=contact_id,
        owner_id=owner_id,
        created_from=created_from,
        created_to=created_to,
        search=search,
        limit=limit,
        offset=offset,
    )
    use_case = ListInvoices(
        SqlAlchemyInvoiceRepository(session),
        SqlAlchemyInvoiceLineRepository(session),
        SqlAlchemyDirectoryRepository(session),
    )
    result = await use_case.execute(actor, query)

    if result.is_err():
        raise_client_error(result.error)

    return result.value


@router.get("/stats", response_model=InvoiceStatsResponseDTO, status_code=status.HTTP_200_OK)
async def get_invoice_stats(
    actor: ActorDTO = Depends(get_actor),
    session: AsyncSession = Depends(get_session),
):
    """Per-status counts and totals for the caller's organization."""
    result = await GetInvoiceStats(SqlAlchemyInvoiceRepository(session)).execute(actor)

    if result.is_err():
        raise_client_error(result.error)

    return result.value


@router.post(
    "/bulk",
    response_model=BulkInvoiceActionResponseDTO,
    status_code=status.HTTP_200_OK,
)
async def bulk_invoice_action(
    request: BulkInvoiceActionCommandDTO,
    actor: ActorDTO = Depends(get_actor),
    session: AsyncSession = Depends(get_session),
    delivery_service: InvoiceDeliveryService = Depends(get_delivery_service),
):
    """
    Apply `send`, `mark_paid` or `delete` to many invoices at once.

    Invoices that are unknown, belong to another organization, or are not
    in a valid status for the action are returned in `skippedIds`.

    **Example request:**
    ```json
    {"action": "mark_paid", "invoiceIds": ["inv_1", "inv_2"]}
    ```
    """
    use_case = BulkInvoiceAction(
        SqlAlchemyUnitOfWork(session),
        SqlAlchemyInvoiceRepository(session),
        SqlAlchemyInvoiceLineRepository(session),
        SqlAlchemyInvoiceActivityRepository(session),
        SqlAlchemyDirectoryRepository(session),
        delivery_service,
    )
    result = await use_case.execute(actor, request)

    if result.is_err():
        raise_client_error(result.error)

    return result.value


@router.get(
    "/{invoice_id}",
    response_model=InvoiceResponseDTO,
    status_code=status.HTTP_200_OK,
    responses={404: NOT_FOUND_RESPONSE},
)
async def get_invoice(
    invoice_id: str,
    actor: ActorDTO = Depends(get_actor),
    session: AsyncSession = Depends(get_session),
):
    use_case = GetInvoice(
        SqlAlchemyInvoiceRepository(session),
        SqlAlchemyInvoiceLineRepository(session),
        SqlAlchemyDirectoryRepository(session),
    )
    result = await use_case.execute(actor, invoice_id)

    if result.is_err():
        raise_client_error(result.error)

    return result.value


@router.patch(
    "/{invoice_id}",
    response_model=InvoiceResponseDTO,
    status_code=status.HTTP_200_OK,
    responses={404: NOT_FOUND_RESPONSE, 409: INVALID_STATUS_RESPONSE},
)
async def update_invoice(
    invoice_id: str,
    request: UpdateInvoiceCommandDTO,
    actor: ActorDTO = Depends(get_actor),
    session: AsyncSession = Depends(get_session),
):
    """
    Edit an unpaid invoice.

    Passing `lineItems` replaces the whole line item set and recomputes
    subtotal, tax and total. Paid invoices cannot be edited.
    """
    use_case = UpdateInvoice(
        SqlAlchemyUnitOfWork(session),
        SqlAlchemyInvoiceRepository(session),
        SqlAlchemyInvoiceLineRepository(session),
        SqlAlchemyDirectoryRepository(session),
    )
    result = await use_case.execute(actor, invoice_id, request)

    if result.is_err():
        raise_client_error(result.error)

    return result.value


@router.post(
    "/{invoice_id}/send",
    response_model=InvoiceResponseDTO,
    status_code=status.HTTP_200_OK,
    responses={
        404: NOT_FOUND_RESPONSE,
        409: INVALID_STATUS_RESPONSE,
        502: {
            "description": "Delivery was rejected",
            **_error_example("DELIVERY_FAILED", "Invoice INV-000001 could not be delivered"),
        },
    },
)
async def send_invoice(
    invoice_id: str,
    request: Optional[SendInvoiceCommandDTO] = Body(default=None),
    actor: ActorDTO = Depends(get_actor),
    session: AsyncSession = Depends(get_session),
    delivery_service: InvoiceDeliveryService = Depends(get_delivery_service),
):
    """
    Deliver a draft invoice and move it to `sent`.

    The body is optional; channels default to email.
    """
    use_case = SendInvoice(
        SqlAlchemyUnitOfWork(session),
        SqlAlchemyInvoiceRepository(session),
        SqlAlchemyInvoiceLineRepository(session),
        SqlAlchemyInvoiceActivityRepository(session),
        SqlAlchemyDirectoryRepository(session),
        delivery_service,
    )
    result = await use_case.execute(actor, invoice_id, request)

    if result.is_err():
        raise_client_error(result.error)

    return result.value


@router.post(
    "/{invoice_id}/mark-paid",
    response_model=InvoiceResponseDTO,
    status_code=status.HTTP_200_OK,
    responses={404: NOT_FOUND_RESPONSE, 409: INVALID_STATUS_RESPONSE},
)
async def mark_invoice_paid(
    invoice_id: str,
    request: Optional[PaymentDTO] = Body(default=None),
    actor: ActorDTO = Depends(get_actor),
    session: AsyncSession = Depends(get_session),
):
    """
    Mark a sent or overdue invoice as paid.

    Optional payment details (amount, paymentDate, paymentMethod,
    reference) are recorded on the activity log.
    """
    use_case = MarkInvoicePaid(
        SqlAlchemyUnitOfWork(session),
        SqlAlchemyInvoiceRepository(session),
        SqlAlchemyInvoiceLineRepository(session),
        SqlAlchemyInvoiceActivityRepository(session),
        SqlAlchemyDirectoryRepository(session),
    )
    result = await use_case.execute(actor, invoice_id, request)

    if result.is_err():
        raise_client_error(result.error)

    return result.value


@router.delete(
    "/{invoice_id}",
    response_model=DeleteInvoiceResponseDTO,
    status_code=status.HTTP_200_OK,
    responses={404: NOT_FOUND_RESPONSE},
)
async def delete_invoice(
    invoice_id: str,
    actor: ActorDTO = Depends(get_actor),
    session: AsyncSession = Depends(get_session),
):
    """Delete an invoice and its line items. Activities are kept."""
    use_case = DeleteInvoice(
        SqlAlchemyUnitOfWork(session),
        SqlAlchemyInvoiceRepository(session),
        SqlAlchemyInvoiceLineRepository(session),
    )
    result = await use_case.execute(actor, invoice_id)

    if result.is_err():
        raise_client_error(result.error)

    return result.value


@router.get(
    "/{invoice_id}/activities",
    response_model=List[InvoiceActivityDTO],
    status_code=status.HTTP_200_OK,
    responses={404: NOT_FOUND_RESPONSE},
)
async def list_invoice_activities(
    invoice_id: str,
    actor: ActorDTO = Depends(get_actor),
    session: AsyncSession = Depends(get_session),
):
    """Activity log of an invoice, newest first."""
    use_case = ListInvoiceActivities(
        SqlAlchemyInvoiceRepository(session),
        SqlAlchemyInvoiceActivityRepository(session),
        SqlAlchemyDirectoryRepository(session),
    )
    result = await use_case.execute(actor, invoice_id)

    if result.is_err():
        raise_client_error(result.error)

    return result.value
