"""Unit tests for UpdateInvoice use case"""

from datetime import date
from decimal import Decimal
from unittest.mock import AsyncMock

import pytest

from src.app.use_cases.invoicing.dtos import LineItemInputDTO, UpdateInvoiceCommandDTO
from src.app.use_cases.invoicing.update_invoice import UpdateInvoice
from src.domain.invoice import InvoiceStatus


@pytest.fixture
def update_invoice_use_case(mock_uow, mock_invoice_repo, mock_invoice_line_repo, mock_directory_repo):
    return UpdateInvoice(
        uow=mock_uow,
        invoice_repo=mock_invoice_repo,
        invoice_line_repo=mock_invoice_line_repo,
        directory_repo=mock_directory_repo,
    )


@pytest.mark.asyncio
class TestUpdateInvoice:

    async def test_replacing_line_items_recomputes_totals(
        self, update_invoice_use_case, mock_invoice_repo, mock_invoice_line_repo, mock_uow, actor, make_invoice
    ):
        """
        Given: A draft invoice totalling 2700
        When: Its line items are replaced by a single 1 x 500 item
        Then: Old items are deleted, the new set written and totals recomputed
        """
        # Arrange
        invoice = make_invoice(subtotal=2500, tax_total=200, total=2700)
        mock_invoice_repo.get_by_id = AsyncMock(return_value=invoice)
        command = UpdateInvoiceCommandDTO(
            line_items=[LineItemInputDTO(product_name="Setup fee", quantity=Decimal("1"), unit_price=500)]
        )

        # Act
        result = await update_invoice_use_case.execute(actor, "invoice_1", command)

        # Assert
        assert result.is_ok()
        assert result.value.subtotal == 500
        assert result.value.tax_total == 0
        assert result.value.total == 500
        mock_invoice_line_repo.delete_by_invoice_id.assert_awaited_once_with("invoice_1")
        mock_invoice_line_repo.create_many.assert_awaited_once()
        mock_invoice_repo.get_by_id.assert_awaited_once_with("org_acme", "invoice_1", for_update=True)
        mock_uow.commit.assert_awaited_once()

    async def test_header_only_update_keeps_line_items(
        self, update_invoice_use_case, mock_invoice_repo, mock_invoice_line_repo, actor, make_invoice
    ):
        # Arrange
        invoice = make_invoice(total=2700, notes="old")
        mock_invoice_repo.get_by_id = AsyncMock(return_value=invoice)
        command = UpdateInvoiceCommandDTO(notes="new", due_date=date(2024, 2, 15))

        # Act
        result = await update_invoice_use_case.execute(actor, "invoice_1", command)

        # Assert
        assert result.is_ok()
        assert invoice.notes == "new"
        assert invoice.due_date == date(2024, 2, 15)
        assert invoice.total == 2700
        mock_invoice_line_repo.delete_by_invoice_id.assert_not_called()

    async def test_fields_not_sent_are_untouched(
        self, update_invoice_use_case, mock_invoice_repo, actor, make_invoice
    ):
        # Arrange
        invoice = make_invoice(notes="keep me", terms="Net 30")
        mock_invoice_repo.get_by_id = AsyncMock(return_value=invoice)

        # Act
        await update_invoice_use_case.execute(actor, "invoice_1", UpdateInvoiceCommandDTO(terms=None))

        # Assert
        assert invoice.notes == "keep me"
        assert invoice.terms is None

    async def test_update_does_not_append_activity(
        self, update_invoice_use_case, mock_invoice_repo, actor, make_invoice
    ):
        """
        Given: A draft invoice
        When: It is edited
        Then: The use case has no activity repository to write to and succeeds
        """
        # Arrange
        mock_invoice_repo.get_by_id = AsyncMock(return_value=make_invoice())

        # Act
        result = await update_invoice_use_case.execute(actor, "invoice_1", UpdateInvoiceCommandDTO(notes="x"))

        # Assert
        assert result.is_ok()
        assert not hasattr(update_invoice_use_case, "activity_repo")

    async def test_sent_invoice_can_be_edited(
        self, update_invoice_use_case, mock_invoice_repo, actor, make_invoice
    ):
        # Arrange
        mock_invoice_repo.get_by_id = AsyncMock(return_value=make_invoice(InvoiceStatus.SENT))

        # Act
        result = await update_invoice_use_case.execute(actor, "invoice_1", UpdateInvoiceCommandDTO(notes="x"))

        # Assert
        assert result.is_ok()
        assert result.value.status == "sent"


@pytest.mark.asyncio
class TestUpdateInvoiceErrors:

    async def test_paid_invoice_is_locked(
        self, update_invoice_use_case, mock_invoice_repo, mock_uow, actor, make_invoice
    ):
        # Arrange
        mock_invoice_repo.get_by_id = AsyncMock(return_value=make_invoice(InvoiceStatus.PAID))

        # Act
        result = await update_invoice_use_case.execute(actor, "invoice_1", UpdateInvoiceCommandDTO(notes="x"))

        # Assert
        assert result.is_err()
        assert result.error.code == "INVALID_INVOICE_STATUS"
        mock_invoice_repo.update.assert_not_called()
        mock_uow.commit.assert_not_called()

    async def test_invoice_not_found(self, update_invoice_use_case, mock_invoice_repo, actor):
        # Arrange
        mock_invoice_repo.get_by_id = AsyncMock(return_value=None)

        # Act
        result = await update_invoice_use_case.execute(actor, "missing", UpdateInvoiceCommandDTO())

        # Assert
        assert result.is_err()
        assert result.error.code == "INVOICE_NOT_FOUND"

    async def test_unknown_contact(
        self, update_invoice_use_case, mock_invoice_repo, mock_directory_repo, actor, make_invoice
    ):
        # Arrange
        mock_invoice_repo.get_by_id = AsyncMock(return_value=make_invoice())
        mock_directory_repo.get_contact = AsyncMock(return_value=None)

        # Act
        result = await update_invoice_use_case.execute(
            actor, "invoice_1", UpdateInvoiceCommandDTO(contact_id="contact_other_org")
        )

        # Assert
        assert result.is_err()
        assert result.error.code == "CONTACT_NOT_FOUND"

    async def test_invalid_line_items_roll_back(
        self, update_invoice_use_case, mock_invoice_repo, mock_invoice_line_repo, mock_uow, actor, make_invoice
    ):
        # Arrange
        mock_invoice_repo.get_by_id = AsyncMock(return_value=make_invoice())
        command = UpdateInvoiceCommandDTO(line_items=[LineItemInputDTO(product_name="No price", quantity=Decimal("1"))])

        # Act
        result = await update_invoice_use_case.execute(actor, "invoice_1", command)

        # Assert
        assert result.is_err()
        assert result.error.code == "VALIDATION_ERROR"
        mock_invoice_line_repo.delete_by_invoice_id.assert_not_called()
        mock_uow.rollback.assert_awaited_once()

    async def test_persistence_failure(
        self, update_invoice_use_case, mock_invoice_repo, mock_uow, actor, make_invoice
    ):
        # Arrange
        mock_invoice_repo.get_by_id = AsyncMock(return_value=make_invoice())
        mock_invoice_repo.update = AsyncMock(side_effect=Exception("deadlock"))

        # Act
        result = await update_invoice_use_case.execute(actor, "invoice_1", UpdateInvoiceCommandDTO(notes="x"))

        # Assert
        assert result.is_err()
        assert result.error.code == "UPDATE_INVOICE_FAILED"
        mock_uow.rollback.assert_awaited_once()
