"""Unit tests for CreateInvoice use case

Tests cover:
- Draft creation with computed totals and reserved number
- Catalog defaults for product line items
- Contact / product validation
- "created" activity
- Rollback on persistence failure
"""

from decimal import Decimal
from unittest.mock import AsyncMock

import pytest

from src.app.use_cases.invoicing.create_invoice import CreateInvoice
from src.app.use_cases.invoicing.dtos import CreateInvoiceCommandDTO, LineItemInputDTO
from src.domain.invoice import Invoice, InvoiceStatus
from src.domain.invoice_activity import ActivityType


@pytest.fixture
def create_invoice_use_case(
    mock_uow, mock_invoice_repo, mock_invoice_line_repo, mock_activity_repo, mock_directory_repo
):
    return CreateInvoice(
        uow=mock_uow,
        invoice_repo=mock_invoice_repo,
        invoice_line_repo=mock_invoice_line_repo,
        activity_repo=mock_activity_repo,
        directory_repo=mock_directory_repo,
        currency="EUR",
    )


@pytest.fixture
def sample_command():
    return CreateInvoiceCommandDTO(
        contact_id="contact_1",
        line_items=[
            LineItemInputDTO(product_name="Consulting", quantity=Decimal("2"), unit_price=1000, tax_rate=Decimal("10")),
            LineItemInputDTO(product_name="Setup fee", quantity=Decimal("1"), unit_price=500, tax_rate=Decimal("0")),
        ],
        notes="Thanks for your business",
    )


@pytest.mark.asyncio
class TestCreateInvoiceSuccess:

    async def test_create_invoice_success(
        self, create_invoice_use_case, mock_invoice_repo, mock_uow, actor, sample_command
    ):
        """
        Given: A known contact and two priced line items
        When: create_invoice is called
        Then: A draft invoice with the reserved number and computed totals is returned
        """
        # Act
        result = await create_invoice_use_case.execute(actor, sample_command)

        # Assert
        assert result.is_ok()
        invoice = result.value
        assert invoice.number == "INV-000001"
        assert invoice.status == InvoiceStatus.DRAFT.value
        assert invoice.subtotal == 2500
        assert invoice.tax_total == 200
        assert invoice.total == 2700
        assert invoice.currency == "EUR"
        assert invoice.owner_id == "user_1"
        assert invoice.owner_name == "Grace Hopper"
        assert invoice.contact_name == "Ada Lovelace"

        mock_invoice_repo.reserve_invoice_number.assert_awaited_once_with("org_acme")
        mock_uow.commit.assert_awaited_once()
        mock_uow.rollback.assert_not_called()

    async def test_line_items_share_the_invoice_id(
        self, create_invoice_use_case, mock_invoice_repo, mock_invoice_line_repo, actor, sample_command
    ):
        # Act
        await create_invoice_use_case.execute(actor, sample_command)

        # Assert
        created: Invoice = mock_invoice_repo.create.call_args[0][0]
        line_items = mock_invoice_line_repo.create_many.call_args[0][0]
        assert [item.invoice_id for item in line_items] == [created.id, created.id]
        assert [item.position for item in line_items] == [0, 1]
        assert [item.line_total for item in line_items] == [2200, 500]

    async def test_appends_created_activity(
        self, create_invoice_use_case, mock_activity_repo, actor, sample_command
    ):
        # Act
        await create_invoice_use_case.execute(actor, sample_command)

        # Assert
        mock_activity_repo.create.assert_awaited_once()
        activity = mock_activity_repo.create.call_args[0][0]
        assert activity.type == ActivityType.CREATED
        assert activity.title == "Invoice INV-000001 created"
        assert activity.created_by == "user_1"
        assert activity.org_id == "org_acme"
        assert activity.details == {"total": 2700, "currency": "EUR"}

    async def test_invoice_without_line_items(
        self, create_invoice_use_case, mock_invoice_line_repo, actor
    ):
        """
        Given: No line items
        When: create_invoice is called
        Then: A zero-total draft is created and no line items are written
        """
        # Act
        result = await create_invoice_use_case.execute(
            actor, CreateInvoiceCommandDTO(contact_id="contact_1")
        )

        # Assert
        assert result.is_ok()
        assert result.value.total == 0
        mock_invoice_line_repo.create_many.assert_not_called()

    async def test_catalog_product_supplies_defaults(
        self, create_invoice_use_case, mock_directory_repo, mock_invoice_line_repo, actor, product
    ):
        """
        Given: A line item referencing a catalog product with only a quantity
        When: create_invoice is called
        Then: Name, description, price and tax rate come from the product
        """
        # Arrange
        mock_directory_repo.get_products = AsyncMock(return_value={product.id: product})
        command = CreateInvoiceCommandDTO(
            contact_id="contact_1",
            line_items=[LineItemInputDTO(product_id="product_1", quantity=Decimal("3"))],
        )

        # Act
        result = await create_invoice_use_case.execute(actor, command)

        # Assert
        assert result.is_ok()
        item = mock_invoice_line_repo.create_many.call_args[0][0][0]
        assert item.product_name == "Consulting"
        assert item.description == "Hourly consulting"
        assert item.unit_price == 1000
        assert item.tax_rate == Decimal("10")
        assert item.line_total == 3300
        assert result.value.total == 3300

    async def test_explicit_values_override_catalog(
        self, create_invoice_use_case, mock_directory_repo, mock_invoice_line_repo, actor, product
    ):
        # Arrange
        mock_directory_repo.get_products = AsyncMock(return_value={product.id: product})
        command = CreateInvoiceCommandDTO(
            contact_id="contact_1",
            line_items=[
                LineItemInputDTO(
                    product_id="product_1", quantity=Decimal("1"), unit_price=800
                )
            ],
        )

        # Act
        await create_invoice_use_case.execute(actor, command)

        # Assert
        item = mock_invoice_line_repo.create_many.call_args[0][0][0]
        assert item.unit_price == 800
        assert item.tax_rate == Decimal("10")
        assert item.line_total == 880


@pytest.mark.asyncio
class TestCreateInvoiceValidation:

    async def test_unknown_contact(
        self, create_invoice_use_case, mock_directory_repo, mock_invoice_repo, mock_uow, actor, sample_command
    ):
        """
        Given: The contact does not exist in the actor's organization
        When: create_invoice is called
        Then: CONTACT_NOT_FOUND and no number is reserved
        """
        # Arrange
        mock_directory_repo.get_contact = AsyncMock(return_value=None)

        # Act
        result = await create_invoice_use_case.execute(actor, sample_command)

        # Assert
        assert result.is_err()
        assert result.error.code == "CONTACT_NOT_FOUND"
        mock_invoice_repo.reserve_invoice_number.assert_not_called()
        mock_uow.commit.assert_not_called()

    async def test_unknown_product(self, create_invoice_use_case, mock_invoice_repo, actor):
        # Arrange
        command = CreateInvoiceCommandDTO(
            contact_id="contact_1",
            line_items=[LineItemInputDTO(product_id="missing", quantity=Decimal("1"))],
        )

        # Act
        result = await create_invoice_use_case.execute(actor, command)

        # Assert
        assert result.is_err()
        assert result.error.code == "PRODUCT_NOT_FOUND"
        mock_invoice_repo.create.assert_not_called()

    async def test_ad_hoc_item_without_price(self, create_invoice_use_case, actor):
        # Arrange
        command = CreateInvoiceCommandDTO(
            contact_id="contact_1",
            line_items=[LineItemInputDTO(product_name="Mystery", quantity=Decimal("1"))],
        )

        # Act
        result = await create_invoice_use_case.execute(actor, command)

        # Assert
        assert result.is_err()
        assert result.error.code == "VALIDATION_ERROR"

    async def test_description_is_used_as_name(
        self, create_invoice_use_case, mock_invoice_line_repo, actor
    ):
        # Arrange
        command = CreateInvoiceCommandDTO(
            contact_id="contact_1",
            line_items=[
                LineItemInputDTO(description="Travel expenses", quantity=Decimal("1"), unit_price=4200)
            ],
        )

        # Act
        result = await create_invoice_use_case.execute(actor, command)

        # Assert
        assert result.is_ok()
        item = mock_invoice_line_repo.create_many.call_args[0][0][0]
        assert item.product_name == "Travel expenses"
        assert item.tax_rate == Decimal("0")


@pytest.mark.asyncio
class TestCreateInvoiceFailure:

    async def test_rolls_back_when_line_items_fail(
        self, create_invoice_use_case, mock_invoice_line_repo, mock_uow, actor, sample_command
    ):
        """
        Given: Writing line items raises
        When: create_invoice is called
        Then: The transaction is rolled back and CREATE_INVOICE_FAILED returned
        """
        # Arrange
        mock_invoice_line_repo.create_many = AsyncMock(side_effect=Exception("disk full"))

        # Act
        result = await create_invoice_use_case.execute(actor, sample_command)

        # Assert
        assert result.is_err()
        assert result.error.code == "CREATE_INVOICE_FAILED"
        assert result.error.reason == "disk full"
        mock_uow.rollback.assert_awaited_once()
        mock_uow.commit.assert_not_called()
