from decimal import Decimal
from unittest.mock import AsyncMock, MagicMock

import pytest

from src.domain.directory import Contact, Product, Profile
from src.domain.invoice import Invoice, InvoiceStatus
from src.domain.invoice_line import InvoiceLineItem


def _echo(entity):
    return entity


@pytest.fixture
def contact():
    return Contact(
        id="contact_1",
        org_id="org_acme",
        first_name="Ada",
        last_name="Lovelace",
        email="ada@example.com",
    )


@pytest.fixture
def owner():
    return Profile(user_id="user_1", org_id="org_acme", first_name="Grace", last_name="Hopper")


@pytest.fixture
def product():
    return Product(
        id="product_1",
        org_id="org_acme",
        name="Consulting",
        description="Hourly consulting",
        price=1000,
        tax_rate=Decimal("10"),
    )


@pytest.fixture
def make_invoice():
    def _make(status=InvoiceStatus.DRAFT, invoice_id="invoice_1", **kwargs):
        return Invoice(
            id=invoice_id,
            org_id="org_acme",
            number=kwargs.pop("number", "INV-000001"),
            status=status,
            contact_id=kwargs.pop("contact_id", "contact_1"),
            owner_id="user_1",
            **kwargs,
        )

    return _make


@pytest.fixture
def line_item():
    return InvoiceLineItem(
        invoice_id="invoice_1",
        position=0,
        product_name="Consulting",
        quantity=Decimal("2"),
        unit_price=1000,
        tax_rate=Decimal("10"),
        line_total=2200,
    )


@pytest.fixture
def mock_invoice_repo():
    repo = MagicMock()
    repo.create = AsyncMock(side_effect=_echo)
    repo.update = AsyncMock(side_effect=_echo)
    repo.delete = AsyncMock()
    repo.reserve_invoice_number = AsyncMock(return_value="INV-000001")
    return repo


@pytest.fixture
def mock_invoice_line_repo(line_item):
    repo = MagicMock()
    repo.get_by_invoice_id = AsyncMock(return_value=[line_item])
    repo.get_by_invoice_ids = AsyncMock(return_value={})
    repo.create_many = AsyncMock(side_effect=_echo)
    repo.delete_by_invoice_id = AsyncMock(return_value=1)
    return repo


@pytest.fixture
def mock_activity_repo():
    repo = MagicMock()
    repo.create = AsyncMock(side_effect=_echo)
    return repo


@pytest.fixture
def mock_directory_repo(contact, owner):
    repo = MagicMock()
    repo.get_profile = AsyncMock(return_value=owner)
    repo.get_profiles = AsyncMock(return_value={owner.user_id: owner})
    repo.get_contact = AsyncMock(return_value=contact)
    repo.get_contacts = AsyncMock(return_value={contact.id: contact})
    repo.get_products = AsyncMock(return_value={})
    return repo


@pytest.fixture
def mock_delivery_service():
    service = MagicMock()
    service.deliver_invoice = AsyncMock(return_value=True)
    return service
