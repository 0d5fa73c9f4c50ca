from decimal import Decimal

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import create_async_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool
from sqlmodel import SQLModel
from sqlmodel.ext.asyncio.session import AsyncSession

import src.domain  # noqa: F401  registers every table on SQLModel.metadata
from src.adapter.repositories import (
    SqlAlchemyDirectoryRepository,
    SqlAlchemyInvoiceActivityRepository,
    SqlAlchemyInvoiceLineRepository,
    SqlAlchemyInvoiceRepository,
)
from src.adapter.services.delivery_service import LoggingDeliveryService
from src.adapter.services.unit_of_work import SqlAlchemyUnitOfWork
from src.app.use_cases.invoicing.dtos import ActorDTO
from src.depends import enable_sqlite_savepoints, get_delivery_service, get_session
from src.domain.directory import Contact, Product, Profile

from tests.integration.seed import CONTACT_A, CONTACT_B, ORG_A, ORG_B, PRODUCT_A, USER_A, USER_B


@pytest_asyncio.fixture(scope="function")
async def engine():
    """In-memory SQLite database shared by every connection of one test"""
    engine = create_async_engine(
        "sqlite+aiosqlite://",
        echo=False,
        future=True,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )

    enable_sqlite_savepoints(engine)

    async with engine.begin() as conn:
        await conn.run_sync(SQLModel.metadata.create_all)

    yield engine

    await engine.dispose()


@pytest_asyncio.fixture
async def db_session(engine):
    """Create a new database session for each test"""
    Session = sessionmaker(engine, class_=AsyncSession, expire_on_commit=False, autoflush=False)
    async with Session() as session:
        yield session


@pytest_asyncio.fixture
async def directory(db_session):
    """Two organizations, each with one user, one contact; org A has a product"""
    db_session.add_all(
        [
            Profile(user_id=USER_A, org_id=ORG_A, first_name="Alice", last_name="Admin"),
            Profile(user_id=USER_B, org_id=ORG_B, first_name="Bob", last_name="Boss"),
            Contact(id=CONTACT_A, org_id=ORG_A, first_name="Ada", last_name="Lovelace", email="ada@example.com"),
            Contact(id=CONTACT_B, org_id=ORG_B, first_name="Bert", last_name="Byte", email="bert@example.com"),
            Product(
                id=PRODUCT_A,
                org_id=ORG_A,
                name="Consulting",
                description="Hourly consulting",
                price=1000,
                tax_rate=Decimal("10"),
            ),
        ]
    )
    await db_session.commit()


@pytest.fixture
def actor_a():
    return ActorDTO(user_id=USER_A, org_id=ORG_A, name="Alice Admin")


@pytest.fixture
def actor_b():
    return ActorDTO(user_id=USER_B, org_id=ORG_B, name="Bob Boss")


@pytest.fixture
def repos(db_session):
    """Real repositories and unit of work bound to the test session"""
    return {
        "uow": SqlAlchemyUnitOfWork(db_session),
        "invoice_repo": SqlAlchemyInvoiceRepository(db_session),
        "invoice_line_repo": SqlAlchemyInvoiceLineRepository(db_session),
        "activity_repo": SqlAlchemyInvoiceActivityRepository(db_session),
        "directory_repo": SqlAlchemyDirectoryRepository(db_session),
    }


@pytest_asyncio.fixture
async def client(db_session, directory):
    """Create test client with database session override"""
    from src.api.app import create_app
    from config import ApplicationConfig

    app = create_app(ApplicationConfig)

    # Override the session dependency to use test session
    async def override_get_session():
        yield db_session

    app.dependency_overrides[get_session] = override_get_session
    app.dependency_overrides[get_delivery_service] = LoggingDeliveryService

    # Use ASGITransport for httpx AsyncClient
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac
