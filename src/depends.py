from sqlalchemy import event
from sqlalchemy.ext.asyncio import AsyncEngine, create_async_engine
from sqlalchemy.orm import sessionmaker
from sqlmodel.ext.asyncio.session import AsyncSession
from config import ApplicationConfig
from src.adapter.services.delivery_service import create_delivery_service
from src.app.services.delivery_service import InvoiceDeliveryService


def enable_sqlite_savepoints(engine: AsyncEngine) -> None:
    """pysqlite defers BEGIN on its own; emit it ourselves so savepoints nest in a real transaction"""
    if engine.dialect.name != "sqlite":
        return

    @event.listens_for(engine.sync_engine, "connect")
    def disable_driver_transactions(dbapi_connection, connection_record):
        dbapi_connection.isolation_level = None

    @event.listens_for(engine.sync_engine, "begin")
    def emit_begin(conn):
        conn.exec_driver_sql("BEGIN")


engine = create_async_engine(ApplicationConfig.DB_URI, echo=False, future=True)
enable_sqlite_savepoints(engine)

AsyncSessionLocal = sessionmaker(
    engine, class_=AsyncSession, expire_on_commit=False, autoflush=False
)


async def get_session() -> AsyncSession:
    async with AsyncSessionLocal() as session:
        yield session


def get_delivery_service() -> InvoiceDeliveryService:
    return create_delivery_service(ApplicationConfig.INVOICE_DELIVERY_WEBHOOK)
