from .unit_of_work import SqlAlchemyUnitOfWork
from .delivery_service import (
    LoggingDeliveryService,
    WebhookDeliveryService,
    CompositeDeliveryService,
    create_delivery_service,
)

__all__ = [
    "SqlAlchemyUnitOfWork",
    "LoggingDeliveryService",
    "WebhookDeliveryService",
    "CompositeDeliveryService",
    "create_delivery_service",
]
