from .unit_of_work import UnitOfWork
from .delivery_service import InvoiceDeliveryService

__all__ = [
    "UnitOfWork",
    "InvoiceDeliveryService",
]
