"""Invoice Delivery Service Interface

Defines the contract for handing a sent invoice to the contact.
"""

from abc import ABC, abstractmethod
from typing import List, Optional
from src.domain.invoice import Invoice
from src.domain.invoice_activity import DeliveryChannel
from src.domain.directory import Contact


class InvoiceDeliveryService(ABC):
    """
    Abstract delivery service for outgoing invoices

    Implementations can deliver via:
    - Logging (development)
    - Webhook (HTTP POST to a mailer/SMS gateway)
    - Composite of the above
    """

    @abstractmethod
    async def deliver_invoice(
        self,
        invoice: Invoice,
        contact: Optional[Contact],
        channels: List[DeliveryChannel],
        message: Optional[str] = None,
    ) -> bool:
        """
        Deliver invoice to its contact

        Args:
            invoice: Invoice being sent
            contact: Billed contact (None if the directory has no record)
            channels: Channels to deliver through
            message: Optional custom message for the contact

        Returns:
            True if delivery was accepted, False otherwise
        """
        pass
