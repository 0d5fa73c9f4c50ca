"""Invoice Delivery Service Implementations

Provides concrete implementations for delivering sent invoices.
"""

import logging
from typing import List, Optional
import httpx
from src.app.services.delivery_service import InvoiceDeliveryService
from src.domain.directory import Contact
from src.domain.invoice import Invoice
from src.domain.invoice_activity import DeliveryChannel

logger = logging.getLogger(__name__)


class LoggingDeliveryService(InvoiceDeliveryService):
    """
    Delivery service that only logs the outgoing invoice

    Useful for development and testing, or as a fallback.
    """

    async def deliver_invoice(
        self,
        invoice: Invoice,
        contact: Optional[Contact],
        channels: List[DeliveryChannel],
        message: Optional[str] = None,
    ) -> bool:
        recipient = contact.email if contact and contact.email else invoice.contact_id
        logger.info(
            f"[INVOICE DELIVERY] Org: {invoice.org_id}, "
            f"Invoice: {invoice.number}, "
            f"Recipient: {recipient}, "
            f"Channels: {', '.join(c.value for c in channels)}, "
            f"Total: {invoice.total} {invoice.currency}"
        )
        return True


class WebhookDeliveryService(InvoiceDeliveryService):
    """
    Delivery service that posts the invoice to a webhook

    The receiving side (mailer, SMS gateway) renders and sends the message.
    """

    def __init__(self, webhook_url: str, timeout: float = 10.0):
        """
        Initialize webhook delivery service

        Args:
            webhook_url: URL to POST invoices to
            timeout: Request timeout in seconds
        """
        self.webhook_url = webhook_url
        self.timeout = timeout

    async def deliver_invoice(
        self,
        invoice: Invoice,
        contact: Optional[Contact],
        channels: List[DeliveryChannel],
        message: Optional[str] = None,
    ) -> bool:
        payload = {
            "type": "invoice_delivery",
            "invoice_id": invoice.id,
            "org_id": invoice.org_id,
            "number": invoice.number,
            "total": invoice.total,
            "currency": invoice.currency,
            "due_date": invoice.due_date.isoformat() if invoice.due_date else None,
            "channels": [c.value for c in channels],
            "message": message,
            "contact": {
                "id": invoice.contact_id,
                "name": contact.full_name if contact else None,
                "email": contact.email if contact else None,
            },
        }

        try:
            async with httpx.AsyncClient(timeout=self.timeout) as client:
                response = await client.post(
                    self.webhook_url,
                    json=payload,
                    headers={"Content-Type": "application/json"},
                )
                response.raise_for_status()
                logger.info(
                    f"Webhook delivery accepted for invoice {invoice.number} to {self.webhook_url}"
                )
                return True
        except httpx.HTTPError as e:
            logger.error(
                f"Failed to deliver invoice {invoice.number} via webhook: {e}"
            )
            return False
        except Exception as e:
            logger.error(
                f"Unexpected error delivering invoice {invoice.number} via webhook: {e}"
            )
            return False


class CompositeDeliveryService(InvoiceDeliveryService):
    """
    Delivery service that delegates to multiple services

    Delivery counts as accepted only when every service accepts it, so a
    failing webhook is not hidden behind the logging service.
    """

    def __init__(self, services: list[InvoiceDeliveryService]):
        self.services = services

    async def deliver_invoice(
        self,
        invoice: Invoice,
        contact: Optional[Contact],
        channels: List[DeliveryChannel],
        message: Optional[str] = None,
    ) -> bool:
        success = True
        for service in self.services:
            try:
                if not await service.deliver_invoice(invoice, contact, channels, message):
                    success = False
            except Exception as e:
                logger.error(f"Delivery service {type(service).__name__} failed: {e}")
                success = False
        return success


def create_delivery_service(webhook_url: Optional[str] = None) -> InvoiceDeliveryService:
    """
    Factory function to create the configured delivery service

    Args:
        webhook_url: Optional webhook URL. If provided, creates composite
                     service with logging + webhook. Otherwise, just logging.

    Returns:
        Configured InvoiceDeliveryService
    """
    services: list[InvoiceDeliveryService] = [LoggingDeliveryService()]

    if webhook_url:
        services.append(WebhookDeliveryService(webhook_url))

    if len(services) == 1:
        return services[0]

    return CompositeDeliveryService(services)
