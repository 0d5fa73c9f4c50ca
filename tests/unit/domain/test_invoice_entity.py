"""Unit tests for Invoice status rules"""

from datetime import datetime, timedelta, timezone

import pytest

from src.domain.invoice import Invoice, InvoiceStatus


def make_invoice(status: InvoiceStatus, **kwargs) -> Invoice:
    return Invoice(
        org_id="org_acme",
        number="INV-000001",
        status=status,
        contact_id="contact_1",
        owner_id="user_1",
        **kwargs,
    )


class TestInvoiceTransitionGuards:

    @pytest.mark.parametrize(
        "status,sendable,payable,editable",
        [
            (InvoiceStatus.DRAFT, True, False, True),
            (InvoiceStatus.SENT, False, True, True),
            (InvoiceStatus.OVERDUE, False, True, True),
            (InvoiceStatus.PAID, False, False, False),
        ],
    )
    def test_guards_per_status(self, status, sendable, payable, editable):
        invoice = make_invoice(status)

        assert invoice.can_send() is sendable
        assert invoice.can_mark_paid() is payable
        assert invoice.is_editable() is editable


class TestInvoiceTransitions:

    def test_mark_sent_stamps_sent_at(self):
        invoice = make_invoice(InvoiceStatus.DRAFT)
        sent_at = datetime(2024, 1, 2, 9, 0, tzinfo=timezone.utc)

        invoice.mark_sent(sent_at)

        assert invoice.status == InvoiceStatus.SENT
        assert invoice.sent_at == sent_at

    def test_mark_sent_keeps_existing_sent_at(self):
        first = datetime(2024, 1, 2, 9, 0, tzinfo=timezone.utc)
        invoice = make_invoice(InvoiceStatus.DRAFT, sent_at=first)

        invoice.mark_sent(datetime(2024, 2, 1, tzinfo=timezone.utc))

        assert invoice.sent_at == first

    def test_mark_paid_keeps_existing_paid_at(self):
        first = datetime(2024, 1, 5, tzinfo=timezone.utc)
        invoice = make_invoice(InvoiceStatus.SENT, paid_at=first)

        invoice.mark_paid(datetime(2024, 3, 1, tzinfo=timezone.utc))

        assert invoice.status == InvoiceStatus.PAID
        assert invoice.paid_at == first

    def test_mark_paid_stores_utc(self):
        invoice = make_invoice(InvoiceStatus.SENT)
        paid_at = datetime(2024, 3, 1, 10, 0, tzinfo=timezone(timedelta(hours=5)))

        invoice.mark_paid(paid_at)

        assert invoice.paid_at == datetime(2024, 3, 1, 5, 0, tzinfo=timezone.utc)
        assert invoice.paid_at.utcoffset() == timedelta(0)

    def test_naive_timestamps_are_taken_as_utc(self):
        invoice = make_invoice(InvoiceStatus.DRAFT)

        invoice.mark_sent(datetime(2024, 1, 2, 9, 0))

        assert invoice.sent_at == datetime(2024, 1, 2, 9, 0, tzinfo=timezone.utc)

    def test_default_timestamps_are_aware(self):
        invoice = make_invoice(InvoiceStatus.DRAFT)

        invoice.mark_sent()

        assert invoice.sent_at.tzinfo is not None
        assert invoice.created_at.tzinfo is not None

    def test_defaults(self):
        invoice = make_invoice(InvoiceStatus.DRAFT)

        assert invoice.subtotal == 0
        assert invoice.total == 0
        assert invoice.currency == "USD"
        assert invoice.id
