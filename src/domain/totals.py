"""Invoice money math

All amounts are integer minor currency units. Aggregates are summed
exactly in Decimal and rounded once (ROUND_HALF_UP), never per line.
"""

from dataclasses import dataclass
from decimal import Decimal, ROUND_HALF_UP
from typing import Iterable, Protocol, Union

Number = Union[int, Decimal, str]

HUNDRED = Decimal("100")


class PricedLine(Protocol):
    quantity: Number
    unit_price: Number
    tax_rate: Number


@dataclass(frozen=True)
class InvoiceTotals:
    subtotal: int
    tax_total: int
    total: int


def round_minor(amount: Decimal) -> int:
    """Round a Decimal amount to an integer minor unit, half up"""
    return int(amount.quantize(Decimal("1"), rounding=ROUND_HALF_UP))


def _net(quantity: Number, unit_price: Number) -> Decimal:
    return Decimal(str(quantity)) * Decimal(str(unit_price))


def line_total(quantity: Number, unit_price: Number, tax_rate: Number) -> int:
    """round(quantity * unit_price * (1 + tax_rate / 100))"""
    rate = Decimal(str(tax_rate))
    return round_minor(_net(quantity, unit_price) * (1 + rate / HUNDRED))


def compute_totals(line_items: Iterable[PricedLine]) -> InvoiceTotals:
    """
    Compute invoice aggregates from a full line item set

    subtotal and tax_total are each summed unrounded across all lines and
    rounded once; total is their sum. The result does not depend on any
    previously stored line_total.
    """
    net_sum = Decimal("0")
    tax_sum = Decimal("0")
    for item in line_items:
        net = _net(item.quantity, item.unit_price)
        net_sum += net
        tax_sum += net * Decimal(str(item.tax_rate)) / HUNDRED

    subtotal = round_minor(net_sum)
    tax_total = round_minor(tax_sum)
    return InvoiceTotals(subtotal=subtotal, tax_total=tax_total, total=subtotal + tax_total)
