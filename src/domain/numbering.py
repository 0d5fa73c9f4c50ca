"""Invoice number format: INV-NNNNNN"""

import re
from typing import Optional

INVOICE_NUMBER_PREFIX = "INV"
INVOICE_NUMBER_WIDTH = 6

_TRAILING_DIGITS = re.compile(r"(\d+)$")


def parse_sequence(number: Optional[str]) -> int:
    """
    Extract the trailing digit run of an invoice number

    Returns 0 when there is no number or it does not end in digits, so the
    next number restarts at 1.
    """
    if not number:
        return 0
    match = _TRAILING_DIGITS.search(number)
    return int(match.group(1)) if match else 0


def format_invoice_number(sequence: int) -> str:
    return f"{INVOICE_NUMBER_PREFIX}-{sequence:0{INVOICE_NUMBER_WIDTH}d}"


def next_invoice_number(last_number: Optional[str]) -> str:
    """Number following last_number, INV-000001 if there is none"""
    return format_invoice_number(parse_sequence(last_number) + 1)
