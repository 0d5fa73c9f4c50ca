"""Builds priced line item entities from client input"""

from decimal import Decimal
from typing import List
from libs.result import Result, Return, Error
from src.app.repositories.directory_repository import DirectoryRepository
from src.domain.invoice_line import InvoiceLineItem
from src.domain.totals import line_total
from .dtos import LineItemInputDTO


async def build_line_items(
    directory_repo: DirectoryRepository,
    org_id: str,
    invoice_id: str,
    inputs: List[LineItemInputDTO],
) -> Result[List[InvoiceLineItem]]:
    """
    Turn submitted line items into InvoiceLineItem entities

    Missing name, price or tax rate are taken from the tenant's catalog when
    the item references a product. line_total is computed here; invoice
    aggregates are computed by the caller over the returned list.

    Errors:
        PRODUCT_NOT_FOUND: item needs catalog defaults but the product is unknown
        VALIDATION_ERROR: ad-hoc item without a name or unit price
    """
    needs_catalog = [
        item.product_id
        for item in inputs
        if item.product_id and (
            not item.product_name or item.unit_price is None or item.tax_rate is None
        )
    ]
    products = await directory_repo.get_products(org_id, list(set(needs_catalog)))

    line_items: List[InvoiceLineItem] = []
    for position, item in enumerate(inputs):
        product_name = item.product_name
        description = item.description
        unit_price = item.unit_price
        tax_rate = item.tax_rate

        if item.product_id in needs_catalog:
            product = products.get(item.product_id)
            if product is None:
                return Return.err(
                    Error(
                        code="PRODUCT_NOT_FOUND",
                        message=f"Product {item.product_id} not found",
                        reason=f"Line item {position + 1} relies on catalog defaults",
                    )
                )
            product_name = product_name or product.name
            description = description if description is not None else product.description
            unit_price = unit_price if unit_price is not None else product.price
            tax_rate = tax_rate if tax_rate is not None else product.tax_rate

        # Ad-hoc items fall back to their description as display name
        product_name = product_name or description
        if not product_name or unit_price is None:
            return Return.err(
                Error(
                    code="VALIDATION_ERROR",
                    message=f"Line item {position + 1} needs a product name and a unit price",
                    reason="Ad-hoc line items must be fully specified",
                )
            )

        tax_rate = Decimal(str(tax_rate)) if tax_rate is not None else Decimal("0")
        line_items.append(
            InvoiceLineItem(
                invoice_id=invoice_id,
                position=position,
                product_id=item.product_id,
                product_name=product_name,
                description=description,
                quantity=item.quantity,
                unit_price=unit_price,
                tax_rate=tax_rate,
                line_total=line_total(item.quantity, unit_price, tax_rate),
            )
        )

    return Return.ok(line_items)
