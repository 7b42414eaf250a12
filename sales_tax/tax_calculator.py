import logging
from decimal import ROUND_HALF_EVEN, Decimal
from typing import Dict, List, Mapping, Tuple

from sales_tax.models.item import AggregatedItem
from sales_tax.models.receipt_details import ReceiptDetails, ReceiptLine

logger = logging.getLogger(__name__)

SALES_TAX_RATE = Decimal("0.10")
IMPORT_DUTY_RATE = Decimal("0.05")

# Tax rates are rounded to the nearest multiple of 1/20
RATE_STEPS = Decimal("20")
CENT = Decimal("0.01")
ZERO = Decimal("0")


def round_tax_rate(rate: Decimal) -> Decimal:
    """Round a tax rate to the nearest 0.05, ties to even."""
    return (rate * RATE_STEPS).quantize(Decimal("1"), rounding=ROUND_HALF_EVEN) / RATE_STEPS


def round_money(amount: Decimal) -> Decimal:
    return amount.quantize(CENT, rounding=ROUND_HALF_EVEN)


def tax_rate(item: AggregatedItem) -> Decimal:
    """
    Rounded tax rate for one unit of an item.

    Imported goods pay the import duty whatever their category; exempt goods
    skip the base sales tax.
    """
    rate = IMPORT_DUTY_RATE if item.is_imported else ZERO
    rate += ZERO if item.exempt else SALES_TAX_RATE
    return round_tax_rate(rate)


def compute_line(item: AggregatedItem) -> Tuple[ReceiptLine, Decimal]:
    """
    Price one receipt line.

    Returns:
        The ReceiptLine and the unrounded sales tax it contributes.
    """
    rate = tax_rate(item)
    unit_price_with_tax = item.unit_price * (1 + rate)
    line_total = round_money(unit_price_with_tax * item.quantity)
    line_tax = rate * item.unit_price * item.quantity

    line = ReceiptLine(
        quantity=item.quantity,
        description=item.description,
        line_total=line_total,
        category=item.category,
        sales_tax=line_tax,
    )
    return line, line_tax


def compute_receipt(purchased: Mapping[str, AggregatedItem]) -> ReceiptDetails:
    """
    Compute the itemized receipt for an aggregated basket.

    Line totals are rounded one by one. The sales tax is accumulated unrounded
    and only the grand totals are rounded at the end.

    Args:
        purchased: Mapping from description to AggregatedItem, as produced by
            basket_aggregator.aggregate.

    Returns:
        ReceiptDetails with one line per distinct item, in mapping order.
    """
    lines: List[ReceiptLine] = []
    total_sales_tax = ZERO
    total_cost = ZERO

    for item in purchased.values():
        line, line_tax = compute_line(item)
        total_cost += line.line_total
        total_sales_tax += line_tax
        lines.append(line)
        logger.debug(f"{line.quantity} x {line.description}: {line.line_total} (tax {line_tax})")

    category_totals, category_tax_amounts = _summarize_cost_by_category_and_tax(lines)

    return ReceiptDetails(
        lines=lines,
        sales_tax=round_money(total_sales_tax),
        total_cost=round_money(total_cost),
        category_totals=category_totals,
        category_tax_amounts=category_tax_amounts,
    )


def _summarize_cost_by_category_and_tax(lines: List[ReceiptLine]) -> Tuple[Dict[str, Decimal], Dict[str, Decimal]]:
    """
    Summarize line totals and sales tax by category.

    Returns:
        A tuple containing:
        - A dictionary with categories as keys and total costs as values.
        - A dictionary with categories as keys and tax amounts as values.
    """
    category_totals: Dict[str, Decimal] = {}
    category_taxes: Dict[str, Decimal] = {}

    for line in lines:
        category_totals[line.category] = category_totals.get(line.category, ZERO) + line.line_total
        category_taxes[line.category] = category_taxes.get(line.category, ZERO) + line.sales_tax

    category_tax_amounts = {category: round_money(tax) for category, tax in category_taxes.items()}
    return category_totals, category_tax_amounts
