"""Receipt formatting utilities."""

from decimal import Decimal

from sales_tax.models.receipt_details import ReceiptDetails


def format_amount(amount: Decimal) -> str:
    return f"{amount:.2f}"


def format_receipt(receipt_details: ReceiptDetails) -> str:
    """Format a human-readable receipt."""
    lines = []

    for line in receipt_details.lines:
        lines.append(f"{line.quantity} {line.description}: {format_amount(line.line_total)}")

    lines.append(f"Sales Tax: {format_amount(receipt_details.sales_tax)}")
    lines.append(f"Total: {format_amount(receipt_details.total_cost)}")

    return "\n".join(lines)


def format_category_summary(receipt_details: ReceiptDetails) -> str:
    """Format the cost and tax breakdown by category."""
    lines = ["Category Breakdown:"]
    for category, amount in receipt_details.category_totals.items():
        tax_amount = receipt_details.category_tax_amounts.get(category, Decimal("0"))
        lines.append(f"  {category}: {format_amount(amount)} (tax {format_amount(tax_amount)})")
    return "\n".join(lines)
