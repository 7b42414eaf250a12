from dataclasses import dataclass, field
from decimal import Decimal
from typing import Dict, List


@dataclass(frozen=True)
class ReceiptLine:
    quantity: int
    description: str
    line_total: Decimal
    category: str = ""
    sales_tax: Decimal = Decimal("0")


@dataclass
class ReceiptDetails:
    lines: List[ReceiptLine]
    sales_tax: Decimal
    total_cost: Decimal
    basket_path: str = ""
    category_totals: Dict[str, Decimal] = field(default_factory=dict)
    category_tax_amounts: Dict[str, Decimal] = field(default_factory=dict)

    @property
    def item_count(self) -> int:
        return sum(line.quantity for line in self.lines)
