from dataclasses import dataclass, field
from typing import List

from sales_tax.models.item import BasketEntry


@dataclass
class Basket:
    """The goods read from one basket file, in scan order."""
    entries: List[BasketEntry] = field(default_factory=list)
    basket_path: str = ""

    def __len__(self) -> int:
        return len(self.entries)
