from dataclasses import dataclass, replace
from decimal import Decimal

GENERAL_CATEGORY = "general"


def to_decimal(value) -> Decimal:
    """Convert a price given as int, float, str or Decimal to Decimal."""
    if isinstance(value, Decimal):
        return value
    return Decimal(str(value))


@dataclass(frozen=True)
class BasketEntry:
    """
    Represents a single good as it comes off the scanner.
    """
    description: str
    is_imported: bool
    price: Decimal

    def __post_init__(self):
        object.__setattr__(self, 'price', to_decimal(self.price))
        if not self.description or not self.description.strip():
            raise ValueError("Basket entry needs a description")
        if self.price < 0:
            raise ValueError(f"Negative price for {self.description}: {self.price}")


@dataclass(frozen=True)
class ScannedItem:
    """
    A classified basket entry. The exempt flag is decided once by the classifier.
    """
    description: str
    is_imported: bool
    price: Decimal
    exempt: bool
    category: str = GENERAL_CATEGORY


@dataclass(frozen=True)
class AggregatedItem:
    """
    All scanned units sharing one description.
    """
    description: str
    is_imported: bool
    unit_price: Decimal
    exempt: bool
    category: str = GENERAL_CATEGORY
    quantity: int = 1

    @classmethod
    def from_scanned(cls, item: ScannedItem) -> "AggregatedItem":
        return cls(
            description=item.description,
            is_imported=item.is_imported,
            unit_price=item.price,
            exempt=item.exempt,
            category=item.category,
        )

    def with_additional_unit(self) -> "AggregatedItem":
        return replace(self, quantity=self.quantity + 1)

    def matches(self, item: ScannedItem) -> bool:
        """Check whether a scanned unit carries the same pricing attributes."""
        return (self.is_imported == item.is_imported
                and self.unit_price == item.price
                and self.exempt == item.exempt)
