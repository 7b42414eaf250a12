import logging
from typing import Iterable, List, Tuple, Union

from sales_tax.basket_aggregator import aggregate
from sales_tax.exemption_catalog import ExemptionCatalog
from sales_tax.item_classifier import classify_entry
from sales_tax.models.item import BasketEntry, ScannedItem
from sales_tax.models.receipt_details import ReceiptDetails
from sales_tax.tax_calculator import compute_receipt

logger = logging.getLogger(__name__)

BasketInput = Union[BasketEntry, Tuple[str, bool, object]]


class CashRegister:
    """
    Scans shopping baskets and produces their receipts.

    The exemption lists are fixed when the register is built. Each checkout
    starts from an empty basket and does not affect later ones.
    """

    def __init__(self, exempted_food: Iterable[str] = (), exempted_books: Iterable[str] = (),
                 exempted_medical: Iterable[str] = ()) -> None:
        self.catalog = ExemptionCatalog.from_lists(exempted_food, exempted_books, exempted_medical)
        self.basket_goods: List[ScannedItem] = []

    @classmethod
    def from_catalog(cls, catalog: ExemptionCatalog) -> "CashRegister":
        return cls(catalog.food, catalog.books, catalog.medical)

    def scan_shopping_basket(self, entries: Iterable[BasketInput]) -> None:
        """
        Classify each good and add it to the current basket.

        Args:
            entries: BasketEntry objects or (description, is_imported, price) tuples.
        """
        for entry in entries:
            if not isinstance(entry, BasketEntry):
                entry = BasketEntry(*entry)
            self.basket_goods.append(classify_entry(entry, self.catalog))
        logger.debug(f"Basket now holds {len(self.basket_goods)} items")

    def get_receipt(self, basket_path: str = "") -> ReceiptDetails:
        """Compute the receipt of the current basket without consuming it."""
        receipt_details = compute_receipt(aggregate(self.basket_goods))
        receipt_details.basket_path = basket_path
        return receipt_details

    def checkout(self, basket_path: str = "") -> ReceiptDetails:
        """Compute the receipt and start a new, empty basket."""
        receipt_details = self.get_receipt(basket_path)
        logger.info(f"Checked out {len(self.basket_goods)} items, total {receipt_details.total_cost}")
        self.clear()
        return receipt_details

    def clear(self) -> None:
        self.basket_goods = []

    def __len__(self) -> int:
        return len(self.basket_goods)
