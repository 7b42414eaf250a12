import logging
from decimal import Decimal
from typing import Union

from sales_tax.exemption_catalog import ExemptionCatalog
from sales_tax.models.item import GENERAL_CATEGORY, BasketEntry, ScannedItem

logger = logging.getLogger(__name__)


def classify(description: str, is_imported: bool, price: Union[int, float, str, Decimal],
             exemptions: ExemptionCatalog) -> ScannedItem:
    """
    Tag a scanned good with its exemption flag.

    A description found in any of the food, books or medical sets is exempt from
    the base sales tax. Anything else is an ordinary good.
    """
    entry = BasketEntry(description=description, is_imported=is_imported, price=price)
    return classify_entry(entry, exemptions)


def classify_entry(entry: BasketEntry, exemptions: ExemptionCatalog) -> ScannedItem:
    category = exemptions.category_of(entry.description)
    item = ScannedItem(
        description=entry.description,
        is_imported=entry.is_imported,
        price=entry.price,
        exempt=category is not None,
        category=category or GENERAL_CATEGORY,
    )
    logger.debug(f"Classified {item.description!r} as {item.category} (exempt={item.exempt})")
    return item
