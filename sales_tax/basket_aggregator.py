import logging
from typing import Dict, Sequence

from sales_tax.models.item import AggregatedItem, ScannedItem

logger = logging.getLogger(__name__)


def aggregate(scanned_items: Sequence[ScannedItem]) -> Dict[str, AggregatedItem]:
    """
    Group scanned items by description, counting duplicates.

    Items are taken from the basket last-in-first-out, so the most recently
    scanned unit of a description is the one whose price and flags are kept.
    Later units with different attributes only add to the quantity.

    Args:
        scanned_items: The basket in scan order.

    Returns:
        A mapping from description to AggregatedItem, in the order each
        description was first met.
    """
    purchased: Dict[str, AggregatedItem] = {}

    for item in reversed(scanned_items):
        existing = purchased.get(item.description)
        if existing is None:
            purchased[item.description] = AggregatedItem.from_scanned(item)
            continue

        if not existing.matches(item):
            logger.warning(
                f"Item {item.description!r} scanned with different attributes "
                f"(imported={item.is_imported}, price={item.price}, exempt={item.exempt}); "
                f"keeping imported={existing.is_imported}, price={existing.unit_price}"
            )
        purchased[item.description] = existing.with_additional_unit()

    logger.debug(f"Aggregated {len(scanned_items)} scanned items into {len(purchased)} lines")
    return purchased
