from decimal import Decimal

import pytest

from sales_tax.item_classifier import classify
from sales_tax.models.item import GENERAL_CATEGORY


@pytest.mark.parametrize("description,category", [
    ("chocolate bar", "food"),
    ("imported book", "books"),
    ("packet of headache pills", "medical"),
])
def test_exempt_descriptions(catalog, description, category):
    item = classify(description, False, 10, catalog)

    assert item.exempt is True
    assert item.category == category


def test_unknown_description_is_ordinary_good(catalog):
    item = classify("music CD", False, "14.99", catalog)

    assert item.exempt is False
    assert item.category == GENERAL_CATEGORY
    assert item.price == Decimal("14.99")


def test_lookup_is_case_sensitive(catalog):
    assert classify("Chocolate Bar", False, 1, catalog).exempt is False
    assert classify("chocolate bar ", False, 1, catalog).exempt is False


def test_import_flag_is_kept(catalog):
    item = classify("imported box of chocolates", True, 8, catalog)

    assert item.is_imported is True
    assert item.exempt is True


def test_float_prices_are_converted_exactly(catalog):
    assert classify("music CD", False, 0.1, catalog).price == Decimal("0.1")


@pytest.mark.parametrize("description,price", [("", 1), ("   ", 1), ("book", -1)])
def test_invalid_entries_are_rejected(catalog, description, price):
    with pytest.raises(ValueError):
        classify(description, False, price, catalog)


def test_decimal_price_is_kept(catalog):
    assert classify("music CD", False, Decimal("14.99"), catalog).price == Decimal("14.99")
