from pathlib import Path

import pytest

from sales_tax.cash_register import CashRegister
from sales_tax.exemption_catalog import ExemptionCatalog

REPO_ROOT = Path(__file__).resolve().parent.parent
DATA_DIR = REPO_ROOT / "data"

EXEMPTED_FOOD = ["chocolate bar", "imported box of chocolates", "box of imported chocolates"]
EXEMPTED_BOOKS = ["book", "imported book"]
EXEMPTED_MEDICAL = ["packet of headache pills"]

ALL_IMPORTED_BASKET = [
    ("imported box of chocolates", True, 8),
    ("imported bottle of perfume", True, 40),
    ("imported bottle of perfume", True, 40),
    ("box of imported chocolates", True, 8),
]

NOT_IMPORTED_BASKET = [
    ("book", False, 15),
    ("music CD", False, 15),
    ("chocolate bar", False, 5),
    ("bottle of perfume", False, 25),
    ("packet of headache pills", False, 8),
]

MIXED_BASKET = [
    ("book", False, 15),
    ("music CD", False, 15),
    ("chocolate bar", False, 5),
    ("imported box of chocolates", True, 8),
    ("imported bottle of perfume", True, 40),
    ("imported bottle of perfume", True, 40),
    ("bottle of perfume", False, 25),
    ("packet of headache pills", False, 8),
    ("box of imported chocolates", True, 8),
]


@pytest.fixture
def catalog():
    return ExemptionCatalog.from_lists(EXEMPTED_FOOD, EXEMPTED_BOOKS, EXEMPTED_MEDICAL)


@pytest.fixture
def register():
    return CashRegister(EXEMPTED_FOOD, EXEMPTED_BOOKS, EXEMPTED_MEDICAL)
