import logging
import os
from typing import Dict, Iterable, Optional

import pandas as pd

logger = logging.getLogger(__name__)

FOOD = "food"
BOOKS = "books"
MEDICAL = "medical"
EXEMPT_CATEGORIES = (FOOD, BOOKS, MEDICAL)

REQUIRED_COLUMNS = ['description', 'category']
DEFAULT_CATALOG_PATH = os.path.join("data", "exemptions.csv")


class ExemptionCatalog:
    """
    The descriptions exempted from the base sales tax, grouped by category.

    The three sets are fixed for the lifetime of the catalog. Lookups are exact
    and case-sensitive.
    """

    def __init__(self, food: Iterable[str] = (), books: Iterable[str] = (),
                 medical: Iterable[str] = ()) -> None:
        self._sets = {
            FOOD: frozenset(food),
            BOOKS: frozenset(books),
            MEDICAL: frozenset(medical),
        }

    @property
    def food(self) -> frozenset:
        return self._sets[FOOD]

    @property
    def books(self) -> frozenset:
        return self._sets[BOOKS]

    @property
    def medical(self) -> frozenset:
        return self._sets[MEDICAL]

    @classmethod
    def from_lists(cls, exempted_food: Iterable[str], exempted_books: Iterable[str],
                   exempted_medical: Iterable[str]) -> "ExemptionCatalog":
        return cls(food=exempted_food, books=exempted_books, medical=exempted_medical)

    @classmethod
    def from_csv(cls, csv_path: Optional[str] = None) -> "ExemptionCatalog":
        """
        Load the catalog from a CSV file with `description` and `category` columns.

        Args:
            csv_path: Path to the CSV file. Falls back to SALES_TAX_EXEMPTIONS_PATH,
                then to data/exemptions.csv.

        Returns:
            The loaded ExemptionCatalog.
        """
        csv_path = csv_path or os.getenv('SALES_TAX_EXEMPTIONS_PATH', DEFAULT_CATALOG_PATH)
        df = pd.read_csv(csv_path, dtype=str, keep_default_na=False)
        return cls.from_dataframe(df, source=csv_path)

    @classmethod
    def from_dataframe(cls, df: pd.DataFrame, source: str = "<dataframe>") -> "ExemptionCatalog":
        missing = [col for col in REQUIRED_COLUMNS if col not in df.columns]
        if missing:
            raise ValueError(f"Exemption catalog {source} is missing columns: {', '.join(missing)}")

        df = df.loc[df['description'].astype(str).str.len() > 0].copy()
        df['category'] = df['category'].astype(str).str.strip().str.lower()

        unknown = sorted(set(df['category']) - set(EXEMPT_CATEGORIES))
        if unknown:
            raise ValueError(f"Unknown exemption categories in {source}: {', '.join(unknown)}")

        catalog = cls(
            food=df.loc[df['category'] == FOOD, 'description'].tolist(),
            books=df.loc[df['category'] == BOOKS, 'description'].tolist(),
            medical=df.loc[df['category'] == MEDICAL, 'description'].tolist(),
        )
        logger.info(f"Loaded {len(catalog)} exempt descriptions from {source}")
        return catalog

    def category_of(self, description: str) -> Optional[str]:
        """Return the exemption category of a description, or None for ordinary goods."""
        for category in EXEMPT_CATEGORIES:
            if description in self._sets[category]:
                return category
        return None

    def is_exempt(self, description: str) -> bool:
        return self.category_of(description) is not None

    def to_dataframe(self) -> pd.DataFrame:
        rows = [
            {'description': description, 'category': category}
            for category in EXEMPT_CATEGORIES
            for description in sorted(self._sets[category])
        ]
        return pd.DataFrame(rows, columns=REQUIRED_COLUMNS)

    def summary(self) -> Dict[str, int]:
        """Count exempt descriptions per category."""
        counts = self.to_dataframe()['category'].value_counts()
        return {category: int(counts.get(category, 0)) for category in EXEMPT_CATEGORIES}

    def __len__(self) -> int:
        return sum(len(s) for s in self._sets.values())

    def __contains__(self, description: str) -> bool:
        return self.is_exempt(description)

    def __repr__(self):
        return f"ExemptionCatalog(food={len(self.food)}, books={len(self.books)}, medical={len(self.medical)})"
