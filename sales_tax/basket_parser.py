import json
import logging
import os
import re
from decimal import InvalidOperation
from typing import List, Optional

import pandas as pd

from sales_tax.models.basket import Basket
from sales_tax.models.item import BasketEntry, to_decimal

logger = logging.getLogger(__name__)

DEFAULT_BASKET_DIR = os.path.join("data", "baskets")

LINE_PATTERN = re.compile(r'^\s*(\d+)\s+(.+?)\s+at\s+(\d+(?:\.\d+)?)\s*$')
IMPORTED_PATTERN = re.compile(r'\bimported\b')
TRUE_FLAGS = {'true', 'yes', 'y', '1'}
FALSE_FLAGS = {'false', 'no', 'n', '0', ''}


def _parse_flag(value) -> bool:
    """Interpret an imported flag written as a bool, number or Y/N string."""
    if isinstance(value, bool):
        return value
    text = str(value).strip().lower()
    if text in TRUE_FLAGS:
        return True
    if text in FALSE_FLAGS:
        return False
    raise ValueError(f"Unrecognized imported flag: {value!r}")


def _expand(description: str, is_imported: bool, price, quantity) -> List[BasketEntry]:
    count = to_decimal(quantity)
    if not count.is_finite() or count != count.to_integral_value():
        raise ValueError(f"Quantity must be a whole number for {description}: {quantity}")
    quantity = int(count)
    if quantity < 1:
        raise ValueError(f"Quantity must be positive for {description}: {quantity}")
    entry = BasketEntry(description=description, is_imported=is_imported, price=to_decimal(price))
    return [entry] * quantity


class BasketParser:
    """
    Reads shopping baskets from text, JSON and CSV files.

    Malformed lines or rows are logged and skipped. A file that cannot be read
    at all yields an empty basket.
    """

    def parse_line(self, line: str) -> Optional[List[BasketEntry]]:
        """
        Parse a line such as "2 imported bottle of perfume at 47.50".

        Returns:
            The entries for the line, one per unit, or None if the line does not
            look like a basket line.
        """
        match = LINE_PATTERN.match(line)
        if not match:
            return None
        quantity, description, price = match.groups()
        is_imported = IMPORTED_PATTERN.search(description) is not None
        return _expand(description.strip(), is_imported, price, quantity)

    def parse_basket_text(self, text: str) -> Basket:
        """Parse a basket written one good per line."""
        entries = []
        for line_number, line in enumerate(text.split('\n'), 1):
            line = line.strip()
            if not line or line.startswith('#'):
                continue
            try:
                parsed = self.parse_line(line)
            except (ValueError, InvalidOperation) as e:
                logger.warning(f"Skipping line {line_number} ({line!r}): {e}")
                continue
            if parsed is None:
                logger.warning(f"Skipping unrecognized line {line_number}: {line!r}")
                continue
            entries.extend(parsed)
        return Basket(entries=entries)

    def parse_basket_file(self, text_path: str) -> Basket:
        try:
            with open(text_path, 'r', encoding='utf-8') as f:
                basket = self.parse_basket_text(f.read())
        except (OSError, UnicodeDecodeError) as e:
            logger.error(f"Error reading basket {text_path}: {e}", exc_info=True)
            return Basket(basket_path=text_path)
        basket.basket_path = text_path
        return basket

    def parse_basket_records(self, records: List[dict]) -> Basket:
        """Build a basket from dictionaries with description, imported, price and quantity keys."""
        entries = []
        for index, record in enumerate(records):
            try:
                entries.extend(_expand(
                    description=str(record['description']).strip(),
                    is_imported=_parse_flag(record.get('imported', False)),
                    price=record['price'],
                    quantity=record.get('quantity', 1),
                ))
            except (KeyError, TypeError, ValueError, InvalidOperation) as e:
                logger.warning(f"Skipping basket record {index} ({record!r}): {e}")
        return Basket(entries=entries)

    def parse_json_basket(self, json_path: str) -> Basket:
        """
        Parse a JSON basket.

        Accepts either a list of item objects or an object with an "items" list.
        """
        try:
            with open(json_path, 'r', encoding='utf-8') as f:
                data = json.load(f)
        except (OSError, UnicodeDecodeError, json.JSONDecodeError) as e:
            logger.error(f"Error parsing JSON basket {json_path}: {e}", exc_info=True)
            return Basket(basket_path=json_path)

        if isinstance(data, dict):
            data = data.get('items', [])
        if not isinstance(data, list):
            logger.error(f"JSON basket {json_path} does not hold a list of items")
            return Basket(basket_path=json_path)

        basket = self.parse_basket_records(data)
        basket.basket_path = json_path
        return basket

    def parse_csv_basket(self, csv_path: str) -> Basket:
        """Parse a CSV basket with description, imported, price and optional quantity columns."""
        try:
            df = pd.read_csv(csv_path, dtype=str, keep_default_na=False)
        except (OSError, UnicodeDecodeError, pd.errors.ParserError, pd.errors.EmptyDataError) as e:
            logger.error(f"Error parsing CSV basket {csv_path}: {e}", exc_info=True)
            return Basket(basket_path=csv_path)

        missing = [col for col in ('description', 'price') if col not in df.columns]
        if missing:
            logger.error(f"CSV basket {csv_path} is missing columns: {', '.join(missing)}")
            return Basket(basket_path=csv_path)

        records = df.to_dict(orient='records')
        for record in records:
            if record.get('quantity', '') == '':
                record.pop('quantity', None)
        basket = self.parse_basket_records(records)
        basket.basket_path = csv_path
        return basket

    def parse_baskets_from_directory(self, directory_path: Optional[str] = None) -> List[Basket]:
        """Parse all baskets in the directory, in file name order."""
        directory_path = directory_path or os.getenv('SALES_TAX_BASKET_DIR', DEFAULT_BASKET_DIR)
        baskets = []
        for file_name in sorted(os.listdir(directory_path)):
            file_path = os.path.join(directory_path, file_name)
            lower_name = file_name.lower()
            if lower_name.endswith('.json'):
                basket = self.parse_json_basket(file_path)
            elif lower_name.endswith('.csv'):
                basket = self.parse_csv_basket(file_path)
            elif lower_name.endswith('.txt'):
                basket = self.parse_basket_file(file_path)
            else:
                continue
            logger.info(f"Read {len(basket)} items from {file_path}")
            baskets.append(basket)
        return baskets
