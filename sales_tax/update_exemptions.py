import logging
from typing import Dict, Iterable, List

import pandas as pd

from sales_tax.exemption_catalog import EXEMPT_CATEGORIES, REQUIRED_COLUMNS

logger = logging.getLogger(__name__)


def _load_catalog(file_path: str) -> pd.DataFrame:
    try:
        df = pd.read_csv(file_path, dtype=str, keep_default_na=False)
    except (FileNotFoundError, pd.errors.EmptyDataError):
        logger.info(f"Creating new exemption catalog at {file_path}")
        return pd.DataFrame(columns=REQUIRED_COLUMNS)
    for col in REQUIRED_COLUMNS:
        if col not in df.columns:
            df[col] = ''
    return df


def add_exemptions(file_path: str, updates: List[Dict[str, str]]) -> bool:
    """
    Add or re-categorize exempt descriptions in the catalog CSV file.

    :param file_path: Path to the CSV file.
    :param updates: List of dictionaries with 'description' (str) and 'category' (str).
    :return: Boolean indicating success of the operation
    """
    try:
        df = _load_catalog(file_path)

        successful_updates = 0
        for update in updates:
            description = update['description']
            category = update['category'].strip().lower()

            if category not in EXEMPT_CATEGORIES:
                logger.warning(f"Unknown category {category!r} for {description!r}, skipping")
                continue

            mask = df['description'] == description
            if mask.any():
                if df.loc[mask, 'category'].iloc[0] == category:
                    logger.info(f"Category for {description!r} already set to {category}")
                else:
                    df.loc[mask, 'category'] = category
            else:
                new_row = pd.DataFrame([{'description': description, 'category': category}])
                df = pd.concat([df, new_row], ignore_index=True)

            successful_updates += 1

        df.drop_duplicates(subset=['description'], keep='last', inplace=True)
        df.to_csv(file_path, index=False)

        logger.info(f"Successfully updated {successful_updates} out of {len(updates)} exemptions.")
        return successful_updates > 0

    except (OSError, UnicodeDecodeError, KeyError, AttributeError, pd.errors.ParserError) as e:
        logger.error(f"Error updating exemptions: {e}", exc_info=True)
        return False


def remove_exemptions(file_path: str, descriptions: Iterable[str]) -> bool:
    """
    Remove descriptions from the catalog CSV file so they are taxed again.

    :return: Boolean indicating whether anything was removed
    """
    try:
        df = _load_catalog(file_path)
        descriptions = set(descriptions)
        mask = df['description'].isin(descriptions)

        not_found = descriptions - set(df.loc[mask, 'description'])
        for description in sorted(not_found):
            logger.warning(f"Description {description!r} not found in the catalog")

        removed = int(mask.sum())
        df.loc[~mask].to_csv(file_path, index=False)
        logger.info(f"Removed {removed} exemptions from {file_path}")
        return removed > 0

    except (OSError, UnicodeDecodeError, pd.errors.ParserError) as e:
        logger.error(f"Error removing exemptions: {e}", exc_info=True)
        return False
