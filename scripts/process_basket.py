#!/usr/bin/env python3
"""Print itemized sales tax receipts for every basket file in a directory."""

import sys
import os
sys.path.append(os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

import argparse
import logging

from sales_tax.basket_parser import BasketParser
from sales_tax.cash_register import CashRegister
from sales_tax.exemption_catalog import ExemptionCatalog
from sales_tax.receipt_formatter import format_category_summary, format_receipt

logger = logging.getLogger("process_basket")


def main() -> int:
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument("baskets", nargs="?", default=os.getenv("SALES_TAX_BASKET_DIR"),
                        help="Directory of basket files (.txt, .json, .csv)")
    parser.add_argument("--exemptions", default=os.getenv("SALES_TAX_EXEMPTIONS_PATH"),
                        help="Exemption catalog CSV")
    parser.add_argument("--categories", action="store_true",
                        help="Also print the cost and tax breakdown by category")
    parser.add_argument("--log-level", default=os.getenv("SALES_TAX_LOG_LEVEL", "INFO"))
    args = parser.parse_args()

    logging.basicConfig(
        level=args.log_level.upper(),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )

    try:
        catalog = ExemptionCatalog.from_csv(args.exemptions)
    except (OSError, ValueError) as e:
        logger.error(f"Could not load exemption catalog: {e}")
        return 1

    register = CashRegister.from_catalog(catalog)
    try:
        baskets = BasketParser().parse_baskets_from_directory(args.baskets)
    except OSError as e:
        logger.error(f"Could not read basket directory: {e}")
        return 1

    for basket in baskets:
        register.scan_shopping_basket(basket.entries)
        receipt_details = register.checkout(basket.basket_path)

        print(f"\nBasket: {receipt_details.basket_path}")
        print(format_receipt(receipt_details))
        if args.categories:
            print(format_category_summary(receipt_details))

    return 0


if __name__ == "__main__":
    sys.exit(main())
