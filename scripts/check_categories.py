#!/usr/bin/env python3
"""
List products with their categories.

Usage:
    python3 scripts/check_categories.py --limit 20
"""

import argparse
import logging
import os
import sys
from pathlib import Path

from dotenv import load_dotenv

# Add project root to path for proper package imports
sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

from src.commerce import CommerceAPIError, ServiceContainer
from src.common.config_loader import load_sync_settings
from src.common.log_config import setup_logging

load_dotenv(Path(__file__).parent.parent / ".env")

logger = logging.getLogger(__name__)


def format_categories(product: dict) -> str:
    names = [c.get("name", "") for c in product.get("categories") or []]
    return ", ".join(n for n in names if n) or "None"


def main() -> None:
    parser = argparse.ArgumentParser(description="Show product categories")
    parser.add_argument("--limit", type=int, default=20, help="Products to show (default: 20)")
    parser.add_argument("--verbose", action="store_true")
    parser.add_argument("--quiet", action="store_true")
    args = parser.parse_args()

    setup_logging(verbose=args.verbose, quiet=args.quiet)

    container = ServiceContainer.from_settings(load_sync_settings())
    try:
        products = container.products.query_products(["title", "categories.name"], take=args.limit)
    except CommerceAPIError as e:
        print(f"ERROR: {e}")
        sys.exit(1)
    finally:
        container.close()

    print("Sample Products with Categories:")
    for product in products:
        print(f"- {product.get('title')}: [{format_categories(product)}]")


if __name__ == "__main__":
    main()
