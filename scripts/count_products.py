#!/usr/bin/env python3
"""
Count stored products and show a sample.

Usage:
    python3 scripts/count_products.py
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


def main() -> None:
    parser = argparse.ArgumentParser(description="Count products in the commerce platform")
    parser.add_argument("--verbose", action="store_true")
    parser.add_argument("--quiet", action="store_true")
    args = parser.parse_args()

    setup_logging(verbose=args.verbose, quiet=args.quiet)

    container = ServiceContainer.from_settings(load_sync_settings())
    try:
        products, count = container.products.list_and_count_products(limit=1)
    except CommerceAPIError as e:
        print(f"ERROR: {e}")
        sys.exit(1)
    finally:
        container.close()

    print(f"Total products found: {count}")
    if products:
        print(f"Sample product: {products[0].title} (ID: {products[0].id})")
    else:
        print("No products returned.")


if __name__ == "__main__":
    main()
