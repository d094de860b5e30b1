#!/usr/bin/env python3
"""
Manual Product Sync

Runs the daily product sync once, right now, against the configured
catalog and commerce platform.

Usage:
    # Sync with settings from config/sync.yaml and .env
    python3 scripts/run_sync.py

    # Use a different catalog and page size
    python3 scripts/run_sync.py --catalog-url https://dummyjson.com --page-size 50
"""

import argparse
import dataclasses
import logging
import os
import sys
from pathlib import Path

from dotenv import load_dotenv

# Add project root to path for proper package imports
sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

from src.commerce import ServiceContainer
from src.common.config_loader import load_sync_settings
from src.common.log_config import setup_logging
from src.sync import daily_product_sync

load_dotenv(Path(__file__).parent.parent / ".env")

logger = logging.getLogger(__name__)


def main() -> None:
    parser = argparse.ArgumentParser(description="Run the daily product sync once")
    parser.add_argument("--catalog-url", help="Catalog API root (default: from config/env)")
    parser.add_argument("--page-size", type=int, help="Products per catalog page")
    parser.add_argument("--verbose", action="store_true")
    parser.add_argument("--quiet", action="store_true")
    args = parser.parse_args()

    setup_logging(verbose=args.verbose, quiet=args.quiet)

    settings = load_sync_settings()
    if args.catalog_url:
        settings = dataclasses.replace(settings, catalog_url=args.catalog_url)
    if args.page_size:
        settings = dataclasses.replace(settings, page_size=args.page_size)

    container = ServiceContainer.from_settings(settings)
    try:
        logger.info("Starting manual run of daily product sync...")
        report = daily_product_sync(container, settings=settings)
    finally:
        container.close()

    print("\nSync Summary")
    print(f"  Batches:  {report.batches}")
    print(f"  Created:  {report.created}")
    print(f"  Updated:  {report.updated}")
    print(f"  Failed:   {report.failed}")

    if not report.completed or report.failed:
        sys.exit(1)


if __name__ == "__main__":
    main()
