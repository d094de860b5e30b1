#!/usr/bin/env python3
"""
Export stored products to CSV.

Usage:
    # Write the first 100 products to stdout
    python3 scripts/export_products.py

    # Write 500 products starting at offset 100 to a file
    python3 scripts/export_products.py --limit 500 --offset 100 --output output/products.csv
"""

import argparse
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
from src.export import ProductCSVExporter

load_dotenv(Path(__file__).parent.parent / ".env")

logger = logging.getLogger(__name__)


def main() -> None:
    parser = argparse.ArgumentParser(description="Export products to CSV")
    parser.add_argument("--limit", type=int, default=None, help="Maximum products (default: from config)")
    parser.add_argument("--offset", type=int, default=0, help="Products to skip (default: 0)")
    parser.add_argument("--output", "-o", help="Output CSV path (default: stdout)")
    parser.add_argument("--verbose", action="store_true")
    parser.add_argument("--quiet", action="store_true")
    args = parser.parse_args()

    setup_logging(verbose=args.verbose, quiet=args.quiet)

    settings = load_sync_settings()
    limit = args.limit or settings.export_default_limit
    container = ServiceContainer.from_settings(settings)
    exporter = ProductCSVExporter(
        container.products,
        batch_size=settings.export_batch_size,
        currency=settings.currency,
    )

    try:
        if args.output:
            rows = exporter.export_to_file(args.output, limit=limit, offset=args.offset)
            logger.info("Wrote %d products to %s", rows, args.output)
        else:
            for line in exporter.iter_csv(limit=limit, offset=args.offset):
                sys.stdout.write(line)
    finally:
        container.close()


if __name__ == "__main__":
    main()
