#!/usr/bin/env python3
"""
Serve the product export route.

    GET /admin/products/export?limit=100&offset=0

Set EXPORT_ADMIN_TOKEN to require "Authorization: Bearer <token>".

Usage:
    python3 scripts/serve_export.py --port 9100
"""

import argparse
import os
import sys
from pathlib import Path

import uvicorn
from dotenv import load_dotenv

# Add project root to path for proper package imports
sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

from src.commerce import ServiceContainer
from src.common.config_loader import load_sync_settings
from src.common.log_config import setup_logging
from src.export.api import create_app

load_dotenv(Path(__file__).parent.parent / ".env")


def main() -> None:
    parser = argparse.ArgumentParser(description="Serve the product CSV export")
    parser.add_argument("--host", default="127.0.0.1")
    parser.add_argument("--port", type=int, default=9100)
    parser.add_argument("--verbose", action="store_true")
    parser.add_argument("--quiet", action="store_true")
    args = parser.parse_args()

    setup_logging(verbose=args.verbose, quiet=args.quiet, timestamps=True)

    settings = load_sync_settings()
    container = ServiceContainer.from_settings(settings)
    try:
        uvicorn.run(create_app(container, settings), host=args.host, port=args.port)
    finally:
        container.close()


if __name__ == "__main__":
    main()
