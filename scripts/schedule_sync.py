#!/usr/bin/env python3
"""
Product Sync Scheduler

Runs the daily product sync on its cron schedule (default: midnight UTC)
until interrupted.

Usage:
    python3 scripts/schedule_sync.py
    python3 scripts/schedule_sync.py --run-now
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
from src.sync.scheduler import SyncScheduler

load_dotenv(Path(__file__).parent.parent / ".env")

logger = logging.getLogger(__name__)


def main() -> None:
    parser = argparse.ArgumentParser(description="Run the product sync on its schedule")
    parser.add_argument("--run-now", action="store_true", help="Run one sync before waiting")
    parser.add_argument("--timezone", default="UTC", help="Timezone of the cron schedule")
    parser.add_argument("--verbose", action="store_true")
    parser.add_argument("--quiet", action="store_true")
    args = parser.parse_args()

    setup_logging(verbose=args.verbose, quiet=args.quiet, timestamps=True)

    settings = load_sync_settings()
    container = ServiceContainer.from_settings(settings)
    scheduler = SyncScheduler(container, settings, blocking=True, timezone=args.timezone)

    try:
        if args.run_now:
            scheduler.run_now()
        scheduler.start()
    except (KeyboardInterrupt, SystemExit):
        scheduler.shutdown()
    finally:
        container.close()


if __name__ == "__main__":
    main()
