"""
Scheduler for the daily product sync.

Uses APScheduler to run daily_product_sync on the job's crontab
(midnight every day unless configured otherwise).
"""

import logging

from apscheduler.schedulers.background import BackgroundScheduler
from apscheduler.schedulers.blocking import BlockingScheduler
from apscheduler.triggers.cron import CronTrigger

from ..commerce.services import ServiceContainer
from ..common.config_loader import SyncSettings
from .job import JOB_CONFIG, SyncReport, daily_product_sync

logger = logging.getLogger(__name__)


class SyncScheduler:
    """
    Registers the daily product sync as a cron job.

    Usage:
        scheduler = SyncScheduler(container, settings)
        scheduler.start()        # blocks until interrupted
    """

    def __init__(
        self,
        container: ServiceContainer,
        settings: SyncSettings,
        blocking: bool = True,
        timezone: str = "UTC",
    ):
        self.container = container
        self.settings = settings
        self.job_id = settings.job_name or JOB_CONFIG["name"]
        self.schedule = settings.schedule or JOB_CONFIG["schedule"]

        scheduler_class = BlockingScheduler if blocking else BackgroundScheduler
        self.scheduler = scheduler_class(timezone=timezone)
        self.trigger = CronTrigger.from_crontab(self.schedule, timezone=timezone)

        self.scheduler.add_job(
            self.run_now,
            trigger=self.trigger,
            id=self.job_id,
            name="Daily Product Sync",
            replace_existing=True,
            max_instances=1,
            coalesce=True,
        )

    def run_now(self) -> SyncReport:
        """Run one sync immediately (also the scheduled callable)."""
        return daily_product_sync(self.container, settings=self.settings)

    def start(self) -> None:
        """Start the scheduler."""
        logger.info("Sync scheduler started. Job %s on '%s'", self.job_id, self.schedule)
        self.scheduler.start()

    def shutdown(self, wait: bool = False) -> None:
        """Stop the scheduler."""
        if self.scheduler.running:
            self.scheduler.shutdown(wait=wait)
        logger.info("Sync scheduler stopped")
