"""Tests for src/sync/scheduler.py"""

import dataclasses
from unittest.mock import patch

from apscheduler.triggers.cron import CronTrigger

from src.sync.scheduler import SyncScheduler


class TestSyncScheduler:
    def test_registers_cron_job(self, container, settings):
        scheduler = SyncScheduler(container, settings, blocking=False)

        job = scheduler.scheduler.get_job("daily-product-sync")
        assert job is not None
        assert isinstance(job.trigger, CronTrigger)

    def test_midnight_schedule(self, container, settings):
        scheduler = SyncScheduler(container, settings, blocking=False)

        fields = {f.name: str(f) for f in scheduler.trigger.fields}
        assert fields["hour"] == "0"
        assert fields["minute"] == "0"
        assert fields["day"] == "*"

    def test_custom_schedule(self, container, settings):
        settings = dataclasses.replace(settings, schedule="30 2 * * *")
        scheduler = SyncScheduler(container, settings, blocking=False)

        fields = {f.name: str(f) for f in scheduler.trigger.fields}
        assert fields["hour"] == "2"
        assert fields["minute"] == "30"

    def test_run_now_runs_sync(self, container, settings):
        scheduler = SyncScheduler(container, settings, blocking=False)
        with patch("src.sync.scheduler.daily_product_sync") as sync:
            scheduler.run_now()
        sync.assert_called_once_with(container, settings=settings)

    def test_start_and_shutdown(self, container, settings):
        scheduler = SyncScheduler(container, settings, blocking=False)
        scheduler.start()
        try:
            assert scheduler.scheduler.running
        finally:
            scheduler.shutdown()
        assert not scheduler.scheduler.running
