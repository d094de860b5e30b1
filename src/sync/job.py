"""
Daily Product Sync Job

Pages through the remote catalog and runs the batch products workflow
for every page. A failed page is logged and skipped; the job moves on
to the next one. Any other failure ends the run with a critical log line
and a report marked incomplete.
"""

import logging
from dataclasses import dataclass
from typing import Optional

from ..catalog.client import CatalogAPIClient
from ..catalog.mapper import split_by_external_id
from ..commerce.services import ServiceContainer
from ..common.config_loader import SyncSettings, load_sync_settings
from .batch_products import BatchInput, batch_products_workflow

logger = logging.getLogger(__name__)

JOB_CONFIG = {
    "name": "daily-product-sync",
    "schedule": "0 0 * * *",
}


@dataclass
class SyncReport:
    """Counters for one job run."""
    batches: int = 0
    created: int = 0
    updated: int = 0
    failed: int = 0
    completed: bool = False


def daily_product_sync(
    container: ServiceContainer,
    settings: Optional[SyncSettings] = None,
    catalog: Optional[CatalogAPIClient] = None,
) -> SyncReport:
    """
    Sync the whole remote catalog into the commerce platform.

    Args:
        container: Platform services
        settings: Sync settings (if None, loads config/sync.yaml)
        catalog: Catalog client (if None, one is built from settings)

    Returns:
        SyncReport for the run
    """
    if settings is None:
        settings = load_sync_settings()
    owns_catalog = catalog is None
    if catalog is None:
        catalog = CatalogAPIClient(
            settings.catalog_url,
            retries=settings.fetch_retries,
            backoff=settings.fetch_backoff,
            timeout=settings.fetch_timeout,
        )

    report = SyncReport()
    logger.info("Starting daily product sync...")

    try:
        for batch in catalog.iter_batches(limit=settings.page_size):
            report.batches += 1
            logger.info("Processing batch of %d products...", len(batch))

            existing = container.products.list_products([p.external_id for p in batch])
            create, update = split_by_external_id(batch, existing, currency=settings.currency)
            if not create and not update:
                continue

            result = batch_products_workflow.run(
                BatchInput(create=create, update=update),
                container,
                throw_on_error=False,
            )

            if result.errors:
                report.failed += 1
                logger.error("Error syncing batch: %s", "; ".join(str(e) for e in result.errors))
            else:
                report.created += len(create)
                report.updated += len(update)
                logger.info("Synced batch: %d created, %d updated.", len(create), len(update))

        report.completed = True
        logger.info("Daily product sync completed.")
    except Exception as e:
        logger.critical("Critical error in product sync: %s", e, exc_info=True)
    finally:
        if owns_catalog:
            catalog.close()

    return report
