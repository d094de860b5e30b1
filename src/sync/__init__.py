"""
Catalog sync workflows and jobs.

Modules:
    workflow       - Step/compensation workflow engine
    batch_products - Batch reconciliation workflow (create/update/link)
    sync_products  - Single-pass sync workflow over raw catalog products
    job            - Daily product sync job
    scheduler      - Cron registration of the daily job
"""

from .batch_products import BatchInput, batch_products_workflow
from .job import JOB_CONFIG, SyncReport, daily_product_sync
from .sync_products import sync_products_workflow
from .workflow import Step, StepResponse, Workflow, WorkflowResult

__all__ = [
    'Step',
    'StepResponse',
    'Workflow',
    'WorkflowResult',
    'BatchInput',
    'batch_products_workflow',
    'sync_products_workflow',
    'JOB_CONFIG',
    'SyncReport',
    'daily_product_sync',
]
