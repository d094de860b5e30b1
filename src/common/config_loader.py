"""
Configuration Loader

Loads the YAML sync configuration and applies environment overrides
for deployment values (API URLs, tokens).
"""

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Optional

import yaml

SYNC_CONFIG_FILE = 'sync.yaml'


def _get_config_dir() -> Path:
    """Get the config directory path."""
    # Try relative to this file first
    module_dir = Path(__file__).parent.parent.parent
    config_dir = module_dir / 'config'

    if config_dir.exists():
        return config_dir

    # Try current working directory
    cwd_config = Path.cwd() / 'config'
    if cwd_config.exists():
        return cwd_config

    raise FileNotFoundError(
        f"Config directory not found. Tried: {config_dir}, {cwd_config}"
    )


def load_config(filename: str) -> Dict[str, Any]:
    """
    Load a YAML configuration file.

    Args:
        filename: Name of the config file (e.g., 'sync.yaml')

    Returns:
        Parsed YAML content as dictionary

    Raises:
        FileNotFoundError: If config file doesn't exist
    """
    config_path = _get_config_dir() / filename

    if not config_path.exists():
        raise FileNotFoundError(f"Config file not found: {config_path}")

    with open(config_path, 'r', encoding='utf-8') as f:
        return yaml.safe_load(f) or {}


@dataclass
class SyncSettings:
    """Resolved settings for the sync job, export and API clients."""

    catalog_url: str = "https://dummyjson.com"
    page_size: int = 20
    fetch_retries: int = 2
    fetch_backoff: float = 1.0
    fetch_timeout: int = 30

    commerce_url: str = "http://localhost:9000/admin"
    commerce_token: str = ""
    currency: str = "usd"
    update_workers: int = 8

    job_name: str = "daily-product-sync"
    schedule: str = "0 0 * * *"

    export_batch_size: int = 50
    export_default_limit: int = 100
    export_admin_token: str = ""

    def __post_init__(self):
        """Validate numeric settings after initialization."""
        if self.page_size <= 0:
            raise ValueError("page_size must be positive")
        if self.fetch_retries <= 0:
            raise ValueError("fetch_retries must be positive")
        if self.export_batch_size <= 0:
            raise ValueError("export_batch_size must be positive")


def load_sync_settings(
    config: Optional[Dict[str, Any]] = None,
    environ: Optional[Dict[str, str]] = None,
) -> SyncSettings:
    """
    Build SyncSettings from the YAML config and environment.

    Environment variables win over the YAML file:
        CATALOG_API_URL, COMMERCE_API_URL, COMMERCE_API_TOKEN, EXPORT_ADMIN_TOKEN

    Args:
        config: Parsed config dict (if None, loads config/sync.yaml)
        environ: Environment mapping (if None, uses os.environ)

    Returns:
        Resolved settings
    """
    if config is None:
        config = load_config(SYNC_CONFIG_FILE)
    if environ is None:
        environ = os.environ

    catalog = config.get('catalog', {})
    commerce = config.get('commerce', {})
    job = config.get('job', {})
    export = config.get('export', {})
    defaults = SyncSettings()

    return SyncSettings(
        catalog_url=environ.get('CATALOG_API_URL') or catalog.get('base_url', defaults.catalog_url),
        page_size=int(catalog.get('page_size', defaults.page_size)),
        fetch_retries=int(catalog.get('retries', defaults.fetch_retries)),
        fetch_backoff=float(catalog.get('backoff_seconds', defaults.fetch_backoff)),
        fetch_timeout=int(catalog.get('timeout_seconds', defaults.fetch_timeout)),
        commerce_url=environ.get('COMMERCE_API_URL') or commerce.get('base_url', defaults.commerce_url),
        commerce_token=environ.get('COMMERCE_API_TOKEN', ''),
        currency=str(commerce.get('currency', defaults.currency)).lower(),
        update_workers=int(commerce.get('update_workers', defaults.update_workers)),
        job_name=job.get('name', defaults.job_name),
        schedule=job.get('schedule', defaults.schedule),
        export_batch_size=int(export.get('batch_size', defaults.export_batch_size)),
        export_default_limit=int(export.get('default_limit', defaults.export_default_limit)),
        export_admin_token=environ.get('EXPORT_ADMIN_TOKEN', ''),
    )
