"""
Remote catalog integration.

Modules:
    client - Paginated catalog API reader with retry/backoff
    mapper - Catalog record -> platform product normalization
"""

from .client import CatalogAPIClient, CatalogFetchError, CatalogPage
from .mapper import (
    index_by_external_id,
    map_to_platform_format,
    split_by_external_id,
    to_minor_units,
)

__all__ = [
    'CatalogAPIClient',
    'CatalogFetchError',
    'CatalogPage',
    'map_to_platform_format',
    'split_by_external_id',
    'index_by_external_id',
    'to_minor_units',
]
