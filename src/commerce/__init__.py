"""
Commerce platform integration modules.

Modules:
    api_client - Shared REST client for the platform admin API
    services   - Product/category, brand and link services
"""

from .api_client import CommerceAPIClient
from .services import (
    BrandService,
    CommerceAPIError,
    LinkService,
    ProductService,
    ServiceContainer,
)

__all__ = [
    # API Client
    'CommerceAPIClient',
    # Services
    'ProductService',
    'BrandService',
    'LinkService',
    'ServiceContainer',
    'CommerceAPIError',
]
