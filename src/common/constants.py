"""
Shared constants for the project.

This module contains application-wide constants that should have a single source of truth.
"""

# Metadata key holding the source catalog's product id
EXTERNAL_ID_KEY = "external_id"

# Link API module keys
PRODUCT_MODULE = "product"
BRAND_MODULE = "brand"

DEFAULT_CURRENCY = "usd"

# Single-option products: every synced product gets this option/value pair
DEFAULT_OPTION_TITLE = "Default Option"
DEFAULT_OPTION_VALUE = "Default"

# Platform product status enum
PRODUCT_STATUSES = ("draft", "proposed", "published", "rejected")
DEFAULT_PRODUCT_STATUS = "draft"
