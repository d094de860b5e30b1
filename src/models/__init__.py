"""
Data models for catalog sync.

This module contains pure data classes with no business logic.
"""

from .commerce import Brand, Product, ProductCategory, ProductLink
from .product import (
    CatalogProduct,
    ProductInput,
    ProductOption,
    ProductUpdate,
    VariantInput,
    VariantPrice,
)

__all__ = [
    'CatalogProduct',
    'ProductOption',
    'VariantPrice',
    'VariantInput',
    'ProductInput',
    'ProductUpdate',
    'Brand',
    'ProductCategory',
    'Product',
    'ProductLink',
]
