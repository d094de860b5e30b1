"""
Catalog Mapper

Normalizes catalog records into the commerce platform's product schema
and splits a batch into create/update sets by external id.
"""

import math
from typing import Dict, Iterable, List, Tuple

from ..common.constants import (
    DEFAULT_CURRENCY,
    DEFAULT_OPTION_TITLE,
    DEFAULT_OPTION_VALUE,
    DEFAULT_PRODUCT_STATUS,
    EXTERNAL_ID_KEY,
)
from ..common.handles import generate_handle
from ..models import (
    CatalogProduct,
    Product,
    ProductInput,
    ProductOption,
    ProductUpdate,
    VariantInput,
    VariantPrice,
)


def to_minor_units(price: float) -> int:
    """Convert a decimal price to cents, rounding halves up."""
    return int(math.floor(price * 100 + 0.5))


def compare_at_price(product: CatalogProduct):
    """Pre-discount price, or None when the product is not discounted."""
    if product.discount_percentage and product.discount_percentage > 0:
        return product.price * (1 + product.discount_percentage / 100)
    return None


def map_to_platform_format(
    product: CatalogProduct,
    currency: str = DEFAULT_CURRENCY,
    status: str = DEFAULT_PRODUCT_STATUS,
) -> ProductInput:
    """
    Map a catalog product to a platform product payload.

    Every product gets a single default option and one variant priced
    in minor units. The handle ends with the external id so titles
    shared by several catalog products still yield unique handles.

    Args:
        product: Catalog record
        currency: Price currency code
        status: Initial product status

    Returns:
        ProductInput ready for create/update
    """
    variant = VariantInput(
        title="Default",
        prices=[VariantPrice(amount=to_minor_units(product.price), currency_code=currency)],
        options={DEFAULT_OPTION_TITLE: DEFAULT_OPTION_VALUE},
        compare_at_price=compare_at_price(product),
    )

    return ProductInput(
        title=product.title,
        description=product.description,
        handle=generate_handle(product.title, suffix=product.external_id),
        status=status,
        metadata={EXTERNAL_ID_KEY: product.external_id},
        thumbnail=product.thumbnail,
        images=list(product.images),
        options=[ProductOption(title=DEFAULT_OPTION_TITLE, values=[DEFAULT_OPTION_VALUE])],
        variants=[variant],
        brand_name=product.brand,
        category_name=product.category,
    )


def index_by_external_id(products: Iterable[Product]) -> Dict[str, Product]:
    """Map external id -> stored product, skipping products without one."""
    return {p.external_id: p for p in products if p.external_id}


def split_by_external_id(
    batch: Iterable[CatalogProduct],
    existing: Iterable[Product],
    currency: str = DEFAULT_CURRENCY,
) -> Tuple[List[ProductInput], List[ProductUpdate]]:
    """
    Split a catalog batch into products to create and products to update.

    Args:
        batch: Catalog products of one page
        existing: Stored products already matching the batch's external ids
        currency: Price currency code

    Returns:
        (create, update) lists
    """
    existing_map = index_by_external_id(existing)

    create: List[ProductInput] = []
    update: List[ProductUpdate] = []

    for product in batch:
        item = map_to_platform_format(product, currency=currency)
        stored = existing_map.get(product.external_id)
        if stored:
            update.append(ProductUpdate(id=stored.id, data=item))
        else:
            create.append(item)

    return create, update
