"""
Product CSV Exporter

Streams stored products as CSV: one header line, then one line per
product. Products are read from the platform in pages so an export of
any size keeps a bounded amount of data in memory.
"""

import csv
import io
import logging
import os
from typing import Any, Dict, Iterator, Optional

from ..common.constants import EXTERNAL_ID_KEY
from ..commerce.services import ProductService

logger = logging.getLogger(__name__)

EXPORT_FIELDNAMES = [
    'ID', 'External ID', 'Title', 'Handle', 'Status', 'Brand', 'Price (USD)', 'Created At',
]

# Product fields (and relations) requested from the platform
EXPORT_QUERY_FIELDS = [
    'id', 'title', 'handle', 'status', 'created_at', 'metadata',
    'variants.prices.*', 'brand.name',
]

EXPORT_BATCH_SIZE = 50


def first_variant_price(product: Dict[str, Any], currency: str = 'usd') -> Optional[int]:
    """Amount (minor units) of the first variant's price in currency."""
    variants = product.get('variants') or []
    if not variants:
        return None
    for price in variants[0].get('prices') or []:
        if price.get('currency_code') == currency:
            return price.get('amount')
    return None


class ProductCSVExporter:
    """
    Exports stored products to CSV.

    Usage:
        exporter = ProductCSVExporter(container.products)
        for line in exporter.iter_csv(limit=500):
            out.write(line)
    """

    def __init__(self, products: ProductService, batch_size: int = EXPORT_BATCH_SIZE, currency: str = 'usd'):
        """
        Initialize the exporter.

        Args:
            products: Product service to read from
            batch_size: Products fetched per request
            currency: Currency of the price column
        """
        self.products = products
        self.batch_size = batch_size
        self.currency = currency
        self.fieldnames = EXPORT_FIELDNAMES

    def _render(self, row: Optional[Dict[str, Any]] = None) -> str:
        """One CSV line: the header when row is None, else a fully quoted row."""
        output = io.StringIO()
        if row is None:
            writer = csv.DictWriter(output, fieldnames=self.fieldnames, lineterminator='\n')
            writer.writeheader()
        else:
            writer = csv.DictWriter(output, fieldnames=self.fieldnames,
                                    quoting=csv.QUOTE_ALL, lineterminator='\n')
            writer.writerow(row)
        return output.getvalue()

    def header(self) -> str:
        return self._render()

    def product_to_row(self, product: Dict[str, Any]) -> str:
        """
        Convert a product object to one CSV line.

        Every field is quoted, with inner quotes doubled.

        Args:
            product: Product dict with metadata, variant prices and brand

        Returns:
            CSV line including the trailing newline
        """
        amount = first_variant_price(product, self.currency)
        price_display = f"{amount / 100:.2f}" if amount else 'N/A'
        brand = (product.get('brand') or {}).get('name') or ''
        metadata = product.get('metadata') or {}

        return self._render({
            'ID': product.get('id') or '',
            'External ID': metadata.get(EXTERNAL_ID_KEY) or '',
            'Title': product.get('title') or '',
            'Handle': product.get('handle') or '',
            'Status': product.get('status') or '',
            'Brand': brand,
            'Price (USD)': price_display,
            'Created At': product.get('created_at') or '',
        })

    def iter_csv(self, limit: int = 100, offset: int = 0) -> Iterator[str]:
        """
        Yield the CSV export line by line.

        Fetches at most batch_size products per request and never more
        than limit in total. A failure mid-export ends the stream with an
        ``ERROR:`` line instead of raising, since the header is already out.

        Args:
            limit: Maximum number of products
            offset: Products to skip

        Yields:
            CSV lines
        """
        yield self.header()

        current_offset = offset
        fetched = 0

        try:
            while fetched < limit:
                take = min(self.batch_size, limit - fetched)
                products = self.products.query_products(EXPORT_QUERY_FIELDS, skip=current_offset, take=take)
                if not products:
                    break

                for product in products:
                    yield self.product_to_row(product)

                fetched += len(products)
                current_offset += len(products)

                if len(products) < take:
                    break
        except Exception as e:
            logger.error("Error exporting products: %s", e)
            yield f"\nERROR: {e}\n"

        logger.info("Exported %d products (offset %d)", fetched, offset)

    def export_to_file(self, output_path: str, limit: int = 100, offset: int = 0) -> int:
        """
        Write the export to a file.

        Returns:
            Number of product rows written
        """
        os.makedirs(os.path.dirname(output_path) or '.', exist_ok=True)

        row_count = 0
        with open(output_path, 'w', newline='', encoding='utf-8') as f:
            for i, line in enumerate(self.iter_csv(limit=limit, offset=offset)):
                f.write(line)
                if i > 0 and not line.startswith('\nERROR:'):
                    row_count += 1

        return row_count
