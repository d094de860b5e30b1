"""
Catalog API Client

Reads products from the remote catalog's paginated JSON API
(``/products?limit=N&skip=M``) with a fixed exponential backoff.
"""

import logging
import time
from dataclasses import dataclass, field
from typing import Any, Dict, Iterator, List, Optional

import requests

from ..models import CatalogProduct

logger = logging.getLogger(__name__)


class CatalogFetchError(Exception):
    """Raised when a catalog request still fails after the last retry."""


@dataclass
class CatalogPage:
    """One page of the catalog listing."""
    products: List[CatalogProduct] = field(default_factory=list)
    total: int = 0
    skip: int = 0
    limit: int = 0
    # Records in the response, including any skipped as malformed
    received: int = 0


class CatalogAPIClient:
    """
    Read-only client for the remote product catalog.

    Usage:
        with CatalogAPIClient("https://dummyjson.com") as catalog:
            for batch in catalog.iter_batches(limit=20):
                ...
    """

    def __init__(
        self,
        base_url: str,
        retries: int = 2,
        backoff: float = 1.0,
        timeout: int = 30,
    ):
        """
        Initialize the catalog client.

        Args:
            base_url: Catalog API root (e.g. "https://dummyjson.com")
            retries: Total attempts per request
            backoff: Base delay in seconds, doubled after each failed attempt
            timeout: Request timeout in seconds
        """
        self.base_url = base_url.rstrip("/")
        self.retries = retries
        self.backoff = backoff
        self.timeout = timeout

        self.session = requests.Session()
        self.session.headers.update({"Accept": "application/json"})

    def __enter__(self):
        return self

    def __exit__(self, *args):
        self.session.close()

    def close(self):
        self.session.close()

    def fetch_with_retry(self, url: str, params: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
        """
        GET a JSON document, retrying with exponential backoff.

        Args:
            url: Absolute URL to fetch
            params: Query parameters

        Returns:
            Parsed JSON body

        Raises:
            CatalogFetchError: If every attempt failed
        """
        for attempt in range(self.retries):
            try:
                response = self.session.get(url, params=params, timeout=self.timeout)
                if not response.ok:
                    raise CatalogFetchError(f"Request failed with status {response.status_code}")
                return response.json()
            except (requests.exceptions.RequestException, ValueError, CatalogFetchError) as e:
                if attempt == self.retries - 1:
                    logger.error("Catalog request failed after %d attempts: %s", self.retries, e)
                    if isinstance(e, CatalogFetchError):
                        raise
                    raise CatalogFetchError(str(e)) from e

                delay = self.backoff * (2 ** attempt)
                logger.warning("Catalog request failed (%s), retry %d/%d in %.1fs...",
                               e, attempt + 1, self.retries, delay)
                time.sleep(delay)

        raise CatalogFetchError("No attempts made")

    def fetch_page(self, limit: int, skip: int) -> CatalogPage:
        """
        Fetch one page of products.

        Records that fail to parse are logged and left out of the page.
        """
        data = self.fetch_with_retry(
            f"{self.base_url}/products",
            params={"limit": limit, "skip": skip},
        )
        raw_products = data.get("products") or []

        products = []
        for raw in raw_products:
            try:
                products.append(CatalogProduct.from_dict(raw))
            except (AttributeError, TypeError, ValueError) as e:
                logger.warning("Skipping malformed catalog product %r: %s",
                               raw.get("id") if isinstance(raw, dict) else raw, e)

        return CatalogPage(
            products=products,
            received=len(raw_products),
            total=int(data.get("total") or 0),
            skip=int(data.get("skip") or skip),
            limit=int(data.get("limit") or limit),
        )

    def iter_batches(self, limit: int = 20) -> Iterator[List[CatalogProduct]]:
        """
        Yield the whole catalog one page at a time.

        Stops on an empty page or once ``skip`` reaches the reported total.

        Args:
            limit: Page size

        Yields:
            List of products per page
        """
        skip = 0
        while True:
            page = self.fetch_page(limit=limit, skip=skip)
            if not page.received:
                break

            if page.products:
                yield page.products

            skip += limit
            if skip >= page.total:
                break
