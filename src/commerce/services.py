"""
Commerce Module Services

Product, category, brand and link services over the platform admin API.
Every persistence call goes through these; callers never build URLs.

A call the API client could not complete raises CommerceAPIError so
workflow steps fail and their compensations run.
"""

import logging
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from typing import Any, Dict, Iterable, List, Optional, Sequence, Tuple

from ..models import Brand, Product, ProductCategory, ProductLink
from .api_client import CommerceAPIClient

logger = logging.getLogger(__name__)


class CommerceAPIError(Exception):
    """
    Raised when a platform API call fails.

    Calls that create rows one request at a time attach the rows created
    before the failure as ``created`` so callers can still clean them up.
    """

    def __init__(self, message: str, created: Optional[List[Any]] = None):
        super().__init__(message)
        self.created = list(created or [])


def _require(result: Optional[Dict[str, Any]], action: str) -> Dict[str, Any]:
    if result is None:
        raise CommerceAPIError(f"Failed to {action}")
    return result


class ProductService:
    """Product and product category CRUD."""

    def __init__(self, client: CommerceAPIClient, max_workers: int = 8):
        self.client = client
        self.max_workers = max_workers

    def list_products(self, external_ids: Sequence[str]) -> List[Product]:
        """
        List stored products whose metadata external_id is in external_ids.

        Args:
            external_ids: Catalog product ids (as strings)

        Returns:
            Matching products (may be empty)
        """
        if not external_ids:
            return []
        result = _require(
            self.client.rest_request("GET", "products", params={
                "metadata[external_id]": list(external_ids),
                "limit": len(external_ids),
            }),
            "list products",
        )
        return [Product.from_dict(p) for p in result.get("products", [])]

    def list_and_count_products(self, limit: int = 50, offset: int = 0) -> Tuple[List[Product], int]:
        """Return one page of products and the total product count."""
        result = _require(
            self.client.rest_request("GET", "products", params={"limit": limit, "offset": offset}),
            "list products",
        )
        products = [Product.from_dict(p) for p in result.get("products", [])]
        return products, int(result.get("count", len(products)))

    def query_products(self, fields: Sequence[str], skip: int = 0, take: int = 50) -> List[Dict[str, Any]]:
        """
        Fetch raw product objects with related fields (e.g. "variants.prices.*").

        Returns:
            Product dicts as returned by the API
        """
        result = _require(
            self.client.rest_request("GET", "products", params={
                "fields": ",".join(fields),
                "offset": skip,
                "limit": take,
            }),
            "query products",
        )
        return result.get("products", [])

    def create_products(self, items: List[Dict[str, Any]]) -> List[Product]:
        """Bulk-create products. Returns created products in input order."""
        if not items:
            return []
        result = _require(
            self.client.rest_request("POST", "products/batch", {"create": items}),
            f"create {len(items)} products",
        )
        return [Product.from_dict(p) for p in result.get("created", [])]

    def update_product(self, product_id: str, data: Dict[str, Any]) -> Product:
        result = _require(
            self.client.rest_request("POST", f"products/{product_id}", data),
            f"update product {product_id}",
        )
        return Product.from_dict(result.get("product") or {"id": product_id})

    def update_products(self, updates: Sequence[Tuple[str, Dict[str, Any]]]) -> List[Product]:
        """
        Update several products concurrently.

        Args:
            updates: (product_id, data) pairs

        Returns:
            Updated products in input order

        Raises:
            CommerceAPIError: If any single update failed
        """
        if not updates:
            return []
        workers = max(1, min(self.max_workers, len(updates)))
        with ThreadPoolExecutor(max_workers=workers) as executor:
            return list(executor.map(lambda u: self.update_product(*u), updates))

    def delete_products(self, ids: Sequence[str]) -> None:
        if not ids:
            return
        _require(
            self.client.rest_request("POST", "products/batch", {"delete": list(ids)}),
            f"delete {len(ids)} products",
        )

    def list_product_categories(self, handles: Sequence[str]) -> List[ProductCategory]:
        if not handles:
            return []
        result = _require(
            self.client.rest_request("GET", "product-categories", params={
                "handle": list(handles),
                "limit": len(handles),
            }),
            "list product categories",
        )
        return [ProductCategory.from_dict(c) for c in result.get("product_categories", [])]

    def create_product_categories(self, items: Iterable[Dict[str, str]]) -> List[ProductCategory]:
        """
        Create categories one by one.

        Raises:
            CommerceAPIError: On the first category that could not be created,
                with the categories created before it in ``created``
        """
        created = []
        for item in items:
            result = self.client.rest_request("POST", "product-categories", item)
            if result is None:
                raise CommerceAPIError(
                    f"Failed to create product category {item.get('handle')!r}",
                    created=created,
                )
            created.append(ProductCategory.from_dict(result["product_category"]))
        return created

    def delete_product_categories(self, ids: Sequence[str]) -> None:
        for category_id in ids:
            _require(
                self.client.rest_request("DELETE", f"product-categories/{category_id}"),
                f"delete product category {category_id}",
            )


class BrandService:
    """CRUD for the custom brand module."""

    def __init__(self, client: CommerceAPIClient):
        self.client = client

    def list_brands(self, names: Sequence[str]) -> List[Brand]:
        if not names:
            return []
        result = _require(
            self.client.rest_request("GET", "brands", params={"name": list(names), "limit": len(names)}),
            "list brands",
        )
        return [Brand.from_dict(b) for b in result.get("brands", [])]

    def create_brands(self, names: Sequence[str]) -> List[Brand]:
        if not names:
            return []
        result = _require(
            self.client.rest_request("POST", "brands/batch", {"create": [{"name": n} for n in names]}),
            f"create {len(names)} brands",
        )
        return [Brand.from_dict(b) for b in result.get("created", [])]

    def delete_brands(self, ids: Sequence[str]) -> None:
        if not ids:
            return
        _require(
            self.client.rest_request("POST", "brands/batch", {"delete": list(ids)}),
            f"delete {len(ids)} brands",
        )


class LinkService:
    """Create and dismiss cross-module links (product <-> brand)."""

    def __init__(self, client: CommerceAPIClient):
        self.client = client

    def create(self, links: Sequence[ProductLink]) -> None:
        if not links:
            return
        _require(
            self.client.rest_request("POST", "links", {"links": [link.to_dict() for link in links]}),
            f"create {len(links)} links",
        )

    def dismiss(self, links: Sequence[ProductLink]) -> None:
        if not links:
            return
        _require(
            self.client.rest_request("POST", "links/dismiss", {"links": [link.to_dict() for link in links]}),
            f"dismiss {len(links)} links",
        )


@dataclass
class ServiceContainer:
    """The services a workflow step or job can resolve."""
    products: ProductService
    brands: BrandService
    links: LinkService
    client: Optional[CommerceAPIClient] = None

    @classmethod
    def from_settings(cls, settings) -> "ServiceContainer":
        """Wire all services to one API client built from SyncSettings."""
        client = CommerceAPIClient(settings.commerce_url, settings.commerce_token)
        return cls(
            products=ProductService(client, max_workers=settings.update_workers),
            brands=BrandService(client),
            links=LinkService(client),
            client=client,
        )

    def close(self) -> None:
        if self.client is not None:
            self.client.close()
