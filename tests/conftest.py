"""Shared test fixtures."""

import itertools

import pytest

from src.commerce.services import CommerceAPIError, ServiceContainer
from src.common.config_loader import SyncSettings
from src.models import Brand, CatalogProduct, Product, ProductCategory


def catalog_dict(product_id, title, brand="Essence", category="beauty", price=9.99, **extra):
    """Catalog API product object (camelCase keys)."""
    data = {
        "id": product_id,
        "title": title,
        "description": f"{title} description",
        "category": category,
        "price": price,
        "discountPercentage": 0,
        "brand": brand,
        "sku": f"SKU-{product_id}",
        "stock": 10,
        "thumbnail": f"https://cdn.example.com/{product_id}/thumbnail.png",
        "images": [f"https://cdn.example.com/{product_id}/1.png"],
        "tags": ["beauty"],
    }
    data.update(extra)
    return data


class FakeProductService:
    """In-memory product and category service."""

    def __init__(self):
        self.products = {}
        self.categories = {}
        self.fail_create_products = False
        self.fail_update_products = False
        self.fail_create_categories = False
        self.fail_category_handle = None
        self.deleted_products = []
        self.deleted_categories = []
        self.created_payloads = []
        self.update_calls = []
        self._ids = itertools.count(1)

    def _next_id(self, prefix):
        return f"{prefix}_{next(self._ids)}"

    def add_product(self, external_id, title="Stored", **fields):
        product_id = self._next_id("prod")
        self.products[product_id] = {
            "id": product_id,
            "title": title,
            "handle": fields.pop("handle", f"stored-{external_id}"),
            "status": "draft",
            "metadata": {"external_id": external_id},
            **fields,
        }
        return product_id

    def add_category(self, name, handle):
        category = ProductCategory(id=self._next_id("pcat"), name=name, handle=handle)
        self.categories[category.id] = category
        return category

    def list_products(self, external_ids):
        wanted = set(external_ids)
        return [
            Product.from_dict(p) for p in self.products.values()
            if p["metadata"].get("external_id") in wanted
        ]

    def list_and_count_products(self, limit=50, offset=0):
        items = list(self.products.values())
        return [Product.from_dict(p) for p in items[offset:offset + limit]], len(items)

    def query_products(self, fields, skip=0, take=50):
        return list(self.products.values())[skip:skip + take]

    def create_products(self, items):
        if self.fail_create_products:
            raise CommerceAPIError("Failed to create products")
        created = []
        for item in items:
            product_id = self._next_id("prod")
            self.products[product_id] = {"id": product_id, **item}
            self.created_payloads.append(item)
            created.append(Product.from_dict(self.products[product_id]))
        return created

    def update_products(self, updates):
        if self.fail_update_products:
            raise CommerceAPIError("Failed to update products")
        result = []
        for product_id, data in updates:
            self.update_calls.append((product_id, data))
            self.products[product_id].update(data)
            result.append(Product.from_dict(self.products[product_id]))
        return result

    def delete_products(self, ids):
        self.deleted_products.extend(ids)
        for product_id in ids:
            self.products.pop(product_id, None)

    def list_product_categories(self, handles):
        wanted = set(handles)
        return [c for c in self.categories.values() if c.handle in wanted]

    def create_product_categories(self, items):
        if self.fail_create_categories:
            raise CommerceAPIError("Failed to create product category")
        created = []
        for item in items:
            if item["handle"] == self.fail_category_handle:
                raise CommerceAPIError(f"Failed to create product category {item['handle']!r}", created=created)
            created.append(self.add_category(item["name"], item["handle"]))
        return created

    def delete_product_categories(self, ids):
        self.deleted_categories.extend(ids)
        for category_id in ids:
            self.categories.pop(category_id, None)


class FakeBrandService:
    """In-memory brand module."""

    def __init__(self):
        self.brands = {}
        self.deleted = []
        self.create_calls = []
        self._ids = itertools.count(1)

    def add_brand(self, name):
        brand = Brand(id=f"brand_{next(self._ids)}", name=name)
        self.brands[name] = brand
        return brand

    def list_brands(self, names):
        return [self.brands[n] for n in names if n in self.brands]

    def create_brands(self, names):
        self.create_calls.append(list(names))
        return [self.add_brand(n) for n in names]

    def delete_brands(self, ids):
        self.deleted.extend(ids)
        self.brands = {n: b for n, b in self.brands.items() if b.id not in ids}


class FakeLinkService:
    """Records link create/dismiss calls."""

    def __init__(self):
        self.links = set()
        self.created = []
        self.dismissed = []
        self.fail_create = False
        self.fail_dismiss = False

    def create(self, links):
        if self.fail_create:
            raise CommerceAPIError("Failed to create links")
        self.created.append(list(links))
        self.links.update(links)

    def dismiss(self, links):
        if self.fail_dismiss:
            raise CommerceAPIError("Failed to dismiss links")
        self.dismissed.append(list(links))
        self.links.difference_update(links)


@pytest.fixture
def product_service():
    return FakeProductService()


@pytest.fixture
def brand_service():
    return FakeBrandService()


@pytest.fixture
def link_service():
    return FakeLinkService()


@pytest.fixture
def container(product_service, brand_service, link_service):
    """Service container backed by in-memory fakes."""
    return ServiceContainer(products=product_service, brands=brand_service, links=link_service)


@pytest.fixture
def settings():
    """Settings with fast retries for tests."""
    return SyncSettings(
        catalog_url="https://catalog.example.com",
        page_size=2,
        fetch_retries=2,
        fetch_backoff=0,
        commerce_url="http://commerce.example.com/admin",
        commerce_token="sk_test",
    )


@pytest.fixture
def catalog_products():
    """Three catalog products over two brands and two categories."""
    return [
        CatalogProduct.from_dict(catalog_dict(1, "Essence Mascara Lash Princess")),
        CatalogProduct.from_dict(catalog_dict(2, "Eyeshadow Palette with Mirror", brand="Glamour Beauty")),
        CatalogProduct.from_dict(catalog_dict(3, "Powder Canister", category="fragrances")),
    ]


@pytest.fixture
def sample_config():
    """Parsed sync.yaml equivalent."""
    return {
        "catalog": {"base_url": "https://dummyjson.com", "page_size": 30, "retries": 3, "backoff_seconds": 0.5},
        "commerce": {"base_url": "http://localhost:9000/admin", "currency": "EUR", "update_workers": 4},
        "job": {"name": "daily-product-sync", "schedule": "30 2 * * *"},
        "export": {"batch_size": 25, "default_limit": 200},
    }


@pytest.fixture
def make_catalog_dict():
    """Factory for catalog API product objects."""
    return catalog_dict
