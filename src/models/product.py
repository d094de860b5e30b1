"""
Product data models.

Pure data classes for the source catalog record and the normalized
payload sent to the commerce platform. No business logic - only data
structure definitions and their dict conversions.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from ..common.constants import EXTERNAL_ID_KEY


@dataclass
class CatalogProduct:
    """Product record as returned by the remote catalog API."""
    id: int
    title: str
    description: str = ""
    category: str = ""
    price: float = 0.0
    discount_percentage: float = 0.0
    brand: str = ""
    sku: str = ""
    stock: int = 0
    thumbnail: str = ""
    images: List[str] = field(default_factory=list)
    tags: List[str] = field(default_factory=list)

    def __post_init__(self):
        """Validate required fields after initialization."""
        if self.id is None:
            raise ValueError("Catalog product id is required")
        if not self.title:
            raise ValueError("Catalog product title is required")

    @property
    def external_id(self) -> str:
        return str(self.id)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "CatalogProduct":
        """
        Parse a catalog API product object.

        Args:
            data: Product JSON object (camelCase keys)

        Returns:
            CatalogProduct instance
        """
        return cls(
            id=data.get("id"),
            title=data.get("title") or "",
            description=data.get("description") or "",
            category=data.get("category") or "",
            price=float(data.get("price") or 0),
            discount_percentage=float(data.get("discountPercentage") or 0),
            brand=data.get("brand") or "",
            sku=data.get("sku") or "",
            stock=int(data.get("stock") or 0),
            thumbnail=data.get("thumbnail") or "",
            images=list(data.get("images") or []),
            tags=list(data.get("tags") or []),
        )


@dataclass
class ProductOption:
    """Product option with its allowed values."""
    title: str
    values: List[str] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {"title": self.title, "values": list(self.values)}


@dataclass
class VariantPrice:
    """Variant price in minor currency units (cents)."""
    amount: int
    currency_code: str

    def to_dict(self) -> Dict[str, Any]:
        return {"amount": self.amount, "currency_code": self.currency_code}


@dataclass
class VariantInput:
    """Variant payload for product create/update."""
    title: str
    prices: List[VariantPrice] = field(default_factory=list)
    options: Dict[str, str] = field(default_factory=dict)
    compare_at_price: Optional[float] = None

    def to_dict(self) -> Dict[str, Any]:
        data = {
            "title": self.title,
            "prices": [price.to_dict() for price in self.prices],
            "options": dict(self.options),
        }
        if self.compare_at_price is not None:
            data["compare_at_price"] = self.compare_at_price
        return data


@dataclass
class ProductInput:
    """
    Normalized product ready for the commerce platform.

    brand_name and category_name are resolved to ids by the sync
    workflow and never sent as part of the product payload.
    """

    title: str
    description: str
    handle: str
    status: str = "draft"
    metadata: Dict[str, Any] = field(default_factory=dict)
    thumbnail: str = ""
    images: List[str] = field(default_factory=list)
    options: List[ProductOption] = field(default_factory=list)
    variants: List[VariantInput] = field(default_factory=list)
    brand_name: str = ""
    category_name: str = ""

    @property
    def external_id(self) -> Optional[str]:
        return self.metadata.get(EXTERNAL_ID_KEY)

    def to_payload(self) -> Dict[str, Any]:
        """Platform payload without the sync-only reference names."""
        payload = {
            "title": self.title,
            "description": self.description,
            "handle": self.handle,
            "status": self.status,
            "metadata": dict(self.metadata),
            "options": [option.to_dict() for option in self.options],
            "variants": [variant.to_dict() for variant in self.variants],
        }
        if self.thumbnail:
            payload["thumbnail"] = self.thumbnail
        if self.images:
            payload["images"] = [{"url": url} for url in self.images]
        return payload


@dataclass
class ProductUpdate:
    """Update for an already stored product, matched by external id."""
    id: str
    data: ProductInput

    def __post_init__(self):
        if not self.id:
            raise ValueError("Product id is required for an update")

    @property
    def external_id(self) -> Optional[str]:
        return self.data.external_id

    @property
    def brand_name(self) -> str:
        return self.data.brand_name

    @property
    def category_name(self) -> str:
        return self.data.category_name
