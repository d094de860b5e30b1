"""
Commerce platform records.

Thin views over the JSON objects returned by the platform's admin API.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from ..common.constants import BRAND_MODULE, EXTERNAL_ID_KEY, PRODUCT_MODULE


@dataclass
class Brand:
    id: str
    name: str

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Brand":
        return cls(id=data["id"], name=data.get("name", ""))


@dataclass
class ProductCategory:
    id: str
    name: str
    handle: str

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ProductCategory":
        return cls(id=data["id"], name=data.get("name", ""), handle=data.get("handle", ""))


@dataclass
class Product:
    """Stored product as listed or returned by the platform."""
    id: str
    title: str = ""
    handle: str = ""
    status: str = ""
    metadata: Dict[str, Any] = field(default_factory=dict)
    created_at: str = ""
    variants: List[Dict[str, Any]] = field(default_factory=list)
    categories: List[Dict[str, Any]] = field(default_factory=list)
    brand: Optional[Dict[str, Any]] = None

    @property
    def external_id(self) -> Optional[str]:
        return (self.metadata or {}).get(EXTERNAL_ID_KEY)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Product":
        return cls(
            id=data["id"],
            title=data.get("title") or "",
            handle=data.get("handle") or "",
            status=data.get("status") or "",
            metadata=data.get("metadata") or {},
            created_at=data.get("created_at") or "",
            variants=data.get("variants") or [],
            categories=data.get("categories") or [],
            brand=data.get("brand"),
        )


@dataclass(frozen=True)
class ProductLink:
    """Product-brand link. Frozen so duplicate links collapse in a set."""
    product_id: str
    brand_id: str

    def to_dict(self) -> Dict[str, Dict[str, str]]:
        return {
            PRODUCT_MODULE: {"product_id": self.product_id},
            BRAND_MODULE: {"brand_id": self.brand_id},
        }
