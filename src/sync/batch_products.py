"""
Batch Products Workflow

Persists one page of normalized catalog products:

1. manage-brands      - resolve/create brands by name
2. manage-categories  - resolve/create categories by handle
3. create-products    - bulk create new products
4. update-products    - update already stored products (concurrently)
5. link-product-brands - link every product to its brand

Brands, categories and products created by this run are deleted again
if a later step fails. Links and updates are left in place.
"""

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List

from ..common.constants import DEFAULT_PRODUCT_STATUS, PRODUCT_STATUSES
from ..common.handles import category_handle
from ..commerce.services import CommerceAPIError
from ..models import Product, ProductInput, ProductLink, ProductUpdate
from .workflow import Step, StepResponse, Workflow, WorkflowContext

logger = logging.getLogger(__name__)


@dataclass
class BatchInput:
    """One page of products, already split by external id."""
    create: List[ProductInput] = field(default_factory=list)
    update: List[ProductUpdate] = field(default_factory=list)

    def brand_names(self) -> List[str]:
        names = [p.brand_name for p in self.create] + [u.brand_name for u in self.update]
        return [n for n in names if n]

    def category_names(self) -> List[str]:
        names = [p.category_name for p in self.create] + [u.category_name for u in self.update]
        return [n for n in names if n]


def unique(items: List) -> List:
    """Deduplicate while keeping first-seen order."""
    return list(dict.fromkeys(items))


def normalize_status(status: str) -> str:
    """Map a status string onto the platform enum, defaulting to draft."""
    value = (status or "").strip().lower()
    return value if value in PRODUCT_STATUSES else DEFAULT_PRODUCT_STATUS


# ---------------------------------------------------------------------------
# Step 1: brands
# ---------------------------------------------------------------------------

def _manage_brands(brand_names: List[str], container) -> StepResponse:
    if not brand_names:
        return StepResponse({}, [])

    names = unique(brand_names)
    brand_map: Dict[str, str] = {b.name: b.id for b in container.brands.list_brands(names)}

    to_create = [n for n in names if n not in brand_map]
    created_ids: List[str] = []

    if to_create:
        created = container.brands.create_brands(to_create)
        for brand in created:
            brand_map[brand.name] = brand.id
        created_ids = [b.id for b in created]
        logger.info("Created %d brands", len(created_ids))

    return StepResponse(brand_map, created_ids)


def _delete_created_brands(created_ids: List[str], container) -> None:
    if not created_ids:
        return
    container.brands.delete_brands(created_ids)


manage_brands_step = Step("manage-brands-step", _manage_brands, _delete_created_brands)


# ---------------------------------------------------------------------------
# Step 2: categories
# ---------------------------------------------------------------------------

def _map_categories_by_handle(categories, names: List[str], category_map: Dict[str, str]) -> None:
    by_handle = {c.handle: c.id for c in categories}
    for name in names:
        category_id = by_handle.get(category_handle(name))
        if category_id:
            category_map[name] = category_id


def _manage_categories(category_names: List[str], container) -> StepResponse:
    if not category_names:
        return StepResponse({}, [])

    products = container.products
    names = unique(category_names)
    handles = unique([category_handle(n) for n in names])

    category_map: Dict[str, str] = {}
    _map_categories_by_handle(products.list_product_categories(handles), names, category_map)

    to_create = []
    pending_handles = set()
    for name in names:
        handle = category_handle(name)
        if name in category_map or handle in pending_handles:
            continue
        pending_handles.add(handle)
        to_create.append({"name": name, "handle": handle})

    created_ids: List[str] = []
    if to_create:
        try:
            created = products.create_product_categories(to_create)
            _map_categories_by_handle(created, names, category_map)
            created_ids = [c.id for c in created]
            logger.info("Created %d categories", len(created_ids))
        except CommerceAPIError as e:
            # Most likely a handle created concurrently; re-read and map what exists
            logger.warning("Category creation failed (%s), re-reading by handle", e)
            created_ids = [c.id for c in e.created]
            _map_categories_by_handle(products.list_product_categories(handles), names, category_map)

    return StepResponse(category_map, created_ids)


def _delete_created_categories(created_ids: List[str], container) -> None:
    if not created_ids:
        return
    container.products.delete_product_categories(created_ids)


manage_categories_step = Step("manage-categories-step", _manage_categories, _delete_created_categories)


# ---------------------------------------------------------------------------
# Step 3: create products
# ---------------------------------------------------------------------------

def _category_ids(name: str, category_map: Dict[str, str]) -> List[str]:
    if name and name in category_map:
        return [category_map[name]]
    return []


def _create_products(step_input: Dict[str, Any], container) -> StepResponse:
    items: List[ProductInput] = step_input["products"]
    category_map: Dict[str, str] = step_input["category_map"]
    if not items:
        return StepResponse([], [])

    payloads = []
    for item in items:
        payload = item.to_payload()
        payload["status"] = normalize_status(item.status)
        payload["category_ids"] = _category_ids(item.category_name, category_map)
        payloads.append(payload)

    created = container.products.create_products(payloads)
    return StepResponse(created, [p.id for p in created])


def _delete_created_products(ids: List[str], container) -> None:
    if not ids:
        return
    container.products.delete_products(ids)


create_products_step = Step("create-products-step", _create_products, _delete_created_products)


# ---------------------------------------------------------------------------
# Step 4: update products
# ---------------------------------------------------------------------------

def _update_products(step_input: Dict[str, Any], container) -> StepResponse:
    updates: List[ProductUpdate] = step_input["updates"]
    category_map: Dict[str, str] = step_input["category_map"]
    if not updates:
        return StepResponse([], [])

    changes = []
    for update in updates:
        data = update.data.to_payload()
        if update.data.status:
            data["status"] = normalize_status(update.data.status)
        else:
            data.pop("status", None)
        category_ids = _category_ids(update.category_name, category_map)
        if category_ids:
            data["category_ids"] = category_ids
        changes.append((update.id, data))

    updated = container.products.update_products(changes)
    return StepResponse(updated, [u.id for u in updates])


update_products_step = Step("update-products-step", _update_products)


# ---------------------------------------------------------------------------
# Step 5: brand links
# ---------------------------------------------------------------------------

def _brand_links(products: List[Product], items, brand_map: Dict[str, str]) -> List[ProductLink]:
    by_external_id = {i.external_id: i for i in items if i.external_id}
    by_id = {i.id: i for i in items if isinstance(i, ProductUpdate)}

    links = []
    for product in products:
        item = by_external_id.get(product.external_id) or by_id.get(product.id)
        if item is None or not item.brand_name:
            continue
        brand_id = brand_map.get(item.brand_name)
        if brand_id:
            links.append(ProductLink(product_id=product.id, brand_id=brand_id))
    return links


def _link_product_brands(step_input: Dict[str, Any], container) -> StepResponse:
    brand_map = step_input["brand_map"]
    links = _brand_links(step_input["created_products"], step_input["create_input"], brand_map)
    links += _brand_links(step_input["updated_products"], step_input["update_input"], brand_map)
    links = unique(links)

    if links:
        try:
            container.links.dismiss(links)
        except CommerceAPIError as e:
            logger.debug("No existing brand links dismissed: %s", e)

        try:
            container.links.create(links)
        except CommerceAPIError as e:
            logger.warning("Failed to create brand links, they might already exist: %s", e)

    # Pre-existing links are indistinguishable from new ones, so nothing is undone
    return StepResponse(links, links)


link_product_brands_step = Step("link-product-brands-step", _link_product_brands)


def _batch_products(ctx: WorkflowContext, batch: BatchInput) -> Dict[str, List[Product]]:
    brand_map = ctx.run(manage_brands_step, batch.brand_names())
    category_map = ctx.run(manage_categories_step, batch.category_names())

    created = ctx.run(create_products_step, {
        "products": batch.create,
        "category_map": category_map,
    })
    updated = ctx.run(update_products_step, {
        "updates": batch.update,
        "category_map": category_map,
    })

    ctx.run(link_product_brands_step, {
        "created_products": created,
        "updated_products": updated,
        "brand_map": brand_map,
        "create_input": batch.create,
        "update_input": batch.update,
    })

    return {"created": created, "updated": updated}


batch_products_workflow = Workflow("sync-batch-products", _batch_products)
