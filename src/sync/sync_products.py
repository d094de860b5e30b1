"""
Sync Products Workflow

Single-pass sync of raw catalog products: brands, then products, then
brand links. Unlike the batch workflow, links created here are dismissed
again when the run is rolled back, and categories are not touched.
"""

import logging
from typing import Dict, List

from ..catalog.mapper import index_by_external_id, map_to_platform_format
from ..models import CatalogProduct, ProductLink
from .batch_products import manage_brands_step, unique
from .workflow import Step, StepResponse, Workflow, WorkflowContext

logger = logging.getLogger(__name__)


def _sync_products(step_input: Dict, container) -> StepResponse:
    products: List[CatalogProduct] = step_input["products"]
    brand_map: Dict[str, str] = step_input["brand_map"]
    currency: str = step_input.get("currency", "usd")
    service = container.products

    existing = service.list_products([p.external_id for p in products])
    existing_map = index_by_external_id(existing)

    to_create = []
    to_update = []
    for product in products:
        payload = map_to_platform_format(product, currency=currency).to_payload()
        brand_id = brand_map.get(product.brand)
        if brand_id:
            payload["metadata"]["brand_id"] = brand_id

        stored = existing_map.get(product.external_id)
        if stored:
            to_update.append((stored.id, payload))
        else:
            to_create.append(payload)

    created = service.create_products(to_create)
    service.update_products(to_update)
    logger.info("Synced products: %d created, %d updated", len(created), len(to_update))

    product_map = {p.external_id: p.id for p in created if p.external_id}
    product_map.update({p.external_id: p.id for p in existing if p.external_id})

    return StepResponse(product_map, [p.id for p in created])


def _delete_created_products(ids: List[str], container) -> None:
    if not ids:
        return
    container.products.delete_products(ids)


sync_products_step = Step("sync-products-step", _sync_products, _delete_created_products)


def _link_brands(step_input: Dict, container) -> StepResponse:
    product_map: Dict[str, str] = step_input["product_map"]
    brand_map: Dict[str, str] = step_input["brand_map"]

    links = []
    for product in step_input["products"]:
        product_id = product_map.get(product.external_id)
        brand_id = brand_map.get(product.brand)
        if product_id and brand_id:
            links.append(ProductLink(product_id=product_id, brand_id=brand_id))
    links = unique(links)

    container.links.create(links)
    return StepResponse(links, links)


def _dismiss_links(links: List[ProductLink], container) -> None:
    if not links:
        return
    container.links.dismiss(links)


link_brands_step = Step("link-product-brands-step", _link_brands, _dismiss_links)


def _sync(ctx: WorkflowContext, workflow_input: Dict) -> Dict[str, str]:
    products: List[CatalogProduct] = workflow_input["products"]

    brand_map = ctx.run(manage_brands_step, [p.brand for p in products if p.brand])
    product_map = ctx.run(sync_products_step, {
        "products": products,
        "brand_map": brand_map,
        "currency": workflow_input.get("currency", "usd"),
    })
    ctx.run(link_brands_step, {
        "products": products,
        "product_map": product_map,
        "brand_map": brand_map,
    })
    return product_map


sync_products_workflow = Workflow("sync-products", _sync)
