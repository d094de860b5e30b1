"""
Product Export API

FastAPI app serving the product CSV export at
``GET /admin/products/export?limit=&offset=``.
"""

import logging
import re
from typing import Optional

from fastapi import APIRouter, Depends, FastAPI, Header, HTTPException
from fastapi.responses import StreamingResponse

from ..commerce.services import ServiceContainer
from ..common.config_loader import SyncSettings
from .csv_exporter import ProductCSVExporter

logger = logging.getLogger(__name__)


LEADING_INT_RE = re.compile(r'^\s*([+-]?\d+)')


def parse_int(value: Optional[str], default: int) -> int:
    """
    Parse the leading integer of a query value ("10abc" -> 10).

    Missing, non-numeric, zero or negative values fall back to default.
    """
    match = LEADING_INT_RE.match(value or '')
    if not match:
        return default
    parsed = int(match.group(1))
    return parsed if parsed > 0 else default


def get_export_router(container: ServiceContainer, settings: SyncSettings) -> APIRouter:
    """
    Create the admin export router.

    Args:
        container: Platform services the export reads from
        settings: Export batch size, default limit and admin token

    Returns:
        APIRouter with the export endpoint
    """
    router = APIRouter(prefix="/admin/products", tags=["admin"])

    def require_admin(authorization: Optional[str] = Header(None)) -> None:
        token = settings.export_admin_token
        if not token:
            return
        if authorization != f"Bearer {token}":
            raise HTTPException(status_code=401, detail="Unauthorized")

    @router.get("/export", dependencies=[Depends(require_admin)])
    def export_products(limit: Optional[str] = None, offset: Optional[str] = None):
        """Stream stored products as a CSV attachment."""
        requested_limit = parse_int(limit, settings.export_default_limit)
        requested_offset = parse_int(offset, 0)
        logger.info("Export requested: limit=%d offset=%d", requested_limit, requested_offset)

        exporter = ProductCSVExporter(
            container.products,
            batch_size=settings.export_batch_size,
            currency=settings.currency,
        )
        return StreamingResponse(
            exporter.iter_csv(limit=requested_limit, offset=requested_offset),
            media_type="text/csv",
            headers={"Content-Disposition": "attachment; filename=products.csv"},
        )

    return router


def create_app(container: ServiceContainer, settings: SyncSettings) -> FastAPI:
    app = FastAPI(title="Catalog Sync Admin")
    app.include_router(get_export_router(container, settings))
    return app
