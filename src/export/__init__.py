"""
Product export modules.

Modules:
    csv_exporter - Paged CSV export of stored products
    api          - FastAPI route streaming the export
"""

from .csv_exporter import EXPORT_FIELDNAMES, ProductCSVExporter

__all__ = [
    'ProductCSVExporter',
    'EXPORT_FIELDNAMES',
]
