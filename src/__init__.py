"""
Catalog Sync Tool

Modules:
    models      - Data models (CatalogProduct, ProductInput, Brand, ...)
    common      - Shared utilities (config loader, handles, logging)
    catalog     - Remote catalog API client and record normalization
    commerce    - Commerce platform admin API client and module services
    sync        - Sync workflows, the daily job and its scheduler
    export      - Product CSV export (file and HTTP route)
"""
