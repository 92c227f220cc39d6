from app.services.catalog.service import (
    CatalogService,
    close_catalog_service,
    get_catalog_service,
)

__all__ = ["CatalogService", "close_catalog_service", "get_catalog_service"]
