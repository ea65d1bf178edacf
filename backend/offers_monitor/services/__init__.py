"""Business logic services."""

from offers_monitor.services.catalog_service import CatalogService, DatabaseCatalog
from offers_monitor.services.offer_service import OfferService

__all__ = [
    "CatalogService",
    "DatabaseCatalog",
    "OfferService",
]
