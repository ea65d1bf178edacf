"""SQLAlchemy models for Offers Monitor.

All models are imported here so table creation can discover them.
"""

from offers_monitor.models.base import Base, UUIDPrimaryKeyMixin
from offers_monitor.models.catalog_app import CatalogApp
from offers_monitor.models.discounted_item import DiscountedItemRecord

__all__ = [
    "Base",
    "UUIDPrimaryKeyMixin",
    "CatalogApp",
    "DiscountedItemRecord",
]
