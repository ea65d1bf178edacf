"""Pydantic schemas for the Offers Monitor API.

All response models are defined here for easy import.
"""

from offers_monitor.schemas.common import ApiResponse, PageMeta
from offers_monitor.schemas.offer import CapturedOfferResponse, DiscountedItemResponse
from offers_monitor.schemas.health import HealthCheckResponse

__all__ = [
    # Common
    "ApiResponse",
    "PageMeta",
    # Offer
    "DiscountedItemResponse",
    "CapturedOfferResponse",
    # Health
    "HealthCheckResponse",
]
