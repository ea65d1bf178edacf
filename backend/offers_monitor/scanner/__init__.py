"""Offer discovery pipeline.

This package provides:
- A retrying details fetcher with exponential backoff
- A chunked concurrent batch executor
- The discount filter and scan cursor
- The orchestrator that drives scan passes over the catalog
"""

from .types import CatalogEntry, DetailsQuery, DiscountedItem, RawDetailsResult, ScanResult
from .catalog import CatalogSource, InMemoryCatalog
from .rate_limiter import RequestBudget
from .retry import RetryingFetcher, compute_backoff
from .batch import BatchExecutor
from .offer_filter import extract_discounted_item
from .cursor import ScanCursor
from .orchestrator import ScanOrchestrator

__all__ = [
    # Data structures
    "CatalogEntry",
    "DetailsQuery",
    "DiscountedItem",
    "RawDetailsResult",
    "ScanResult",
    # Catalog
    "CatalogSource",
    "InMemoryCatalog",
    # Fetching
    "RequestBudget",
    "RetryingFetcher",
    "compute_backoff",
    "BatchExecutor",
    # Filtering and scanning
    "extract_discounted_item",
    "ScanCursor",
    "ScanOrchestrator",
]
