"""Data structures shared by the offer scanning pipeline."""

from dataclasses import dataclass, field
from typing import Any, Dict, List

from offers_monitor.config import settings


@dataclass(frozen=True)
class CatalogEntry:
    """One scannable app from the catalog."""

    id: int
    name: str


@dataclass(frozen=True)
class DetailsQuery:
    """Request descriptor for a single app details lookup."""

    id: int

    @property
    def url(self) -> str:
        """Details endpoint URL for this app."""
        url = f"{settings.STEAM_STORE_API_URL}?appids={self.id}"
        if settings.STEAM_COUNTRY_CODE:
            url += f"&cc={settings.STEAM_COUNTRY_CODE}"
        return url


@dataclass
class RawDetailsResult:
    """Parsed details response, keyed by the queried app id.

    Steam wraps the payload as ``{"<appid>": {"success": bool, "data": {...}}}``.
    """

    query_id: int
    body: Dict[str, Any]


@dataclass(frozen=True)
class DiscountedItem:
    """Normalized app currently on sale."""

    id: int
    name: str
    formatted_price: str
    discount_percent: int
    developers: List[str] = field(default_factory=list)
    description: str = ""
    image_url: str = ""

    def __post_init__(self):
        """Validate data after initialization."""
        if not 0 < self.discount_percent <= 100:
            raise ValueError("discount_percent must be in (0, 100]")


@dataclass
class ScanResult:
    """Outcome of one scan pass for a page."""

    page_number: int
    items: List[DiscountedItem] = field(default_factory=list)
    start_offset: int = 0
    end_offset: int = 0
    scanned: int = 0  # Catalog entries queried
    fetched: int = 0  # Details responses that survived retries
