"""Offer service: runs scans for pages and stores what they find."""

from datetime import datetime
from typing import List, Optional, Sequence
from zoneinfo import ZoneInfo

import structlog
from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from offers_monitor.config import settings
from offers_monitor.core.exceptions import PersistenceError
from offers_monitor.models.discounted_item import DiscountedItemRecord
from offers_monitor.scanner.orchestrator import ScanOrchestrator
from offers_monitor.scanner.types import DiscountedItem, ScanResult

logger = structlog.get_logger(__name__)


def capture_timestamp() -> datetime:
    """Current time in the configured capture timezone."""
    return datetime.now(ZoneInfo(settings.CAPTURE_TIMEZONE))


class OfferService:
    """Bridges scan passes and offer storage.

    A scan result is returned to the caller even when storing it fails.
    """

    def __init__(self, db: AsyncSession, orchestrator: Optional[ScanOrchestrator] = None):
        self.db = db
        self.orchestrator = orchestrator
        self.logger = logger.bind(service="offer_service")

    async def get_offers_page(self, page_number: int = 1, limit: Optional[int] = None) -> ScanResult:
        """Scan for a page's offers and persist them.

        Args:
            page_number: Logical page requested (>= 1)
            limit: Maximum offers to return

        Returns:
            ScanResult for the page

        Raises:
            RuntimeError: If the service was built without an orchestrator
        """
        if self.orchestrator is None:
            raise RuntimeError("OfferService needs an orchestrator to scan")

        result = await self.orchestrator.scan(page_number, limit=limit)

        if result.items:
            try:
                await self.save_offers(result.items, page_number)
            except PersistenceError as e:
                self.logger.error("offers_not_saved", page=page_number, error=str(e))

        return result

    async def save_offers(
        self,
        items: Sequence[DiscountedItem],
        page_number: int,
        captured_at: Optional[datetime] = None,
    ) -> int:
        """Store offers with a capture timestamp.

        Args:
            items: Offers in display order
            page_number: Page the scan was triggered for
            captured_at: Capture time (defaults to now in CAPTURE_TIMEZONE)

        Returns:
            Number of rows written

        Raises:
            PersistenceError: If the database rejects the write
        """
        captured_at = captured_at or capture_timestamp()
        records = [
            DiscountedItemRecord(
                appid=item.id,
                name=item.name,
                developers=list(item.developers),
                description=item.description,
                formatted_price=item.formatted_price,
                discount_percent=item.discount_percent,
                image_url=item.image_url,
                page_number=page_number,
                captured_at=captured_at,
            )
            for item in items
        ]

        try:
            self.db.add_all(records)
            await self.db.commit()
        except SQLAlchemyError as e:
            await self.db.rollback()
            self.logger.error(
                "offers_persist_failed",
                page=page_number,
                count=len(records),
                error=str(e),
            )
            raise PersistenceError(str(e)) from e

        self.logger.info("offers_saved", page=page_number, count=len(records))
        return len(records)

    async def get_recent_offers(self, limit: int = 20) -> List[DiscountedItemRecord]:
        """Most recently captured offers, newest first."""
        result = await self.db.execute(
            select(DiscountedItemRecord)
            .order_by(DiscountedItemRecord.captured_at.desc())
            .limit(limit)
        )
        return list(result.scalars().all())
