"""Scan orchestration: windows over the catalog until the quota is met.

One pass walks the catalog from the page's start offset:

    START -> FETCH_WINDOW -> FILTER -> (CONTINUE | DONE)

Each window is fetched concurrently through the BatchExecutor, filtered
for active discounts, and accumulated. The pass stops once ``quota``
offers are found or the catalog runs out, then commits the cursor and
returns at most ``limit`` offers.
"""

from typing import List, Optional

import structlog

from offers_monitor.config import settings
from offers_monitor.core.exceptions import CatalogUnavailableError
from offers_monitor.scanner.batch import BatchExecutor
from offers_monitor.scanner.catalog import CatalogSource
from offers_monitor.scanner.cursor import ScanCursor
from offers_monitor.scanner.offer_filter import extract_discounted_item
from offers_monitor.scanner.types import DetailsQuery, DiscountedItem, ScanResult


logger = structlog.get_logger(__name__)


class ScanOrchestrator:
    """Drives scan passes over a catalog and owns the scan cursor."""

    def __init__(
        self,
        catalog: CatalogSource,
        executor: BatchExecutor,
        cursor: Optional[ScanCursor] = None,
        window_size: Optional[int] = None,
        quota: Optional[int] = None,
        limit: Optional[int] = None,
    ):
        self.catalog = catalog
        self.executor = executor
        self.cursor = cursor or ScanCursor()
        self.window_size = window_size if window_size is not None else settings.SCAN_WINDOW_SIZE
        self.quota = quota if quota is not None else settings.SCAN_QUOTA
        self.limit = limit if limit is not None else settings.RESULT_LIMIT
        self.logger = logger.bind(service="scan_orchestrator")

        if self.window_size < 1:
            raise ValueError("window_size must be at least 1")
        if self.quota < 1:
            raise ValueError("quota must be at least 1")
        if self.limit < 0:
            raise ValueError("limit must not be negative")

    async def scan(self, page_number: int = 1, limit: Optional[int] = None) -> ScanResult:
        """Run one scan pass for a page.

        Passes are serialized through the cursor lock, so concurrent
        triggers never interleave cursor updates.

        Args:
            page_number: Logical page being requested (>= 1)
            limit: Maximum offers to return (defaults to the configured limit)

        Returns:
            ScanResult with at most ``limit`` offers in catalog order
        """
        if page_number < 1:
            raise ValueError("page_number must be at least 1")
        limit = limit if limit is not None else self.limit
        if limit < 0:
            raise ValueError("limit must not be negative")

        async with self.cursor.lock:
            return await self._scan_locked(page_number, limit)

    async def _scan_locked(self, page_number: int, limit: int) -> ScanResult:
        # START
        try:
            catalog_length = await self.catalog.length()
        except CatalogUnavailableError as e:
            self.logger.warning("catalog_unavailable", page=page_number, error=str(e))
            return ScanResult(page_number=page_number)

        if catalog_length == 0:
            self.logger.info("catalog_empty", page=page_number)
            return ScanResult(page_number=page_number)

        recorded = self.cursor.lookup(page_number)
        start_offset = recorded if recorded is not None else self.cursor.global_offset

        self.logger.info(
            "scan_started",
            page=page_number,
            start_offset=start_offset,
            resumed=recorded is not None,
            catalog_length=catalog_length,
        )

        offers: List[DiscountedItem] = []
        current_index = min(start_offset, catalog_length)
        scanned = 0
        fetched = 0

        while len(offers) < self.quota and current_index < catalog_length:
            # FETCH_WINDOW
            try:
                entries = await self.catalog.slice(current_index, self.window_size)
            except CatalogUnavailableError as e:
                self.logger.warning("catalog_unavailable", page=page_number, error=str(e))
                break

            queries = [DetailsQuery(id=entry.id) for entry in entries]
            self.logger.info(
                "scan_window",
                start=current_index,
                end=current_index + len(queries),
            )
            results = await self.executor.run(queries, width=self.window_size)

            # FILTER
            for raw in results:
                item = extract_discounted_item(raw)
                if item is not None:
                    offers.append(item)

            scanned += len(queries)
            fetched += len(results)

            # CONTINUE
            current_index = min(current_index + self.window_size, catalog_length)

        # DONE
        self.cursor.advance(current_index)
        self.cursor.record_page(page_number, start_offset)

        if len(offers) < self.quota:
            self.logger.info("scan_quota_not_met", page=page_number, found=len(offers))

        self.logger.info(
            "scan_complete",
            page=page_number,
            start_offset=start_offset,
            end_offset=current_index,
            scanned=scanned,
            fetched=fetched,
            found=len(offers),
            global_offset=self.cursor.global_offset,
        )

        return ScanResult(
            page_number=page_number,
            items=offers[:limit],
            start_offset=start_offset,
            end_offset=current_index,
            scanned=scanned,
            fetched=fetched,
        )
