"""Wiring for the scan pipeline.

Builds the fetcher -> executor -> orchestrator chain with a shared
request budget, so callers only supply an HTTP client and a catalog.
"""

from typing import Optional

import httpx
import structlog

from offers_monitor.config import settings
from offers_monitor.scanner.batch import BatchExecutor
from offers_monitor.scanner.catalog import CatalogSource
from offers_monitor.scanner.cursor import ScanCursor
from offers_monitor.scanner.orchestrator import ScanOrchestrator
from offers_monitor.scanner.rate_limiter import RequestBudget
from offers_monitor.scanner.retry import RetryingFetcher


logger = structlog.get_logger(__name__)


def create_http_client() -> httpx.AsyncClient:
    """HTTP client shared by every details request."""
    return httpx.AsyncClient(
        timeout=settings.REQUEST_TIMEOUT,
        headers={"Accept": "application/json"},
        follow_redirects=True,
    )


def build_orchestrator(
    client: httpx.AsyncClient,
    catalog: CatalogSource,
    cursor: Optional[ScanCursor] = None,
) -> ScanOrchestrator:
    """Create a configured ScanOrchestrator.

    Args:
        client: HTTP client for the details endpoint
        catalog: Catalog to scan
        cursor: Existing cursor to resume from (a fresh one by default)

    Returns:
        ScanOrchestrator using the configured window, quota and limit
    """
    budget = RequestBudget(settings.DETAILS_RATE_LIMIT_RPM)
    fetcher = RetryingFetcher(client, budget=budget)
    orchestrator = ScanOrchestrator(
        catalog=catalog,
        executor=BatchExecutor(fetcher),
        cursor=cursor,
    )

    logger.info(
        "orchestrator_created",
        window_size=orchestrator.window_size,
        quota=orchestrator.quota,
        limit=orchestrator.limit,
        rate_limit_rpm=budget.rpm if budget.enabled else None,
    )
    return orchestrator
