"""Catalog ingestion and the database-backed catalog source."""

from typing import Any, Dict, List

import httpx
import structlog
from sqlalchemy import func, insert, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker
from tenacity import (
    retry,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential,
)

from offers_monitor.config import settings
from offers_monitor.core.exceptions import CatalogUnavailableError
from offers_monitor.models.catalog_app import CatalogApp
from offers_monitor.scanner.types import CatalogEntry

logger = structlog.get_logger(__name__)

INSERT_CHUNK_SIZE = 5000


class CatalogService:
    """Service for populating and inspecting the app catalog."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def count_apps(self) -> int:
        """Number of apps currently in the catalog."""
        result = await self.db.execute(select(func.count(CatalogApp.appid)))
        return result.scalar() or 0

    async def ingest_app_list(self, client: httpx.AsyncClient) -> int:
        """Load the Steam app list into an empty catalog.

        Apps with an empty name are skipped and duplicate app ids keep their
        first occurrence. Ingestion is a one-time step: if the catalog
        already has rows nothing is fetched.

        Args:
            client: HTTP client used to download the app list

        Returns:
            Number of apps inserted

        Raises:
            httpx.HTTPError: If the app list cannot be downloaded
        """
        existing = await self.count_apps()
        if existing:
            logger.info("catalog_already_initialized", apps=existing)
            return 0

        payload = await self._fetch_app_list(client)
        apps = payload.get("applist", {}).get("apps", [])

        rows: List[Dict[str, Any]] = []
        seen = set()
        skipped = 0
        for app in apps:
            appid = app.get("appid")
            name = (app.get("name") or "").strip()
            if not isinstance(appid, int) or not name or appid in seen:
                skipped += 1
                continue
            seen.add(appid)
            rows.append({"appid": appid, "name": name})

        for start in range(0, len(rows), INSERT_CHUNK_SIZE):
            await self.db.execute(insert(CatalogApp), rows[start:start + INSERT_CHUNK_SIZE])
        await self.db.commit()

        logger.info(
            "catalog_ingested",
            received=len(apps),
            inserted=len(rows),
            skipped=skipped,
        )
        return len(rows)

    @retry(
        stop=stop_after_attempt(3),
        wait=wait_exponential(multiplier=1, min=2, max=10),
        retry=retry_if_exception_type((httpx.TimeoutException, httpx.NetworkError)),
        reraise=True,
    )
    async def _fetch_app_list(self, client: httpx.AsyncClient) -> Dict[str, Any]:
        logger.info("fetching_app_list", url=settings.STEAM_APP_LIST_URL)

        response = await client.get(settings.STEAM_APP_LIST_URL, params={"format": "json"})
        response.raise_for_status()
        return response.json()


class DatabaseCatalog:
    """CatalogSource reading ``catalog_apps`` in ascending app id order.

    Every call opens its own short-lived session so the catalog can be
    shared by a long-lived orchestrator.
    """

    def __init__(self, session_factory: async_sessionmaker[AsyncSession]):
        self.session_factory = session_factory

    async def length(self) -> int:
        try:
            async with self.session_factory() as session:
                return await CatalogService(session).count_apps()
        except SQLAlchemyError as e:
            raise CatalogUnavailableError(str(e)) from e

    async def slice(self, offset: int, count: int) -> List[CatalogEntry]:
        try:
            async with self.session_factory() as session:
                result = await session.execute(
                    select(CatalogApp.appid, CatalogApp.name)
                    .order_by(CatalogApp.appid)
                    .offset(offset)
                    .limit(count)
                )
                return [CatalogEntry(id=appid, name=name) for appid, name in result.all()]
        except SQLAlchemyError as e:
            raise CatalogUnavailableError(str(e)) from e
