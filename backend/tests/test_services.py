"""Test suite for Offers Monitor services.

Tests cover:
- Catalog service (app list ingestion, database-backed catalog)
- Offer service (persistence, recent offers, scan + persist flow)
- Database operations with async patterns
"""

from datetime import datetime, timedelta, timezone
from unittest.mock import AsyncMock, MagicMock

import httpx
import pytest
from sqlalchemy import select
from sqlalchemy.exc import OperationalError
from sqlalchemy.ext.asyncio import AsyncSession

from offers_monitor.core.exceptions import CatalogUnavailableError, PersistenceError
from offers_monitor.models import CatalogApp, DiscountedItemRecord
from offers_monitor.scanner.types import CatalogEntry, DiscountedItem, ScanResult
from offers_monitor.services.catalog_service import CatalogService, DatabaseCatalog
from offers_monitor.services.offer_service import OfferService, capture_timestamp


APP_LIST = {
    "applist": {
        "apps": [
            {"appid": 30, "name": "Day of Defeat"},
            {"appid": 10, "name": "Counter-Strike"},
            {"appid": 20, "name": ""},
            {"appid": 40, "name": "Deathmatch Classic"},
            {"appid": 10, "name": "Counter-Strike (duplicate)"},
            {"appid": 50, "name": "   "},
        ]
    }
}


def app_list_client(payload=APP_LIST, status_code=200):
    requests = []

    def handler(request):
        requests.append(request)
        return httpx.Response(status_code, json=payload)

    client = httpx.AsyncClient(transport=httpx.MockTransport(handler))
    return client, requests


def make_item(app_id, discount=50):
    return DiscountedItem(
        id=app_id,
        name=f"Game {app_id}",
        formatted_price="$9.99",
        discount_percent=discount,
        developers=["Studio"],
        description="A game",
        image_url=f"https://cdn.example.com/{app_id}.jpg",
    )


# ============================================================================
# TESTS: CATALOG SERVICE
# ============================================================================

class TestCatalogService:
    """Tests for CatalogService."""

    async def test_ingest_skips_unnamed_and_duplicate_apps(self, test_db: AsyncSession):
        client, requests = app_list_client()
        service = CatalogService(test_db)

        async with client:
            inserted = await service.ingest_app_list(client)

        assert inserted == 3
        assert await service.count_apps() == 3
        assert len(requests) == 1

        result = await test_db.execute(select(CatalogApp).order_by(CatalogApp.appid))
        apps = result.scalars().all()
        assert [(a.appid, a.name) for a in apps] == [
            (10, "Counter-Strike"),
            (30, "Day of Defeat"),
            (40, "Deathmatch Classic"),
        ]

    async def test_ingest_is_one_time(self, test_db: AsyncSession):
        test_db.add(CatalogApp(appid=1, name="Existing"))
        await test_db.commit()

        client, requests = app_list_client()
        async with client:
            inserted = await CatalogService(test_db).ingest_app_list(client)

        assert inserted == 0
        assert requests == []

    async def test_ingest_raises_on_http_error(self, test_db: AsyncSession):
        client, _ = app_list_client(status_code=500)
        async with client:
            with pytest.raises(httpx.HTTPStatusError):
                await CatalogService(test_db).ingest_app_list(client)

    async def test_ingest_empty_app_list(self, test_db: AsyncSession):
        client, _ = app_list_client(payload={"applist": {"apps": []}})
        async with client:
            inserted = await CatalogService(test_db).ingest_app_list(client)

        assert inserted == 0


class TestDatabaseCatalog:
    """Tests for the database-backed CatalogSource."""

    async def test_length_and_ordered_slices(self, session_factory):
        async with session_factory() as session:
            session.add_all([CatalogApp(appid=i, name=f"App {i}") for i in (50, 10, 40, 20, 30)])
            await session.commit()

        catalog = DatabaseCatalog(session_factory)

        assert await catalog.length() == 5
        assert await catalog.slice(0, 2) == [
            CatalogEntry(id=10, name="App 10"),
            CatalogEntry(id=20, name="App 20"),
        ]
        assert [e.id for e in await catalog.slice(3, 9)] == [40, 50]
        assert await catalog.slice(5, 3) == []

    async def test_empty_catalog(self, session_factory):
        assert await DatabaseCatalog(session_factory).length() == 0

    async def test_database_errors_become_catalog_unavailable(self):
        broken_session = MagicMock()
        broken_session.__aenter__ = AsyncMock(side_effect=OperationalError("SELECT", {}, Exception("down")))
        broken_session.__aexit__ = AsyncMock(return_value=False)
        catalog = DatabaseCatalog(MagicMock(return_value=broken_session))

        with pytest.raises(CatalogUnavailableError):
            await catalog.length()
        with pytest.raises(CatalogUnavailableError):
            await catalog.slice(0, 9)


# ============================================================================
# TESTS: OFFER SERVICE
# ============================================================================

class TestOfferService:
    """Tests for OfferService."""

    async def test_save_offers(self, test_db: AsyncSession):
        service = OfferService(test_db)
        captured_at = datetime(2024, 11, 29, 12, 0, tzinfo=timezone.utc)

        count = await service.save_offers([make_item(1, 30), make_item(2, 75)], page_number=2, captured_at=captured_at)

        assert count == 2
        result = await test_db.execute(select(DiscountedItemRecord).order_by(DiscountedItemRecord.appid))
        records = result.scalars().all()
        assert [(r.appid, r.discount_percent, r.page_number) for r in records] == [(1, 30, 2), (2, 75, 2)]
        assert records[0].developers == ["Studio"]
        assert records[0].formatted_price == "$9.99"

    async def test_recent_offers_newest_first(self, test_db: AsyncSession):
        service = OfferService(test_db)
        earlier = datetime(2024, 11, 28, tzinfo=timezone.utc)
        later = earlier + timedelta(days=1)

        await service.save_offers([make_item(1)], page_number=1, captured_at=earlier)
        await service.save_offers([make_item(2)], page_number=1, captured_at=later)

        recent = await service.get_recent_offers(limit=10)
        assert [r.appid for r in recent] == [2, 1]

        assert len(await service.get_recent_offers(limit=1)) == 1

    async def test_save_failure_raises_persistence_error(self):
        db = MagicMock()
        db.commit = AsyncMock(side_effect=OperationalError("INSERT", {}, Exception("disk full")))
        db.rollback = AsyncMock()

        with pytest.raises(PersistenceError):
            await OfferService(db).save_offers([make_item(1)], page_number=1)
        db.rollback.assert_awaited_once()

    async def test_get_offers_page_persists_scan_result(self, test_db: AsyncSession):
        orchestrator = MagicMock()
        orchestrator.scan = AsyncMock(
            return_value=ScanResult(page_number=1, items=[make_item(7)], start_offset=0, end_offset=9)
        )
        service = OfferService(test_db, orchestrator)

        result = await service.get_offers_page(page_number=1)

        assert [item.id for item in result.items] == [7]
        orchestrator.scan.assert_awaited_once_with(1, limit=None)
        stored = await service.get_recent_offers()
        assert [r.appid for r in stored] == [7]

    async def test_get_offers_page_survives_persistence_failure(self):
        db = MagicMock()
        db.commit = AsyncMock(side_effect=OperationalError("INSERT", {}, Exception("disk full")))
        db.rollback = AsyncMock()
        orchestrator = MagicMock()
        orchestrator.scan = AsyncMock(return_value=ScanResult(page_number=2, items=[make_item(3)]))

        result = await OfferService(db, orchestrator).get_offers_page(page_number=2)

        assert [item.id for item in result.items] == [3]

    async def test_empty_scan_is_not_persisted(self):
        db = MagicMock()
        db.commit = AsyncMock()
        orchestrator = MagicMock()
        orchestrator.scan = AsyncMock(return_value=ScanResult(page_number=1))

        result = await OfferService(db, orchestrator).get_offers_page(page_number=1)

        assert result.items == []
        db.commit.assert_not_awaited()

    async def test_get_offers_page_requires_orchestrator(self, test_db: AsyncSession):
        with pytest.raises(RuntimeError):
            await OfferService(test_db).get_offers_page(page_number=1)

    def test_capture_timestamp_is_timezone_aware(self):
        assert capture_timestamp().tzinfo is not None
