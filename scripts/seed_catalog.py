"""Populate the app catalog from the Steam app list.

Downloads ISteamApps/GetAppList once and stores every named app in the
catalog_apps table. Does nothing if the catalog already has rows.

Usage:
    python scripts/seed_catalog.py
"""

import asyncio
import sys
import os

# Add backend to path so we can import offers_monitor modules
sys.path.insert(0, os.path.join(os.path.dirname(__file__), "..", "backend"))

from offers_monitor.db.session import async_session_factory, engine
from offers_monitor.models import Base
from offers_monitor.scanner.factory import create_http_client
from offers_monitor.services.catalog_service import CatalogService


async def main():
    """Create tables and ingest the app list."""
    print("=" * 60)
    print("Steam Offers Monitor - Catalog Seeding")
    print("=" * 60)

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    client = create_http_client()
    try:
        async with async_session_factory() as session:
            service = CatalogService(session)
            inserted = await service.ingest_app_list(client)
            total = await service.count_apps()

        if inserted:
            print(f"\n✓ Inserted {inserted} apps")
        else:
            print("\n- Catalog already initialized, nothing to do")
        print(f"  Catalog size: {total}")

    except Exception as e:
        print(f"\n✗ Error during seeding: {e}")
        import traceback
        traceback.print_exc()
        sys.exit(1)

    finally:
        await client.aclose()
        await engine.dispose()


if __name__ == "__main__":
    asyncio.run(main())
