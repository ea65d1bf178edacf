"""Manual scan runner for testing and debugging the offer scanner.

Runs one or more scan passes against the catalog in the database and
prints the discounted apps found. Consecutive pages continue where the
previous page stopped, exactly as the API does within one process.

Usage:
    python scripts/run_scan.py
    python scripts/run_scan.py --page 2
    python scripts/run_scan.py --pages 3 --no-save
"""

import asyncio
import argparse
import sys
import os

# Add backend to path so we can import offers_monitor modules
sys.path.insert(0, os.path.join(os.path.dirname(__file__), "..", "backend"))

from offers_monitor.db.session import async_session_factory, engine
from offers_monitor.models import Base
from offers_monitor.scanner.factory import build_orchestrator, create_http_client
from offers_monitor.services.catalog_service import DatabaseCatalog
from offers_monitor.services.offer_service import OfferService


async def run_scan(first_page: int = 1, pages: int = 1, save: bool = True):
    """Scan ``pages`` consecutive pages and display the results.

    Args:
        first_page: Page number to start from
        pages: Number of consecutive pages to scan
        save: Whether to store the offers found
    """
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    client = create_http_client()
    orchestrator = build_orchestrator(client, DatabaseCatalog(async_session_factory))

    print(f"\n{'='*70}")
    print(f"  Scanning pages {first_page}..{first_page + pages - 1}")
    print(f"  Window: {orchestrator.window_size}  Quota: {orchestrator.quota}  Limit: {orchestrator.limit}")
    print(f"{'='*70}\n")

    try:
        async with async_session_factory() as session:
            service = OfferService(session, orchestrator)

            for page in range(first_page, first_page + pages):
                if save:
                    result = await service.get_offers_page(page_number=page)
                else:
                    result = await orchestrator.scan(page)

                print(f"📄 Page {page}: offsets {result.start_offset} -> {result.end_offset}, "
                      f"{result.fetched}/{result.scanned} fetched")

                if not result.items:
                    print("⚠️  No discounted apps found.\n")
                    continue

                for i, item in enumerate(result.items, 1):
                    print(f"[{i}] {item.name} (appid {item.id})")
                    print(f"    💰 Price: {item.formatted_price}")
                    print(f"    📉 Discount: {item.discount_percent}%")
                    if item.developers:
                        print(f"    🏢 Developers: {', '.join(item.developers)}")
                print()

    except Exception as e:
        print(f"\n❌ Error occurred while scanning:")
        print(f"   {type(e).__name__}: {e}")
        import traceback
        traceback.print_exc()

    finally:
        await client.aclose()
        await engine.dispose()


def main():
    """Parse arguments and run the scan."""
    parser = argparse.ArgumentParser(
        description="Run offer scan passes against the stored catalog",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  python scripts/run_scan.py
  python scripts/run_scan.py --page 2
  python scripts/run_scan.py --pages 3 --no-save
        """,
    )

    parser.add_argument(
        "--page",
        type=int,
        default=1,
        help="First page to scan (default: 1)",
    )

    parser.add_argument(
        "--pages",
        type=int,
        default=1,
        help="Number of consecutive pages to scan (default: 1)",
    )

    parser.add_argument(
        "--no-save",
        action="store_true",
        help="Do not store the offers found",
    )

    args = parser.parse_args()

    if args.page < 1 or args.pages < 1:
        parser.error("--page and --pages must be at least 1")

    asyncio.run(run_scan(args.page, args.pages, save=not args.no_save))


if __name__ == "__main__":
    main()
