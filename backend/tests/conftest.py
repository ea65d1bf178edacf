"""Pytest configuration and shared fixtures."""

import os

os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///:memory:")
os.environ.setdefault("ENVIRONMENT", "test")

from typing import Any, Dict, List, Optional

import pytest
import pytest_asyncio
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from offers_monitor.models import Base
from offers_monitor.scanner.types import CatalogEntry


@pytest.fixture
def anyio_backend():
    """Use asyncio as the async backend for tests."""
    return "asyncio"


@pytest_asyncio.fixture
async def session_factory():
    """In-memory SQLite database shared by every session of one test."""
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:",
        poolclass=StaticPool,
        echo=False,
    )

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)

    await engine.dispose()


@pytest_asyncio.fixture
async def test_db(session_factory) -> AsyncSession:
    """A database session for testing."""
    async with session_factory() as session:
        yield session


@pytest.fixture
def details_body():
    """Builder for Steam appdetails response bodies."""

    def build(
        app_id: int,
        discount: Optional[int] = 0,
        success: bool = True,
        name: Optional[str] = None,
        developers: Optional[List[str]] = None,
    ) -> Dict[str, Any]:
        if not success:
            return {str(app_id): {"success": False}}

        data: Dict[str, Any] = {
            "steam_appid": app_id,
            "name": name or f"Game {app_id}",
            "developers": developers if developers is not None else [f"Studio {app_id}"],
            "short_description": f"Description of game {app_id}",
            "header_image": f"https://cdn.example.com/apps/{app_id}/header.jpg",
        }
        if discount is not None:
            data["price_overview"] = {
                "currency": "USD",
                "initial": 2000,
                "final": 2000 * (100 - discount) // 100,
                "discount_percent": discount,
                "final_formatted": f"${20 * (100 - discount) / 100:.2f}",
            }
        return {str(app_id): {"success": True, "data": data}}

    return build


@pytest.fixture
def make_catalog():
    """Builder for ordered catalog entries with ids 1..n."""

    def build(n: int) -> List[CatalogEntry]:
        return [CatalogEntry(id=i, name=f"Game {i}") for i in range(1, n + 1)]

    return build
