"""Health check endpoint."""

from fastapi import APIRouter, Depends
from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncSession

from offers_monitor.dependencies import get_db
from offers_monitor.schemas import HealthCheckResponse
from offers_monitor.services.catalog_service import CatalogService

router = APIRouter()


@router.get("/health", response_model=HealthCheckResponse)
async def health_check(db: AsyncSession = Depends(get_db)):
    """Return service health status.

    Checks database connectivity and reports how many apps the catalog
    holds. An empty catalog is reported as degraded: scans will return
    no offers until it is ingested.
    """
    services = {}
    catalog_apps = None

    try:
        result = await db.execute(text("SELECT 1"))
        result.scalar()
        db_status = "ok"
    except Exception as e:
        db_status = f"error: {str(e)}"

    services["database"] = db_status

    if db_status == "ok":
        try:
            catalog_apps = await CatalogService(db).count_apps()
            services["catalog"] = "ok" if catalog_apps else "empty"
        except Exception as e:
            services["catalog"] = f"error: {str(e)}"

    overall_status = "ok" if all(s == "ok" for s in services.values()) else "degraded"

    return HealthCheckResponse(
        status=overall_status,
        database=db_status,
        catalog_apps=catalog_apps,
        services=services,
    )
