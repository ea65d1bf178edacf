"""FastAPI dependency injection providers."""

from typing import AsyncGenerator

from fastapi import Depends, HTTPException, Request, status
from sqlalchemy.ext.asyncio import AsyncSession

from offers_monitor.db.session import async_session_factory
from offers_monitor.scanner.orchestrator import ScanOrchestrator
from offers_monitor.services.offer_service import OfferService


async def get_db() -> AsyncGenerator[AsyncSession, None]:
    """Yield a database session for request-scoped usage.

    The session is automatically committed on success or rolled back on error.
    Always closed after the request completes.
    """
    async with async_session_factory() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise
        finally:
            await session.close()


def get_orchestrator(request: Request) -> ScanOrchestrator:
    """Return the process-wide orchestrator created at startup.

    Raises 503 if the application started without one.
    """
    orchestrator = getattr(request.app.state, "orchestrator", None)
    if orchestrator is None:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Scanner is not initialized",
        )
    return orchestrator


async def get_offer_service(
    db: AsyncSession = Depends(get_db),
    orchestrator: ScanOrchestrator = Depends(get_orchestrator),
) -> OfferService:
    """OfferService bound to the request session and shared orchestrator."""
    return OfferService(db, orchestrator)
