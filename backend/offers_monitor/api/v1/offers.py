"""Offers API endpoints."""

from typing import List

from fastapi import APIRouter, Depends, Query

from offers_monitor.dependencies import get_offer_service
from offers_monitor.schemas import (
    ApiResponse,
    CapturedOfferResponse,
    DiscountedItemResponse,
    PageMeta,
)
from offers_monitor.services.offer_service import OfferService

router = APIRouter()


@router.get("", response_model=ApiResponse[List[DiscountedItemResponse]])
async def list_offers(
    page: int = Query(1, ge=1, description="Page number (1-indexed)"),
    service: OfferService = Depends(get_offer_service),
):
    """Scan the catalog for discounted apps on a page.

    Repeating a page resumes from the catalog offset where that page first
    started. New pages continue from the furthest point scanned so far.
    A scan may take a while: it waits on every details request of each
    window, including retry backoff.
    """
    result = await service.get_offers_page(page_number=page)

    return ApiResponse(
        status="success",
        data=[DiscountedItemResponse.model_validate(item) for item in result.items],
        meta=PageMeta(
            page=page,
            limit=service.orchestrator.limit,
            start_offset=result.start_offset,
            end_offset=result.end_offset,
        ),
    )


@router.get("/recent", response_model=ApiResponse[List[CapturedOfferResponse]])
async def recent_offers(
    limit: int = Query(20, ge=1, le=100, description="Number of stored offers to return"),
    service: OfferService = Depends(get_offer_service),
):
    """List the most recently captured offers from storage."""
    records = await service.get_recent_offers(limit=limit)
    return ApiResponse(
        status="success",
        data=[CapturedOfferResponse.model_validate(r) for r in records],
    )
