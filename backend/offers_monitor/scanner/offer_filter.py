"""Discount filter for raw app details responses."""

from typing import Any, Dict, Optional

import structlog

from offers_monitor.scanner.types import DiscountedItem, RawDetailsResult


logger = structlog.get_logger(__name__)


def _app_envelope(raw: RawDetailsResult) -> Optional[Dict[str, Any]]:
    """Pick the ``{"success": ..., "data": ...}`` envelope out of the body."""
    body = raw.body
    if not isinstance(body, dict) or not body:
        return None

    envelope = body.get(str(raw.query_id))
    if envelope is None and len(body) == 1:
        # Steam may echo a different key (e.g. a redirected package id)
        envelope = next(iter(body.values()))

    return envelope if isinstance(envelope, dict) else None


def extract_discounted_item(raw: RawDetailsResult) -> Optional[DiscountedItem]:
    """Turn a details response into a DiscountedItem, or reject it.

    Only successful responses carrying a ``price_overview`` with an integer
    ``discount_percent`` in (0, 100] are accepted. Anything else, including
    malformed payloads, returns None. A missing name or formatted price
    does not reject the app; the field is left empty.

    Args:
        raw: Parsed details response

    Returns:
        DiscountedItem or None
    """
    envelope = _app_envelope(raw)
    if not envelope or envelope.get("success") is not True:
        return None

    data = envelope.get("data")
    if not isinstance(data, dict):
        return None

    price_overview = data.get("price_overview")
    if not isinstance(price_overview, dict):
        # Free app or not sold in this region
        return None

    discount = price_overview.get("discount_percent")
    if isinstance(discount, bool) or not isinstance(discount, int):
        return None
    if not 0 < discount <= 100:
        return None

    name = data.get("name")
    formatted_price = price_overview.get("final_formatted")
    if not isinstance(name, str) or not isinstance(formatted_price, str):
        logger.debug("details_payload_incomplete", app_id=raw.query_id)

    app_id = data.get("steam_appid")
    developers = data.get("developers") or []

    return DiscountedItem(
        id=app_id if isinstance(app_id, int) else raw.query_id,
        name=name if isinstance(name, str) else "",
        formatted_price=formatted_price if isinstance(formatted_price, str) else "",
        discount_percent=discount,
        developers=[str(d) for d in developers] if isinstance(developers, list) else [],
        description=data.get("short_description") or "",
        image_url=data.get("header_image") or "",
    )
