"""Offer Pydantic schemas for responses."""

from datetime import datetime
from typing import List

from pydantic import BaseModel, ConfigDict, Field


class DiscountedItemResponse(BaseModel):
    """A discounted app as returned by a scan."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    developers: List[str] = []
    description: str = ""
    formatted_price: str
    discount_percent: int = Field(gt=0, le=100)
    image_url: str = ""


class CapturedOfferResponse(BaseModel):
    """A stored offer with its capture metadata."""

    model_config = ConfigDict(from_attributes=True)

    appid: int
    name: str
    developers: List[str] = []
    formatted_price: str
    discount_percent: int
    image_url: str = ""
    page_number: int
    captured_at: datetime
