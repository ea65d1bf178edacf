"""Common Pydantic schemas used across the API."""

from typing import Generic, Optional, TypeVar

from pydantic import BaseModel

T = TypeVar("T")


class PageMeta(BaseModel):
    """Scan position metadata included in offer page responses."""

    page: int = 1
    limit: int = 9
    start_offset: int = 0
    end_offset: int = 0


class ApiResponse(BaseModel, Generic[T]):
    """Standard API response envelope."""

    status: str = "success"
    data: T
    meta: Optional[PageMeta] = None
