"""Discounted item model: offers captured by scan passes."""

from datetime import datetime
from typing import List

from sqlalchemy import BigInteger, DateTime, Index, Integer, String, Text
from sqlalchemy import JSON as JSONB
from sqlalchemy.orm import Mapped, mapped_column

from offers_monitor.models.base import Base, UUIDPrimaryKeyMixin


class DiscountedItemRecord(UUIDPrimaryKeyMixin, Base):
    """A discounted app as captured by one scan.

    Each scan appends its offers with the capture timestamp, so the table
    keeps a history of what was on sale when.
    """

    __tablename__ = "discounted_items"

    appid: Mapped[int] = mapped_column(BigInteger, nullable=False, index=True)
    name: Mapped[str] = mapped_column(String(500), nullable=False)
    developers: Mapped[List[str]] = mapped_column(
        JSONB,
        nullable=False,
        default=list,
        comment="Developer names as reported by the store",
    )
    description: Mapped[str] = mapped_column(Text, nullable=False, default="")
    formatted_price: Mapped[str] = mapped_column(
        String(50),
        nullable=False,
        comment="Discounted price as formatted by the store",
    )
    discount_percent: Mapped[int] = mapped_column(
        Integer,
        nullable=False,
        comment="Discount as percentage (1-100)",
    )
    image_url: Mapped[str] = mapped_column(String(1000), nullable=False, default="")

    page_number: Mapped[int] = mapped_column(
        Integer,
        nullable=False,
        default=1,
        comment="Page the scan was triggered for",
    )
    captured_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        comment="When the scan found this offer",
    )

    __table_args__ = (
        Index("idx_discounted_items_captured_at", "captured_at"),
    )

    def __repr__(self) -> str:
        return (
            f"<DiscountedItemRecord(appid={self.appid}, name='{self.name[:50]}', "
            f"discount_percent={self.discount_percent})>"
        )
