"""Catalog app model: one row per scannable Steam app."""

from datetime import datetime

from sqlalchemy import BigInteger, DateTime, String, func
from sqlalchemy.orm import Mapped, mapped_column

from offers_monitor.models.base import Base


class CatalogApp(Base):
    """A Steam app from the public app list.

    Rows are written once by catalog ingestion and read-only afterwards.
    Scan order is ascending ``appid``.
    """

    __tablename__ = "catalog_apps"

    appid: Mapped[int] = mapped_column(
        BigInteger,
        primary_key=True,
        autoincrement=False,
        comment="Steam application ID",
    )
    name: Mapped[str] = mapped_column(String(500), nullable=False, default="")

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        server_default=func.now(),
        nullable=False,
    )

    def __repr__(self) -> str:
        return f"<CatalogApp(appid={self.appid}, name='{self.name[:50]}')>"
