"""Scan position tracking per logical page."""

import asyncio
from typing import Dict, Optional

import structlog


logger = structlog.get_logger(__name__)


class ScanCursor:
    """Remembers where each page's scan started and how far scanning got.

    Page offsets are first-write-wins: once a page has a recorded start
    offset, later scans of the same page reuse it. The global offset only
    moves forward. State lives for the process lifetime.
    """

    def __init__(self, global_offset: int = 0):
        if global_offset < 0:
            raise ValueError("global_offset must be non-negative")
        self._pages: Dict[int, int] = {}
        self._global_offset = global_offset
        self.lock = asyncio.Lock()  # Held by the orchestrator for a whole scan pass

    @property
    def global_offset(self) -> int:
        """Next unscanned catalog position."""
        return self._global_offset

    def lookup(self, page_number: int) -> Optional[int]:
        """Start offset recorded for a page, or None if it was never scanned."""
        return self._pages.get(page_number)

    def record_page(self, page_number: int, offset: int) -> None:
        """Record the start offset of a page unless one is already known.

        Raises:
            ValueError: If page_number < 1 or offset < 0
        """
        if page_number < 1:
            raise ValueError("page_number must be at least 1")
        if offset < 0:
            raise ValueError("offset must be non-negative")

        if page_number in self._pages:
            return
        self._pages[page_number] = offset
        logger.debug("cursor_page_recorded", page=page_number, offset=offset)

    def advance(self, offset: int) -> int:
        """Move the global offset to ``offset`` if that is further ahead.

        Returns:
            The resulting global offset
        """
        if offset > self._global_offset:
            self._global_offset = offset
        return self._global_offset
