"""Chunked concurrent execution of details queries."""

import asyncio
from typing import List, Sequence

import structlog

from offers_monitor.scanner.retry import RetryingFetcher
from offers_monitor.scanner.types import DetailsQuery, RawDetailsResult


logger = structlog.get_logger(__name__)


class BatchExecutor:
    """Runs queries in consecutive chunks, concurrently within each chunk.

    Chunk n+1 only starts once every request of chunk n has either
    succeeded or exhausted its retries, so at most ``width`` requests are
    outstanding at any time. Dropped requests are omitted from the output;
    surviving results keep their input order.
    """

    def __init__(self, fetcher: RetryingFetcher):
        self.fetcher = fetcher

    async def run(self, queries: Sequence[DetailsQuery], width: int) -> List[RawDetailsResult]:
        """Fetch all queries, ``width`` at a time.

        Args:
            queries: Ordered details queries
            width: Maximum number of concurrent requests

        Returns:
            Successful results in input order

        Raises:
            ValueError: If width is less than 1
        """
        if width < 1:
            raise ValueError("width must be at least 1")

        results: List[RawDetailsResult] = []

        for start in range(0, len(queries), width):
            chunk = queries[start:start + width]
            chunk_results = await asyncio.gather(
                *(self.fetcher.fetch(query) for query in chunk)
            )
            survivors = [r for r in chunk_results if r is not None]
            results.extend(survivors)

            logger.info(
                "batch_chunk_complete",
                chunk_start=start,
                requested=len(chunk),
                succeeded=len(survivors),
            )

        return results
