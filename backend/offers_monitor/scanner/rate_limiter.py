"""Token bucket request budget for the app details endpoint."""

import asyncio
import time
from typing import Optional

import structlog


logger = structlog.get_logger(__name__)


class RequestBudget:
    """Token bucket shared by every details request of the process.

    The bucket starts full and refills at ``rpm / 60`` tokens per second.
    Each request consumes one token and waits when none are left.
    A budget built with ``rpm <= 0`` never waits.
    """

    def __init__(self, rpm: int, capacity: Optional[float] = None):
        """Initialize the budget.

        Args:
            rpm: Requests per minute allowed (0 disables the budget)
            capacity: Burst capacity; defaults to 10% of rpm, min 2
        """
        self.rpm = rpm
        self.rate = rpm / 60.0
        self.capacity = capacity if capacity is not None else max(2.0, rpm / 10.0)
        self.tokens = self.capacity
        self.last_refill = time.monotonic()
        self._lock = asyncio.Lock()

    @property
    def enabled(self) -> bool:
        return self.rpm > 0

    def _refill(self) -> None:
        now = time.monotonic()
        elapsed = now - self.last_refill
        self.tokens = min(self.capacity, self.tokens + elapsed * self.rate)
        self.last_refill = now

    async def acquire(self) -> None:
        """Take one token, sleeping until the bucket refills if needed."""
        if not self.enabled:
            return

        async with self._lock:
            while True:
                self._refill()
                if self.tokens >= 1.0:
                    self.tokens -= 1.0
                    return
                wait_time = (1.0 - self.tokens) / self.rate
                logger.debug("request_budget_wait", wait_seconds=round(wait_time, 3))
                await asyncio.sleep(wait_time)
