"""Retrying app details fetcher with exponential backoff."""

import asyncio
from typing import Any, Awaitable, Callable, Optional

import httpx
import structlog
from tenacity import (
    AsyncRetrying,
    RetryCallState,
    RetryError,
    retry_if_exception_type,
    stop_after_attempt,
)

from offers_monitor.config import settings
from offers_monitor.core.exceptions import DetailsFetchError, RateLimitError
from offers_monitor.scanner.rate_limiter import RequestBudget
from offers_monitor.scanner.types import DetailsQuery, RawDetailsResult


logger = structlog.get_logger(__name__)


def compute_backoff(
    attempt: int,
    max_attempts: int,
    base_delay: float,
    factor: float = 2.0,
) -> Optional[float]:
    """Delay to wait after a failed attempt, or None when no attempt remains.

    Args:
        attempt: 1-based number of the attempt that just failed
        max_attempts: Total attempts allowed
        base_delay: Delay in seconds after the first failure
        factor: Multiplier applied after each further failure

    Returns:
        Seconds to sleep before the next attempt, or None to stop
    """
    if attempt >= max_attempts:
        return None
    return base_delay * factor ** (attempt - 1)


class RetryingFetcher:
    """Fetches one app details payload, retrying transient failures.

    Non-2xx responses, transport errors and undecodable bodies are all
    treated as failures. After the last failed attempt the request is
    dropped: ``fetch`` returns None and never raises for these cases.
    """

    def __init__(
        self,
        client: httpx.AsyncClient,
        max_attempts: Optional[int] = None,
        base_delay: Optional[float] = None,
        backoff: Optional[float] = None,
        budget: Optional[RequestBudget] = None,
        sleep: Callable[[float], Awaitable[Any]] = asyncio.sleep,
    ):
        self.client = client
        self.max_attempts = max_attempts if max_attempts is not None else settings.DETAILS_MAX_ATTEMPTS
        self.base_delay = base_delay if base_delay is not None else settings.DETAILS_RETRY_BASE_DELAY
        self.backoff = backoff if backoff is not None else settings.DETAILS_RETRY_BACKOFF
        self.budget = budget
        self._sleep = sleep

        if self.max_attempts < 1:
            raise ValueError("max_attempts must be at least 1")

    def _wait(self, retry_state: RetryCallState) -> float:
        delay = compute_backoff(
            retry_state.attempt_number,
            self.max_attempts,
            self.base_delay,
            self.backoff,
        )
        return delay or 0.0

    async def fetch(self, query: DetailsQuery) -> Optional[RawDetailsResult]:
        """Fetch details for one app.

        Args:
            query: App to look up

        Returns:
            RawDetailsResult, or None if every attempt failed
        """
        retrying = AsyncRetrying(
            stop=stop_after_attempt(self.max_attempts),
            wait=self._wait,
            retry=retry_if_exception_type(DetailsFetchError),
            before_sleep=self._log_retry,
            sleep=self._sleep,
        )

        try:
            async for attempt in retrying:
                with attempt:
                    body = await self._request(query)
        except RetryError as e:
            logger.warning(
                "details_fetch_exhausted",
                app_id=query.id,
                attempts=e.last_attempt.attempt_number,
                error=str(e.last_attempt.exception()),
            )
            return None

        logger.info(
            "details_fetch_succeeded",
            app_id=query.id,
            attempt=retrying.statistics.get("attempt_number", 1),
        )
        return RawDetailsResult(query_id=query.id, body=body)

    async def _request(self, query: DetailsQuery) -> Any:
        """Issue a single GET and decode the JSON body.

        Raises:
            RateLimitError: If the endpoint answers 429
            DetailsFetchError: On any other status, transport or decode failure
        """
        if self.budget:
            await self.budget.acquire()

        try:
            response = await self.client.get(query.url)
        except httpx.HTTPError as e:
            raise DetailsFetchError(query.id, f"{type(e).__name__}: {e}") from e

        if response.status_code == 429:
            logger.warning("details_rate_limited", app_id=query.id)
            raise RateLimitError(query.id)

        if not response.is_success:
            raise DetailsFetchError(
                query.id, f"{response.status_code} {response.reason_phrase}"
            )

        try:
            return response.json()
        except ValueError as e:
            raise DetailsFetchError(query.id, f"invalid JSON: {e}") from e

    def _log_retry(self, retry_state: RetryCallState) -> None:
        exc = retry_state.outcome.exception() if retry_state.outcome else None
        logger.warning(
            "details_fetch_retrying",
            app_id=getattr(exc, "app_id", None),
            attempt=retry_state.attempt_number,
            delay=retry_state.next_action.sleep if retry_state.next_action else None,
            error=str(exc),
        )
