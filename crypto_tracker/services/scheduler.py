"""Rate-limited polling of the market-data source."""
from __future__ import annotations

import asyncio
import logging
import math
import time
from dataclasses import dataclass
from enum import Enum
from typing import Awaitable, Callable

from ..config import SchedulerConfig
from ..interfaces.market_data import MarketDataError, MarketDataSource
from ..models import LoadingPhase, LoadingState, Severity
from ..state import AppState

logger = logging.getLogger(__name__)

FETCH_FAILED_NOTICE = "Failed to load cryptocurrency data. Please try again later."


class FetchOutcome(str, Enum):
    SUCCESS = "success"
    FAILED = "failed"
    DEFERRED = "deferred"


@dataclass(frozen=True)
class FetchResult:
    outcome: FetchOutcome
    next_delay: float
    error: str = ""


class FetchScheduler:
    """Polls the market-data source no more than once per minimum interval.

    The timestamp of the last *successful* fetch gates new requests. A
    failed fetch leaves the snapshot untouched and is retried after the
    retry delay, which stays at the minimum interval unless a backoff
    factor above 1.0 is configured.
    """

    def __init__(
        self,
        source: MarketDataSource,
        state: AppState,
        config: SchedulerConfig | None = None,
        clock: Callable[[], float] = time.monotonic,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
    ) -> None:
        self._source = source
        self._state = state
        self._config = config or SchedulerConfig()
        self._clock = clock
        self._sleep = sleep
        self._lock = asyncio.Lock()

        self.last_fetch_time: float | None = None
        self.consecutive_failures = 0

    @property
    def min_interval(self) -> float:
        return self._config.min_interval_seconds

    @property
    def is_initial_load(self) -> bool:
        return self.last_fetch_time is None

    def seconds_until_allowed(self) -> float:
        """Remaining wait before another request may be issued (0 when allowed)."""
        if self.last_fetch_time is None:
            return 0.0
        elapsed = self._clock() - self.last_fetch_time
        return max(0.0, self.min_interval - elapsed)

    def retry_delay(self) -> float:
        """Delay before the next attempt after ``consecutive_failures`` failures."""
        exponent = max(0, self.consecutive_failures - 1)
        delay = self.min_interval * (self._config.retry_backoff_factor ** exponent)
        return min(delay, max(self._config.max_retry_delay_seconds, self.min_interval))

    async def run_once(self) -> FetchResult:
        """Attempt one fetch, or defer if the minimum interval has not elapsed."""
        async with self._lock:
            wait = self.seconds_until_allowed()
            if wait > 0:
                seconds = math.ceil(wait)
                self._state.notify(
                    f"Respecting API rate limit. Waiting {seconds} seconds...",
                    Severity.INFO,
                )
                logger.debug("Fetch deferred for %.1fs", wait)
                return FetchResult(FetchOutcome.DEFERRED, next_delay=wait)

            return await self._fetch()

    async def _fetch(self) -> FetchResult:
        initial = self.is_initial_load
        phase = LoadingPhase.INITIAL if initial else LoadingPhase.REFRESH
        self._state.set_loading(
            LoadingState(
                phase=phase,
                message="Fetching cryptocurrency data..."
                if initial
                else "Refreshing cryptocurrency data...",
            )
        )

        try:
            records = await self._source.fetch_markets()
        except MarketDataError as e:
            return self._fail(phase, e)
        except Exception as e:
            logger.exception("Unexpected error from market-data source")
            return self._fail(phase, MarketDataError(str(e) or type(e).__name__))

        self.last_fetch_time = self._clock()
        self.consecutive_failures = 0
        self._state.replace_snapshot(records)
        self._state.set_loading(LoadingState(phase=LoadingPhase.IDLE))
        logger.info("Snapshot updated with %d assets", len(records))
        return FetchResult(FetchOutcome.SUCCESS, next_delay=self.min_interval)

    def _fail(self, phase: LoadingPhase, error: MarketDataError) -> FetchResult:
        """Keep the snapshot, surface the failure and schedule a retry."""
        self.consecutive_failures += 1
        delay = self.retry_delay()
        logger.error(
            "Error fetching cryptocurrency data (attempt %d, retry in %.0fs): %s",
            self.consecutive_failures,
            delay,
            error,
        )
        self._state.set_loading(
            LoadingState(phase=phase, message=f"Error: {error}. Retrying soon...", error=True)
        )
        self._state.notify(FETCH_FAILED_NOTICE, Severity.ERROR)
        return FetchResult(FetchOutcome.FAILED, next_delay=delay, error=str(error))

    async def run_forever(self, iterations: int | None = None) -> None:
        """Run the polling loop; ``iterations`` bounds it for one-shot use."""
        logger.info("Starting market polling (every %.0f seconds)", self.min_interval)

        count = 0
        while iterations is None or count < iterations:
            count += 1
            try:
                result = await self.run_once()
                delay = result.next_delay
            except Exception as e:
                logger.error("Error in polling loop: %s", e)
                delay = self.min_interval

            if iterations is not None and count >= iterations:
                break
            await self._sleep(delay)
