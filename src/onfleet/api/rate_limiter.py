"""Client-side rate limiting using the token bucket algorithm.

One bucket is created per root client and shared by reference with every
resource facade derived from it, so independently configured clients in one
process never interfere with each other.
"""

import threading
import time
from dataclasses import dataclass
from typing import Any, Callable

from onfleet.api.errors import timeout_error
from onfleet.config.logging import get_logger
from onfleet.constants import ONFLEET_RATE_LIMIT_CAPACITY, ONFLEET_RATE_LIMIT_PERIOD_SECONDS

logger = get_logger(__name__)

# Longest single sleep while waiting, so waiters re-check often under contention
MAX_SLEEP_SECONDS = 0.25


@dataclass
class RateLimitMetrics:
    """Metrics for rate limiter performance tracking."""

    total_requests: int = 0
    throttled_requests: int = 0
    rejected_requests: int = 0
    total_wait_time: float = 0.0

    @property
    def avg_wait_time(self) -> float:
        """Average wait time per throttled request, or 0.0 if none."""
        if self.throttled_requests == 0:
            return 0.0
        return self.total_wait_time / self.throttled_requests

    def to_dict(self) -> dict[str, Any]:
        return {
            "total_requests": self.total_requests,
            "throttled_requests": self.throttled_requests,
            "rejected_requests": self.rejected_requests,
            "total_wait_time": self.total_wait_time,
            "avg_wait_time": self.avg_wait_time,
        }


class TokenBucket:
    """Thread-safe token bucket rate limiter.

    The bucket starts full and refills continuously at
    ``capacity / refill_period`` tokens per second, never exceeding
    ``capacity``. Each request consumes one token.

    Waiters are not served in FIFO order: when a token appears, whichever
    waiting thread re-acquires the lock first takes it.
    """

    def __init__(
        self,
        capacity: int = ONFLEET_RATE_LIMIT_CAPACITY,
        refill_period: float = ONFLEET_RATE_LIMIT_PERIOD_SECONDS,
        name: str = "onfleet",
        clock: Callable[[], float] = time.monotonic,
        sleep: Callable[[float], None] = time.sleep,
    ) -> None:
        """Initialize token bucket rate limiter.

        Args:
            capacity: Maximum tokens in the bucket (burst size)
            refill_period: Seconds to refill an empty bucket completely
            name: Name for logging and metrics
            clock: Monotonic clock, injectable for tests
            sleep: Sleep function, injectable for tests
        """
        if capacity < 1:
            raise ValueError(f"Capacity must be at least 1, got {capacity}")
        if refill_period <= 0:
            raise ValueError(f"Refill period must be positive, got {refill_period}")

        self.capacity = capacity
        self.refill_period = refill_period
        self.rate = capacity / refill_period
        self.name = name

        self._clock = clock
        self._sleep = sleep
        self._tokens = float(capacity)
        self._last_refill = clock()
        self._lock = threading.Lock()
        self._metrics = RateLimitMetrics()

        logger.debug(
            "rate_limiter_initialized",
            name=name,
            rate=self.rate,
            capacity=capacity,
        )

    def _refill(self) -> None:
        """Refill tokens based on elapsed time.

        Must be called with lock held.
        """
        now = self._clock()
        elapsed = now - self._last_refill
        if elapsed <= 0:
            return
        self._tokens = min(float(self.capacity), self._tokens + elapsed * self.rate)
        self._last_refill = now

    def acquire(self, deadline: float | None = None) -> None:
        """Take one token, waiting until one is available.

        Args:
            deadline: Absolute time on this bucket's clock after which to give
                up. None waits indefinitely.

        Raises:
            APIError: With kind TIMEOUT if the deadline passes first
        """
        throttled = False

        with self._lock:
            self._metrics.total_requests += 1

            if deadline is not None and self._clock() >= deadline:
                self._metrics.rejected_requests += 1
                raise timeout_error(f"Deadline passed before acquiring a permit from '{self.name}'")

            while True:
                self._refill()

                if self._tokens >= 1.0:
                    self._tokens -= 1.0
                    return

                wait_time = (1.0 - self._tokens) / self.rate

                if deadline is not None:
                    remaining = deadline - self._clock()
                    if remaining <= 0 or wait_time > remaining:
                        self._metrics.rejected_requests += 1
                        logger.warning(
                            "rate_limit_timeout",
                            name=self.name,
                            wait_time_needed=wait_time,
                            remaining_timeout=remaining,
                        )
                        raise timeout_error(
                            f"Rate limiter '{self.name}' could not grant a permit before the deadline"
                        )

                wait_time = min(wait_time, MAX_SLEEP_SECONDS)

                if not throttled:
                    self._metrics.throttled_requests += 1
                    throttled = True
                self._metrics.total_wait_time += wait_time

                logger.debug(
                    "rate_limit_throttle",
                    name=self.name,
                    wait_seconds=wait_time,
                )

                # Release lock while sleeping
                self._lock.release()
                try:
                    self._sleep(wait_time)
                finally:
                    self._lock.acquire()

    def try_acquire(self) -> bool:
        """Take one token without waiting.

        Returns:
            True if a token was taken, False if the bucket is empty
        """
        with self._lock:
            self._metrics.total_requests += 1
            self._refill()
            if self._tokens >= 1.0:
                self._tokens -= 1.0
                return True
            self._metrics.rejected_requests += 1
            return False

    def get_metrics(self) -> RateLimitMetrics:
        """Return a copy of the current metrics."""
        with self._lock:
            return RateLimitMetrics(
                total_requests=self._metrics.total_requests,
                throttled_requests=self._metrics.throttled_requests,
                rejected_requests=self._metrics.rejected_requests,
                total_wait_time=self._metrics.total_wait_time,
            )

    def reset_metrics(self) -> None:
        """Reset metrics counters."""
        with self._lock:
            self._metrics = RateLimitMetrics()

    @property
    def available_tokens(self) -> float:
        """Current number of available tokens."""
        with self._lock:
            self._refill()
            return self._tokens
