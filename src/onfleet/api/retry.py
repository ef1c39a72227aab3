"""Retry policy for API calls.

The decision of whether to retry, and after how long, is a pure function of
the policy, the attempt state and the remaining time budget. The dispatcher
feeds it each failure and acts on the returned decision.
"""

import random
from dataclasses import dataclass
from enum import Enum
from typing import Callable

from onfleet.api.errors import APIError
from onfleet.constants import (
    DEFAULT_BACKOFF_BASE_SECONDS,
    DEFAULT_BACKOFF_JITTER_SECONDS,
    DEFAULT_BACKOFF_MAX_SECONDS,
    DEFAULT_MAX_ATTEMPTS,
)


@dataclass(frozen=True)
class RetryPolicy:
    """Bounded exponential backoff with additive jitter.

    The delay before retry ``n`` (1-based) is
    ``min(max_delay, base_delay * 2 ** (n - 1)) + uniform(0, jitter)``.
    """

    max_attempts: int = DEFAULT_MAX_ATTEMPTS
    base_delay: float = DEFAULT_BACKOFF_BASE_SECONDS
    max_delay: float = DEFAULT_BACKOFF_MAX_SECONDS
    jitter: float = DEFAULT_BACKOFF_JITTER_SECONDS

    def __post_init__(self) -> None:
        if self.max_attempts < 1:
            raise ValueError(f"max_attempts must be at least 1, got {self.max_attempts}")
        if self.base_delay < 0 or self.max_delay < 0 or self.jitter < 0:
            raise ValueError("Backoff delays must be non-negative")

    def backoff(self, retry_number: int, rand: Callable[[], float] = random.random) -> float:
        """Compute the delay before a retry.

        Args:
            retry_number: 1 for the first retry, 2 for the second, ...
            rand: Source of uniform [0, 1) values

        Returns:
            Delay in seconds
        """
        exponential = min(self.max_delay, self.base_delay * (2 ** (retry_number - 1)))
        return exponential + rand() * self.jitter


@dataclass
class CallAttempt:
    """Per-call retry state; never shared between calls."""

    attempt: int = 0
    elapsed_backoff: float = 0.0
    last_error: APIError | None = None


class RetryOutcome(Enum):
    RETRY = "retry"
    NOT_RETRYABLE = "not_retryable"
    EXHAUSTED = "exhausted"
    DEADLINE = "deadline"


@dataclass(frozen=True)
class RetryDecision:
    outcome: RetryOutcome
    delay: float = 0.0

    @property
    def should_retry(self) -> bool:
        return self.outcome is RetryOutcome.RETRY


def decide_retry(
    policy: RetryPolicy,
    state: CallAttempt,
    error: APIError,
    remaining: float,
    rand: Callable[[], float] = random.random,
) -> RetryDecision:
    """Decide what to do after a failed attempt.

    Args:
        policy: Retry policy in force
        state: Attempt state; ``state.attempt`` is the number of attempts made
        error: Error from the latest attempt
        remaining: Seconds left before the call's deadline
        rand: Source of uniform [0, 1) values for jitter

    Returns:
        The decision, with the delay to sleep when retrying. A server
        ``retry_after`` hint replaces the computed backoff.
    """
    if not error.retryable:
        return RetryDecision(RetryOutcome.NOT_RETRYABLE)
    if state.attempt >= policy.max_attempts:
        return RetryDecision(RetryOutcome.EXHAUSTED)

    if error.retry_after is not None:
        delay = error.retry_after
    else:
        delay = policy.backoff(state.attempt, rand)

    if delay >= remaining:
        return RetryDecision(RetryOutcome.DEADLINE, delay)
    return RetryDecision(RetryOutcome.RETRY, delay)
