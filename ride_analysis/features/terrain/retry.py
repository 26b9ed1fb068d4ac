"""
Retry with exponential backoff for external terrain queries.

Attempt 1 runs immediately; attempt n waits
base_delay_seconds * multiplier ** (n - 2) before running
(defaults: 0 s, 2 s, 4 s).
"""

import asyncio
import logging
from dataclasses import dataclass
from typing import Awaitable, Callable, Tuple, Type, TypeVar

from ride_analysis.shared.errors import ExternalServiceError

logger = logging.getLogger(__name__)

T = TypeVar("T")

SleepFunc = Callable[[float], Awaitable[None]]


@dataclass(frozen=True)
class RetryPolicy:
    """How many times to try and how long to wait in between."""
    max_attempts: int = 3
    base_delay_seconds: float = 2.0
    multiplier: float = 2.0

    def __post_init__(self):
        if self.max_attempts < 1:
            raise ValueError("max_attempts must be >= 1")
        if self.base_delay_seconds < 0:
            raise ValueError("base_delay_seconds must be >= 0")

    def delay_before(self, attempt: int) -> float:
        """Seconds to wait before a 1-based attempt number."""
        if attempt <= 1:
            return 0.0
        return self.base_delay_seconds * self.multiplier ** (attempt - 2)


async def call_with_retry(
    func: Callable[[], Awaitable[T]],
    policy: RetryPolicy,
    retry_on: Tuple[Type[Exception], ...] = (ExternalServiceError,),
    sleep: SleepFunc = asyncio.sleep,
    description: str = "request"
) -> T:
    """
    Await func() until it succeeds or the policy is exhausted.

    Only exceptions in retry_on are retried. Cancellation is never caught,
    so a cancelled caller stops between attempts as well as mid-request.

    Args:
        func: Zero-argument coroutine factory (called once per attempt)
        policy: Attempt count and backoff
        retry_on: Exception types that trigger another attempt
        sleep: Awaitable sleep, injectable for tests
        description: Used in log messages

    Returns:
        The first successful result

    Raises:
        The last retryable exception once all attempts failed
    """
    last_error: Exception | None = None

    for attempt in range(1, policy.max_attempts + 1):
        delay = policy.delay_before(attempt)
        if delay > 0:
            logger.debug(f"{description}: retrying in {delay:.1f}s (attempt {attempt}/{policy.max_attempts})")
            await sleep(delay)

        try:
            return await func()
        except retry_on as e:
            last_error = e
            logger.debug(f"{description}: attempt {attempt}/{policy.max_attempts} failed: {e}")

    logger.warning(f"{description}: failed after {policy.max_attempts} attempts: {last_error}")
    raise last_error
