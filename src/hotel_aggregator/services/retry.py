"""Bounded retry with exponential backoff and jitter."""
from __future__ import annotations

import asyncio
import logging
import random
from dataclasses import dataclass
from typing import Awaitable, Callable, Optional, Tuple, TypeVar

import httpx

logger = logging.getLogger(__name__)

T = TypeVar("T")

Sleep = Callable[[float], Awaitable[None]]


@dataclass(frozen=True)
class RetryPolicy:
    """How often and how patiently an operation is retried.

    The wait after attempt ``n`` (1-indexed) is ``base_delay * backoff_factor ** (n - 1)``
    scaled by a uniform factor in ``[1 - jitter, 1 + jitter]``.
    """

    max_attempts: int = 3
    base_delay: float = 1.0
    backoff_factor: float = 2.0
    jitter: float = 0.25
    retry_on_status: Tuple[int, ...] = (429,)

    def __post_init__(self) -> None:
        if self.max_attempts < 1:
            raise ValueError("max_attempts must be at least 1")
        if self.base_delay < 0:
            raise ValueError("base_delay must not be negative")
        if not 0 <= self.jitter <= 1:
            raise ValueError("jitter must be between 0 and 1")

    def nominal_delay(self, attempt: int) -> float:
        return self.base_delay * self.backoff_factor ** (attempt - 1)

    def backoff_delay(self, attempt: int, *, rng: Optional[random.Random] = None) -> float:
        nominal = self.nominal_delay(attempt)
        spread = (rng or random).uniform(-self.jitter, self.jitter)
        return max(0.0, nominal * (1 + spread))

    def is_retryable_status(self, status_code: int) -> bool:
        return status_code >= 500 or status_code in self.retry_on_status


def is_retryable_http_error(exc: BaseException, policy: RetryPolicy) -> bool:
    """Transport failures and 5xx/429 responses are worth another attempt."""
    if isinstance(exc, httpx.HTTPStatusError):
        return policy.is_retryable_status(exc.response.status_code)
    return isinstance(exc, httpx.TransportError)


async def retry_async(
    operation: Callable[[], Awaitable[T]],
    *,
    policy: RetryPolicy,
    is_retryable: Callable[[BaseException], bool],
    sleep: Sleep = asyncio.sleep,
    label: str = "operation",
) -> T:
    """Await ``operation`` until it succeeds, fails permanently or runs out of attempts.

    The final exception is re-raised unchanged.
    """
    attempt = 1
    while True:
        try:
            return await operation()
        except Exception as exc:
            if not is_retryable(exc):
                logger.debug("%s failed with non-retryable %s", label, type(exc).__name__)
                raise
            if attempt >= policy.max_attempts:
                logger.debug("%s exhausted %s attempts", label, policy.max_attempts)
                raise
            delay = policy.backoff_delay(attempt)
            logger.warning(
                "%s failed (%s), retrying in %.2fs (attempt %s/%s)",
                label,
                exc,
                delay,
                attempt,
                policy.max_attempts,
            )
            await sleep(delay)
            attempt += 1
