from __future__ import annotations

import random

import httpx
import pytest

from hotel_aggregator.services.retry import RetryPolicy, is_retryable_http_error, retry_async


class _RecordingSleep:
    def __init__(self) -> None:
        self.delays: list[float] = []

    async def __call__(self, delay: float) -> None:
        self.delays.append(delay)


def _status_error(status: int) -> httpx.HTTPStatusError:
    request = httpx.Request("GET", "https://supplier.test/hotels")
    response = httpx.Response(status, request=request)
    return httpx.HTTPStatusError("error", request=request, response=response)


def test_backoff_grows_exponentially_without_jitter():
    policy = RetryPolicy(jitter=0)

    assert [policy.backoff_delay(attempt) for attempt in (1, 2, 3)] == [1.0, 2.0, 4.0]


def test_backoff_jitter_stays_within_a_quarter_of_nominal():
    policy = RetryPolicy()
    rng = random.Random(7)

    for attempt in (1, 2, 3):
        nominal = policy.nominal_delay(attempt)
        for _ in range(50):
            delay = policy.backoff_delay(attempt, rng=rng)
            assert nominal * 0.75 <= delay <= nominal * 1.25


def test_policy_rejects_invalid_values():
    with pytest.raises(ValueError):
        RetryPolicy(max_attempts=0)
    with pytest.raises(ValueError):
        RetryPolicy(jitter=1.5)


@pytest.mark.parametrize(
    ("exc", "expected"),
    [
        (_status_error(500), True),
        (_status_error(503), True),
        (_status_error(429), True),
        (_status_error(404), False),
        (_status_error(400), False),
        (httpx.ReadTimeout("timed out"), True),
        (httpx.ConnectError("dns failure"), True),
        (ValueError("bad json"), False),
    ],
)
def test_http_error_classification(exc, expected):
    assert is_retryable_http_error(exc, RetryPolicy()) is expected


@pytest.mark.asyncio
async def test_retry_async_retries_until_success():
    sleep = _RecordingSleep()
    calls = 0

    async def _operation() -> str:
        nonlocal calls
        calls += 1
        if calls < 3:
            raise httpx.ConnectError("connection reset")
        return "ok"

    result = await retry_async(
        _operation,
        policy=RetryPolicy(jitter=0),
        is_retryable=lambda exc: isinstance(exc, httpx.TransportError),
        sleep=sleep,
    )

    assert result == "ok"
    assert calls == 3
    assert sleep.delays == [1.0, 2.0]


@pytest.mark.asyncio
async def test_retry_async_gives_up_without_sleeping_after_last_attempt():
    sleep = _RecordingSleep()
    calls = 0

    async def _operation() -> None:
        nonlocal calls
        calls += 1
        raise httpx.ReadTimeout("timed out")

    with pytest.raises(httpx.ReadTimeout):
        await retry_async(
            _operation,
            policy=RetryPolicy(max_attempts=3, base_delay=0.5, jitter=0),
            is_retryable=lambda exc: True,
            sleep=sleep,
        )

    assert calls == 3
    assert sleep.delays == [0.5, 1.0]


@pytest.mark.asyncio
async def test_retry_async_raises_fatal_errors_immediately():
    sleep = _RecordingSleep()
    calls = 0

    async def _operation() -> None:
        nonlocal calls
        calls += 1
        raise _status_error(404)

    with pytest.raises(httpx.HTTPStatusError):
        await retry_async(
            _operation,
            policy=RetryPolicy(),
            is_retryable=lambda exc: is_retryable_http_error(exc, RetryPolicy()),
            sleep=sleep,
        )

    assert calls == 1
    assert sleep.delays == []
