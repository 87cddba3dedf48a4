"""Tests for the provider rate limiter."""
import asyncio
import time

import pytest

from email_waterfall_core.ratelimit import RateLimiter


@pytest.mark.asyncio
async def test_never_exceeds_max_concurrent():
    limiter = RateLimiter(max_concurrent=3)
    running = 0
    peak = 0

    async def task(i):
        nonlocal running, peak
        running += 1
        peak = max(peak, running)
        await asyncio.sleep(0.02)
        running -= 1
        return i

    results = await asyncio.gather(*(limiter.schedule(task, i) for i in range(10)))
    assert results == list(range(10))
    assert peak <= 3
    assert peak == 3
    assert limiter.running == 0
    assert limiter.queued == 0


@pytest.mark.asyncio
async def test_spaces_call_starts():
    limiter = RateLimiter(max_concurrent=10, min_interval=0.05)
    starts = []

    async def task():
        starts.append(time.monotonic())

    await asyncio.gather(*(limiter.schedule(task) for _ in range(4)))
    assert len(starts) == 4
    for i, started in enumerate(starts):
        assert started - starts[0] >= i * 0.05 - 0.005


@pytest.mark.asyncio
async def test_admits_in_arrival_order():
    limiter = RateLimiter(max_concurrent=1)
    order = []

    async def task(i):
        await asyncio.sleep(0)
        order.append(i)

    await asyncio.gather(*(limiter.schedule(task, i) for i in range(6)))
    assert order == list(range(6))


@pytest.mark.asyncio
async def test_propagates_task_errors_and_releases_slot():
    limiter = RateLimiter(max_concurrent=1)

    async def boom():
        raise ValueError("provider exploded")

    async def ok():
        return "ok"

    with pytest.raises(ValueError, match="provider exploded"):
        await limiter.schedule(boom)
    assert await asyncio.wait_for(limiter.schedule(ok), timeout=1) == "ok"


@pytest.mark.asyncio
async def test_passes_kwargs():
    limiter = RateLimiter(max_concurrent=2)

    async def task(a, b=0):
        return a + b

    assert await limiter.schedule(task, 1, b=2) == 3


def test_rejects_bad_config():
    with pytest.raises(ValueError):
        RateLimiter(max_concurrent=0)
    with pytest.raises(ValueError):
        RateLimiter(max_concurrent=1, min_interval=-1)
