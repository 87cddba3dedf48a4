"""Shared fixtures for core tests."""
import asyncio
from datetime import datetime, timedelta, timezone

import pytest

from email_waterfall_core.providers import BaseProvider, ProviderResponse
from email_waterfall_core.ratelimit import RateLimiter

VALID = ProviderResponse(success=True, is_valid=True, data={"status": "valid"})
INVALID = ProviderResponse(success=True, is_valid=False, data={"status": "invalid"})
FAILED = ProviderResponse(success=False, error="HTTP 500")


class FakeProvider(BaseProvider):
    """Provider with scripted answers that records every email it sees."""

    def __init__(self, name, answers=None, default=INVALID, delay=0.0, hook=None):
        super().__init__(api_key="test-key", api_url="http://fake", limiter=RateLimiter(100))
        self.name = name
        self.answers = answers or {}
        self.default = default
        self.delay = delay
        self.hook = hook
        self.calls: list[str] = []

    def headers(self):
        return {}

    def parse_verdict(self, data):
        return False

    async def validate(self, email):
        self.calls.append(email)
        if self.hook:
            self.hook(email)
        if self.delay:
            await asyncio.sleep(self.delay)
        answer = self.answers.get(email, self.default)
        if isinstance(answer, Exception):
            raise answer
        return answer


class FakeClock:
    """Settable clock for store eviction tests."""

    def __init__(self, now: datetime):
        self.now = now

    def __call__(self) -> datetime:
        return self.now

    def advance(self, delta: timedelta) -> None:
        self.now += delta


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock(datetime(2024, 1, 1, 12, 0, tzinfo=timezone.utc))


@pytest.fixture
def make_provider():
    """Factory for FakeProvider instances."""
    return FakeProvider
