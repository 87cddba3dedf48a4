"""Tests for provider clients against a mocked HTTP transport."""
import asyncio
import json

import httpx
import pytest

from email_waterfall_core.providers import IcypeasProvider, ProspeoProvider, classify_status
from email_waterfall_core.ratelimit import RateLimiter


def _prospeo(handler, api_key="pk", timeout=10.0):
    return ProspeoProvider(
        api_key=api_key,
        api_url="https://prospeo.test/",
        limiter=RateLimiter(5),
        timeout=timeout,
        transport=httpx.MockTransport(handler),
    )


def _icypeas(handler, api_key="ik"):
    return IcypeasProvider(
        api_key=api_key,
        api_url="https://icypeas.test",
        limiter=RateLimiter(3),
        transport=httpx.MockTransport(handler),
    )


@pytest.mark.asyncio
async def test_prospeo_request_shape_and_valid_verdict():
    seen = []

    def handler(request: httpx.Request):
        seen.append(request)
        return httpx.Response(200, json={"status": "valid", "score": 98})

    result = await _prospeo(handler).validate("a@ok.com")
    assert result.success is True
    assert result.is_valid is True
    assert result.data == {"status": "valid", "score": 98}
    assert result.error is None

    request = seen[0]
    assert request.method == "POST"
    assert str(request.url) == "https://prospeo.test/email-verifier"
    assert request.headers["X-KEY"] == "pk"
    assert json.loads(request.content) == {"email": "a@ok.com"}


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "body, expected",
    [
        ({"status": "valid"}, True),
        ({"status": "unknown", "deliverable": True}, True),
        ({"status": "invalid"}, False),
        ({"status": "unknown", "deliverable": "yes"}, False),
        ({}, False),
    ],
)
async def test_prospeo_verdict_mapping(body, expected):
    result = await _prospeo(lambda r: httpx.Response(200, json=body)).validate("a@ok.com")
    assert result.success is True
    assert result.is_valid is expected


@pytest.mark.asyncio
async def test_icypeas_request_shape_and_verdict():
    seen = []

    def handler(request: httpx.Request):
        seen.append(request)
        return httpx.Response(200, json={"valid": True})

    result = await _icypeas(handler).validate("a@ok.com")
    assert result.success and result.is_valid
    assert str(seen[0].url) == "https://icypeas.test/v1/verify"
    assert seen[0].headers["Authorization"] == "Bearer ik"


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "body, expected",
    [({"status": "valid"}, True), ({"valid": False, "status": "invalid"}, False)],
)
async def test_icypeas_verdict_mapping(body, expected):
    result = await _icypeas(lambda r: httpx.Response(200, json=body)).validate("a@ok.com")
    assert result.is_valid is expected


@pytest.mark.asyncio
async def test_missing_api_key_makes_no_call():
    calls = []

    def handler(request):
        calls.append(request)
        return httpx.Response(200, json={"status": "valid"})

    result = await _prospeo(handler, api_key="").validate("a@ok.com")
    assert result.success is False
    assert result.error == "Prospeo API key not configured"
    assert calls == []

    result = await _icypeas(handler, api_key="").validate("a@ok.com")
    assert result.error == "Icypeas API key not configured"
    assert calls == []


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "status, error",
    [
        (401, "Authentication failed - check API key"),
        (403, "Authentication failed - check API key"),
        (429, "Rate limit exceeded"),
        (500, "HTTP 500"),
        (404, "HTTP 404"),
    ],
)
async def test_http_errors_are_failures(status, error):
    result = await _prospeo(lambda r: httpx.Response(status, json={})).validate("a@ok.com")
    assert result.success is False
    assert result.is_valid is False
    assert result.error == error


@pytest.mark.asyncio
async def test_transport_timeout():
    def handler(request):
        raise httpx.ReadTimeout("timed out", request=request)

    result = await _prospeo(handler).validate("a@ok.com")
    assert result.success is False
    assert result.error == "Request timed out"


@pytest.mark.asyncio
async def test_overall_deadline():
    async def handler(request):
        await asyncio.sleep(1)
        return httpx.Response(200, json={"status": "valid"})

    result = await _prospeo(handler, timeout=0.05).validate("a@ok.com")
    assert result.success is False
    assert result.error == "Request timed out"


@pytest.mark.asyncio
async def test_connection_error():
    def handler(request):
        raise httpx.ConnectError("connection refused", request=request)

    result = await _prospeo(handler).validate("a@ok.com")
    assert result.success is False
    assert "connection refused" in result.error


@pytest.mark.asyncio
@pytest.mark.parametrize("content", [b"not json", b"[1, 2]"])
async def test_malformed_body(content):
    result = await _prospeo(lambda r: httpx.Response(200, content=content)).validate("a@ok.com")
    assert result.success is False
    assert result.error == "Malformed response body"


@pytest.mark.asyncio
async def test_test_connection():
    assert await _prospeo(lambda r: httpx.Response(200, json={"status": "invalid"})).test_connection()
    assert not await _prospeo(lambda r: httpx.Response(401)).test_connection()
    assert not await _prospeo(lambda r: httpx.Response(200), api_key="").test_connection()


@pytest.mark.asyncio
async def test_calls_go_through_limiter():
    limiter = RateLimiter(2)
    running = 0
    peak = 0

    async def handler(request):
        nonlocal running, peak
        running += 1
        peak = max(peak, running)
        await asyncio.sleep(0.01)
        running -= 1
        return httpx.Response(200, json={"status": "valid"})

    provider = ProspeoProvider(
        api_key="pk",
        api_url="https://prospeo.test",
        limiter=limiter,
        transport=httpx.MockTransport(handler),
    )
    results = await asyncio.gather(*(provider.validate(f"u{i}@ok.com") for i in range(6)))
    assert all(r.is_valid for r in results)
    assert peak <= 2


def test_classify_status():
    assert classify_status(429) == "Rate limit exceeded"
    assert classify_status(502) == "HTTP 502"
