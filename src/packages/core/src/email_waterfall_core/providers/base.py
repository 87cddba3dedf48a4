"""Base provider interface."""
import asyncio
from abc import ABC, abstractmethod
from typing import Any

import httpx
import structlog
from pydantic import BaseModel

from email_waterfall_core.ratelimit import RateLimiter

logger = structlog.get_logger()

DEFAULT_TIMEOUT_SECONDS = 10.0


class ProviderResponse(BaseModel):
    """Result of one validation attempt against one provider.

    success=False means the call itself failed and says nothing about the
    email. is_valid is only meaningful when success is True.
    """

    success: bool
    is_valid: bool = False
    error: str | None = None
    data: Any = None


class BaseProvider(ABC):
    """Abstract base class for email validation providers."""

    name: str = ""
    label: str = ""
    path: str = ""

    def __init__(
        self,
        api_key: str,
        api_url: str,
        limiter: RateLimiter,
        timeout: float = DEFAULT_TIMEOUT_SECONDS,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.api_key = api_key
        self.api_url = api_url.rstrip("/")
        self.limiter = limiter
        self.timeout = timeout
        self._transport = transport

    @abstractmethod
    def headers(self) -> dict[str, str]:
        """Auth and content headers for a request."""
        pass

    @abstractmethod
    def parse_verdict(self, data: Any) -> bool:
        """Map the provider's response body to a validity verdict."""
        pass

    def payload(self, email: str) -> dict[str, Any]:
        return {"email": email}

    async def _post(self, email: str) -> httpx.Response:
        async with httpx.AsyncClient(
            timeout=self.timeout, transport=self._transport
        ) as client:
            # httpx timeouts apply per phase; wait_for caps the whole call.
            response = await asyncio.wait_for(
                client.post(
                    f"{self.api_url}{self.path}",
                    json=self.payload(email),
                    headers=self.headers(),
                ),
                timeout=self.timeout,
            )
            response.raise_for_status()
            return response

    async def validate(self, email: str) -> ProviderResponse:
        """Validate one email. Never raises for transport or HTTP failures."""
        if not self.api_key:
            logger.warning("provider_not_configured", provider=self.name)
            return ProviderResponse(
                success=False, error=f"{self.label} API key not configured"
            )

        try:
            response = await self.limiter.schedule(self._post, email)
        except (httpx.TimeoutException, asyncio.TimeoutError) as e:
            logger.warning("provider_timeout", provider=self.name, email=email, error=str(e))
            return ProviderResponse(success=False, error="Request timed out")
        except httpx.HTTPStatusError as e:
            status = e.response.status_code
            logger.warning(
                "provider_http_error", provider=self.name, email=email, status=status
            )
            return ProviderResponse(success=False, error=classify_status(status))
        except httpx.HTTPError as e:
            logger.warning("provider_request_failed", provider=self.name, email=email, error=str(e))
            return ProviderResponse(success=False, error=str(e) or "Request failed")

        try:
            data = response.json()
        except ValueError:
            logger.warning("provider_malformed_response", provider=self.name, email=email)
            return ProviderResponse(success=False, error="Malformed response body")
        if not isinstance(data, dict):
            return ProviderResponse(
                success=False, error="Malformed response body", data=data
            )

        return ProviderResponse(success=True, is_valid=self.parse_verdict(data), data=data)

    async def test_connection(self) -> bool:
        """Check the provider answers with the configured credentials."""
        result = await self.validate("test@example.com")
        return result.success


def classify_status(status: int) -> str:
    """Error text for a non-2xx provider response."""
    if status == 429:
        return "Rate limit exceeded"
    if status in (401, 403):
        return "Authentication failed - check API key"
    return f"HTTP {status}"
