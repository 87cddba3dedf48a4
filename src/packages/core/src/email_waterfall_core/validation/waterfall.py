"""Waterfall email validation across ordered providers."""
import asyncio
import re
from typing import Any, Callable, Sequence

import structlog
from pydantic import BaseModel, Field

from email_waterfall_core.providers import BaseProvider, ProviderResponse

logger = structlog.get_logger()

EMAIL_RE = re.compile(r"[^\s@]+@[^\s@]+\.[^\s@]+")

INVALID_FORMAT_ERROR = "invalid email format"
ALL_FAILED_ERROR = "validation failed on both services"

DEFAULT_BATCH_SIZE = 10


class WaterfallResult(BaseModel):
    """Authoritative outcome for one email."""

    is_valid: bool
    validated_by: str | None = None
    error: str | None = None
    details: Any = None
    attempts: list[ProviderResponse] = Field(default_factory=list, exclude=True)

    @property
    def has_verdict(self) -> bool:
        """True if at least one provider answered, valid or not."""
        return any(a.success for a in self.attempts)


def is_valid_email_format(email: str) -> bool:
    """Basic local@domain.tld shape check."""
    return bool(email) and EMAIL_RE.fullmatch(email) is not None


class WaterfallValidator:
    """Tries providers in order and stops at the first one that confirms validity.

    A provider that errors and a provider that says "invalid" are treated the
    same: both hand the email to the next provider.
    """

    def __init__(self, providers: Sequence[BaseProvider]):
        if not providers:
            raise ValueError("at least one provider is required")
        self.providers = tuple(providers)

    async def validate_email(self, email: str) -> WaterfallResult:
        if not is_valid_email_format(email):
            return WaterfallResult(is_valid=False, error=INVALID_FORMAT_ERROR)

        attempts: dict[str, ProviderResponse] = {}
        try:
            for provider in self.providers:
                logger.debug("waterfall_attempt", email=email, provider=provider.name)
                result = await provider.validate(email)
                attempts[provider.name] = result
                if result.success and result.is_valid:
                    logger.info("waterfall_validated", email=email, provider=provider.name)
                    return WaterfallResult(
                        is_valid=True,
                        validated_by=provider.name,
                        details=result.data,
                        attempts=list(attempts.values()),
                    )
                logger.info(
                    "waterfall_fallthrough",
                    email=email,
                    provider=provider.name,
                    reason="invalid" if result.success else "failed",
                )
        except Exception as e:
            logger.exception("waterfall_error", email=email, error=str(e))
            return WaterfallResult(
                is_valid=False,
                error=str(e) or "Unknown error",
                details={name: a.model_dump() for name, a in attempts.items()} or None,
                attempts=list(attempts.values()),
            )

        logger.info("waterfall_exhausted", email=email)
        return WaterfallResult(
            is_valid=False,
            error=ALL_FAILED_ERROR,
            details={name: a.model_dump() for name, a in attempts.items()},
            attempts=list(attempts.values()),
        )

    async def validate_batch(
        self,
        emails: Sequence[str],
        batch_size: int = DEFAULT_BATCH_SIZE,
        on_progress: Callable[[int, int], None] | None = None,
    ) -> list[WaterfallResult]:
        """Validate emails in concurrent fixed-size batches, in input order."""
        if batch_size < 1:
            raise ValueError("batch_size must be at least 1")
        results: list[WaterfallResult] = []
        total = len(emails)
        for start in range(0, total, batch_size):
            batch = emails[start : start + batch_size]
            results.extend(
                await asyncio.gather(*(self.validate_email(e) for e in batch))
            )
            if on_progress:
                on_progress(len(results), total)
        return results
