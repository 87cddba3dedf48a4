"""Health check endpoints."""
import asyncio

from fastapi import APIRouter, Depends

from email_waterfall_api.deps import get_providers
from email_waterfall_core.providers import BaseProvider
from email_waterfall_core.util import utc_now_iso

router = APIRouter(tags=["health"])


@router.get("/health")
def health():
    """Health check."""
    return {"status": "ok", "timestamp": utc_now_iso()}


@router.get("/health/providers")
async def provider_health(providers: list[BaseProvider] = Depends(get_providers)):
    """Probe each provider with its configured credentials."""
    results = await asyncio.gather(*(p.test_connection() for p in providers))
    return {p.name: ok for p, ok in zip(providers, results)}
