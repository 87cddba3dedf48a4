"""Per-provider rate limiting."""
from email_waterfall_core.ratelimit.limiter import RateLimiter

__all__ = ["RateLimiter"]
