"""Prospeo email verifier."""
from typing import Any

from email_waterfall_core.providers.base import BaseProvider


class ProspeoProvider(BaseProvider):
    """Client for Prospeo's email-verifier endpoint."""

    name = "prospeo"
    label = "Prospeo"
    path = "/email-verifier"

    def headers(self) -> dict[str, str]:
        return {"X-KEY": self.api_key, "Content-Type": "application/json"}

    def parse_verdict(self, data: Any) -> bool:
        # {"status": "valid" | "invalid" | "unknown", "deliverable": bool, ...}
        return data.get("status") == "valid" or data.get("deliverable") is True
