"""Icypeas email verifier."""
from typing import Any

from email_waterfall_core.providers.base import BaseProvider


class IcypeasProvider(BaseProvider):
    """Client for Icypeas' verify endpoint."""

    name = "icypeas"
    label = "Icypeas"
    path = "/v1/verify"

    def headers(self) -> dict[str, str]:
        return {
            "Authorization": f"Bearer {self.api_key}",
            "Content-Type": "application/json",
        }

    def parse_verdict(self, data: Any) -> bool:
        return data.get("valid") is True or data.get("status") == "valid"
