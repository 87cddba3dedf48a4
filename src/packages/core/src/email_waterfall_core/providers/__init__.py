"""Email validation providers."""
from email_waterfall_core.providers.base import (
    BaseProvider,
    ProviderResponse,
    classify_status,
)
from email_waterfall_core.providers.icypeas import IcypeasProvider
from email_waterfall_core.providers.prospeo import ProspeoProvider

__all__ = [
    "BaseProvider",
    "ProviderResponse",
    "classify_status",
    "IcypeasProvider",
    "ProspeoProvider",
]
