"""Waterfall validation and job orchestration."""
from email_waterfall_core.validation.waterfall import (
    ALL_FAILED_ERROR,
    DEFAULT_BATCH_SIZE,
    INVALID_FORMAT_ERROR,
    WaterfallResult,
    WaterfallValidator,
    is_valid_email_format,
)
from email_waterfall_core.validation.orchestrator import (
    NO_EMAIL_ERROR,
    ValidationOrchestrator,
    apply_mappings,
    row_status_for,
)

__all__ = [
    "ALL_FAILED_ERROR",
    "DEFAULT_BATCH_SIZE",
    "INVALID_FORMAT_ERROR",
    "NO_EMAIL_ERROR",
    "ValidationOrchestrator",
    "WaterfallResult",
    "WaterfallValidator",
    "apply_mappings",
    "is_valid_email_format",
    "row_status_for",
]
