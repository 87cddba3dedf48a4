"""Utility modules."""
from email_waterfall_core.util.ids import generate_id, make_row_id
from email_waterfall_core.util.time import utc_now, utc_now_iso
from email_waterfall_core.util.errors import (
    ValidationError,
    JobNotFoundError,
    EmailMappingRequiredError,
    JobConflictError,
    UploadError,
)

__all__ = [
    "generate_id",
    "make_row_id",
    "utc_now",
    "utc_now_iso",
    "ValidationError",
    "JobNotFoundError",
    "EmailMappingRequiredError",
    "JobConflictError",
    "UploadError",
]
