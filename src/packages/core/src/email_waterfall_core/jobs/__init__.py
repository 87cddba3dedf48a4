"""Job management module."""
from email_waterfall_core.jobs.models import (
    ColumnMapping,
    Job,
    JobStatus,
    Row,
    RowResult,
    RowStatus,
    StartValidationRequest,
    StartValidationResponse,
    TargetField,
)
from email_waterfall_core.jobs.store import JobStore

__all__ = [
    "ColumnMapping",
    "Job",
    "JobStatus",
    "JobStore",
    "Row",
    "RowResult",
    "RowStatus",
    "StartValidationRequest",
    "StartValidationResponse",
    "TargetField",
]
