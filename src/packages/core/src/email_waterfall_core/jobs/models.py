"""Job models."""
from datetime import datetime
from enum import Enum
from typing import Any

from pydantic import BaseModel, Field

from email_waterfall_core.util import utc_now


class JobStatus(str, Enum):
    """Lifecycle of a validation job."""

    PENDING = "pending"
    PROCESSING = "processing"
    COMPLETED = "completed"
    FAILED = "failed"


class RowStatus(str, Enum):
    """Validation progress of a single row."""

    PENDING = "pending"
    VALIDATING = "validating"
    VALID = "valid"
    INVALID = "invalid"
    ERROR = "error"

    @property
    def is_terminal(self) -> bool:
        return self in (RowStatus.VALID, RowStatus.INVALID, RowStatus.ERROR)


class TargetField(str, Enum):
    """Semantic fields a source column can be mapped to."""

    EMAIL = "email"
    FIRST_NAME = "first_name"
    LAST_NAME = "last_name"
    COMPANY = "company"
    SKIP = "skip"


class ColumnMapping(BaseModel):
    """Maps one source column to one target field."""

    csv_column: str
    target_field: TargetField


class RowResult(BaseModel):
    """Final validation outcome stored on a row."""

    is_valid: bool
    validated_by: str | None = None
    timestamp: datetime = Field(default_factory=utc_now)
    error: str | None = None
    details: Any = None


class Row(BaseModel):
    """One record of an uploaded dataset."""

    row_id: str
    original_data: dict[str, Any]
    mapped_data: dict[str, Any] = Field(default_factory=dict)
    validation_status: RowStatus = RowStatus.PENDING
    validation_result: RowResult | None = None

    @property
    def email(self) -> str:
        value = self.mapped_data.get(TargetField.EMAIL.value)
        if value is None:
            return ""
        return str(value).strip()


class Job(BaseModel):
    """A validation run over one uploaded file."""

    job_id: str
    file_name: str
    rows: list[Row] = Field(default_factory=list)
    total_rows: int = 0
    processed_rows: int = 0
    valid_rows: int = 0
    invalid_rows: int = 0
    error_rows: int = 0
    status: JobStatus = JobStatus.PENDING
    column_mappings: list[ColumnMapping] = Field(default_factory=list)
    created_at: datetime = Field(default_factory=utc_now)
    updated_at: datetime = Field(default_factory=utc_now)

    def record_result(self, index: int, status: RowStatus, result: RowResult) -> None:
        """Store a terminal row outcome and bump the matching counter."""
        row = self.rows[index]
        row.validation_status = status
        row.validation_result = result
        if status == RowStatus.VALID:
            self.valid_rows += 1
        elif status == RowStatus.INVALID:
            self.invalid_rows += 1
        else:
            self.error_rows += 1
        self.processed_rows += 1
        self.updated_at = utc_now()


class StartValidationRequest(BaseModel):
    """Request body for starting validation."""

    job_id: str
    column_mappings: list[ColumnMapping]


class StartValidationResponse(BaseModel):
    """Acknowledgement returned when a job starts processing."""

    job_id: str
    status: JobStatus
    message: str
