"""Turn parsed records into a pending validation job."""
from typing import Any

from email_waterfall_core.jobs import Job, Row
from email_waterfall_core.util import UploadError, generate_id, make_row_id

DEFAULT_MAX_ROWS = 1000


def check_records(records: list[dict[str, Any]], max_rows: int = DEFAULT_MAX_ROWS) -> None:
    """Reject empty files and files over the row limit."""
    if not records:
        raise UploadError("CSV file is empty")
    if len(records) > max_rows:
        raise UploadError(
            f"CSV file contains {len(records)} rows, maximum allowed is {max_rows}"
        )


def build_job(file_name: str, records: list[dict[str, Any]], job_id: str | None = None) -> Job:
    """Create a pending job with one pending row per record."""
    job_id = job_id or generate_id()
    rows = [
        Row(row_id=make_row_id(job_id, i), original_data=dict(record))
        for i, record in enumerate(records)
    ]
    return Job(job_id=job_id, file_name=file_name, rows=rows, total_rows=len(rows))
