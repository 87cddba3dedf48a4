"""Enriched CSV generation."""
from typing import Any

import pandas as pd

from email_waterfall_core.jobs import Job

ENRICHMENT_COLUMNS = [
    "validation_status",
    "validated_by",
    "validation_timestamp",
    "validation_error",
]


def enriched_rows(job: Job) -> list[dict[str, Any]]:
    """Original columns of each row plus its validation outcome."""
    out = []
    for row in job.rows:
        result = row.validation_result
        record = dict(row.original_data)
        record["validation_status"] = row.validation_status.value
        record["validated_by"] = (result.validated_by or "") if result else ""
        record["validation_timestamp"] = result.timestamp.isoformat() if result else ""
        record["validation_error"] = (result.error or "") if result else ""
        out.append(record)
    return out


def to_enriched_csv(job: Job) -> str:
    """Render the job as CSV text with a header row."""
    rows = enriched_rows(job)
    original_columns: list[str] = []
    for row in job.rows:
        for col in row.original_data:
            if col not in original_columns and col not in ENRICHMENT_COLUMNS:
                original_columns.append(col)
    df = pd.DataFrame(rows, columns=original_columns + ENRICHMENT_COLUMNS)
    return df.fillna("").to_csv(index=False)


def enriched_file_name(job: Job) -> str:
    return f"enriched_{job.file_name}"
