"""Ingest module for file parsing, column detection and job creation."""
from email_waterfall_core.ingest.builder import DEFAULT_MAX_ROWS, build_job, check_records
from email_waterfall_core.ingest.infer import auto_detect_columns
from email_waterfall_core.ingest.preview import (
    detect_format,
    get_loader,
    load_table,
)

__all__ = [
    "DEFAULT_MAX_ROWS",
    "auto_detect_columns",
    "build_job",
    "check_records",
    "detect_format",
    "get_loader",
    "load_table",
]
