"""File upload endpoint."""
import os
import tempfile
from pathlib import Path

import structlog
from fastapi import APIRouter, Depends, File, HTTPException, UploadFile

from email_waterfall_api.deps import get_app_settings, get_store
from email_waterfall_api.settings import Settings
from email_waterfall_core.ingest import (
    auto_detect_columns,
    build_job,
    check_records,
    detect_format,
    load_table,
)
from email_waterfall_core.jobs import JobStore
from email_waterfall_core.util import UploadError

router = APIRouter(tags=["uploads"])
logger = structlog.get_logger()

ALLOWED_SUFFIXES = (".csv", ".tsv")
PREVIEW_ROWS = 10


@router.post("/upload")
async def upload_file(
    file: UploadFile = File(...),
    settings: Settings = Depends(get_app_settings),
    store: JobStore = Depends(get_store),
):
    """Upload a CSV or TSV file and create a pending validation job."""
    file_name = file.filename or "upload.csv"
    suffix = Path(file_name).suffix.lower()
    if suffix not in ALLOWED_SUFFIXES:
        raise HTTPException(status_code=400, detail="Only CSV or TSV files are allowed")

    max_bytes = settings.max_upload_mb * 1024 * 1024
    content = await file.read()
    if len(content) > max_bytes:
        raise HTTPException(
            status_code=413, detail=f"File too large (max {settings.max_upload_mb} MB)"
        )

    # Parsed into memory, the file on disk only lives for this request.
    fd, path = tempfile.mkstemp(suffix=suffix)
    try:
        with os.fdopen(fd, "wb") as f:
            f.write(content)
        detected = detect_format(path)
        if not detected:
            raise HTTPException(
                status_code=400, detail="Unsupported or unrecognized file format"
            )
        try:
            headers, records = load_table(path, detected)
            check_records(records, settings.max_rows)
        except (ValueError, UploadError) as e:
            raise HTTPException(status_code=400, detail=str(e)) from e
    finally:
        os.remove(path)

    job = build_job(file_name, records)
    store.put(job)
    logger.info("job_created", job_id=job.job_id, file_name=file_name, rows=job.total_rows)

    return {
        "job_id": job.job_id,
        "file_name": file_name,
        "row_count": job.total_rows,
        "headers": headers,
        "preview": records[:PREVIEW_ROWS],
        "auto_detected": auto_detect_columns(headers),
    }
