"""Enriched CSV download."""
from fastapi import APIRouter, Depends, HTTPException
from fastapi.responses import Response

from email_waterfall_api.deps import get_store
from email_waterfall_core.export import enriched_file_name, to_enriched_csv
from email_waterfall_core.jobs import JobStore

router = APIRouter(prefix="/export", tags=["export"])


@router.get("/{job_id}")
def export_job(job_id: str, store: JobStore = Depends(get_store)):
    """Download the job's rows with validation results appended."""
    job = store.snapshot(job_id)
    if not job:
        raise HTTPException(status_code=404, detail=f"No job found with ID: {job_id}")
    return Response(
        content=to_enriched_csv(job),
        media_type="text/csv",
        headers={
            "Content-Disposition": f'attachment; filename="{enriched_file_name(job)}"'
        },
    )
