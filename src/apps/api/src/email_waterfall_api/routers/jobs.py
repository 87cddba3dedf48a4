"""Job management endpoints."""
from fastapi import APIRouter, Depends, HTTPException

from email_waterfall_api.deps import get_orchestrator
from email_waterfall_core.validation import ValidationOrchestrator

router = APIRouter(prefix="/jobs", tags=["jobs"])


@router.delete("/{job_id}")
def delete_job(job_id: str, orchestrator: ValidationOrchestrator = Depends(get_orchestrator)):
    """Delete a job. Processing in flight stops at its next update."""
    if not orchestrator.delete_job(job_id):
        raise HTTPException(status_code=404, detail=f"No job found with ID: {job_id}")
    return {"success": True, "message": "Job deleted successfully"}
