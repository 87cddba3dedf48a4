"""Validation start and status endpoints."""
import structlog
from fastapi import APIRouter, Depends, HTTPException

from email_waterfall_api.deps import get_orchestrator
from email_waterfall_core.jobs import Job, StartValidationRequest, StartValidationResponse
from email_waterfall_core.util import (
    EmailMappingRequiredError,
    JobConflictError,
    JobNotFoundError,
)
from email_waterfall_core.validation import ValidationOrchestrator

router = APIRouter(prefix="/validation", tags=["validation"])
logger = structlog.get_logger()


@router.post("/start", response_model=StartValidationResponse)
async def start_validation(
    body: StartValidationRequest,
    orchestrator: ValidationOrchestrator = Depends(get_orchestrator),
):
    """Start validating a job's rows in the background."""
    try:
        return await orchestrator.start_validation(body.job_id, body.column_mappings)
    except JobNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e)) from e
    except EmailMappingRequiredError as e:
        raise HTTPException(status_code=400, detail=str(e)) from e
    except JobConflictError as e:
        logger.info("validation_start_rejected", job_id=e.job_id, status=e.status)
        raise HTTPException(status_code=409, detail=str(e)) from e


@router.get("/status/{job_id}", response_model=Job)
def get_validation_status(
    job_id: str, orchestrator: ValidationOrchestrator = Depends(get_orchestrator)
):
    """Get job status and per-row results."""
    try:
        return orchestrator.get_status(job_id)
    except JobNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e)) from e
