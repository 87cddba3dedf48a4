"""Drives a job's rows through waterfall validation."""
import asyncio
from typing import Any, Iterable

import structlog

from email_waterfall_core.jobs import (
    ColumnMapping,
    Job,
    JobStatus,
    JobStore,
    RowResult,
    RowStatus,
    StartValidationResponse,
    TargetField,
)
from email_waterfall_core.util import (
    EmailMappingRequiredError,
    JobConflictError,
    JobNotFoundError,
    utc_now,
)
from email_waterfall_core.validation.waterfall import (
    DEFAULT_BATCH_SIZE,
    WaterfallResult,
    WaterfallValidator,
)

logger = structlog.get_logger()

NO_EMAIL_ERROR = "No email address found"


def apply_mappings(
    original: dict[str, Any], mappings: Iterable[ColumnMapping]
) -> dict[str, Any]:
    """Build a row's mapped fields. Skipped columns are left out; later mappings win."""
    mapped: dict[str, Any] = {}
    for m in mappings:
        if m.target_field == TargetField.SKIP:
            continue
        mapped[m.target_field.value] = original.get(m.csv_column)
    return mapped


def row_status_for(result: WaterfallResult) -> RowStatus:
    """Terminal row status for a waterfall outcome.

    An error with no provider verdict behind it (bad format, every call
    failed) is an error; a "not valid" answer from any provider is invalid.
    """
    if result.is_valid:
        return RowStatus.VALID
    if result.error and not result.has_verdict:
        return RowStatus.ERROR
    return RowStatus.INVALID


class ValidationOrchestrator:
    """Starts, tracks and finishes validation jobs held in a JobStore.

    Each started job runs as its own background task. Pollers only ever see
    the job through the store.
    """

    def __init__(
        self,
        store: JobStore,
        validator: WaterfallValidator,
        batch_size: int = DEFAULT_BATCH_SIZE,
    ):
        if batch_size < 1:
            raise ValueError("batch_size must be at least 1")
        self.store = store
        self.validator = validator
        self.batch_size = batch_size
        self._tasks: dict[str, asyncio.Task] = {}

    async def start_validation(
        self, job_id: str, column_mappings: Iterable[ColumnMapping]
    ) -> StartValidationResponse:
        """Accept mappings and kick off processing. Returns without waiting."""
        mappings = list(column_mappings)
        if job_id not in self.store:
            raise JobNotFoundError(job_id)
        if not any(m.target_field == TargetField.EMAIL for m in mappings):
            raise EmailMappingRequiredError()

        def accept(job: Job) -> JobStatus:
            if job.status != JobStatus.PENDING:
                raise JobConflictError(job_id, job.status.value)
            job.column_mappings = mappings
            job.status = JobStatus.PROCESSING
            for row in job.rows:
                row.mapped_data = apply_mappings(row.original_data, mappings)
            job.updated_at = utc_now()
            return job.status

        status = self.store.mutate(job_id, accept)
        if status is None:
            raise JobNotFoundError(job_id)

        task = asyncio.get_running_loop().create_task(self.process_job(job_id))
        self._tasks[job_id] = task
        task.add_done_callback(lambda _: self._tasks.pop(job_id, None))
        logger.info(
            "validation_started",
            job_id=job_id,
            mappings={m.csv_column: m.target_field.value for m in mappings},
        )
        return StartValidationResponse(
            job_id=job_id, status=status, message="Validation started"
        )

    def get_status(self, job_id: str) -> Job:
        """Snapshot of a job for polling."""
        job = self.store.snapshot(job_id)
        if job is None:
            raise JobNotFoundError(job_id)
        return job

    def delete_job(self, job_id: str) -> bool:
        """Remove a job. A running task notices and stops at its next write."""
        deleted = self.store.delete(job_id)
        if deleted:
            logger.info("job_deleted", job_id=job_id, in_flight=job_id in self._tasks)
        return deleted

    async def wait(self, job_id: str) -> None:
        """Wait for a job's background task, if one is running."""
        task = self._tasks.get(job_id)
        if task is not None:
            await asyncio.shield(task)

    async def shutdown(self) -> None:
        """Cancel all running jobs."""
        tasks = list(self._tasks.values())
        for task in tasks:
            task.cancel()
        await asyncio.gather(*tasks, return_exceptions=True)

    async def process_job(self, job_id: str) -> None:
        """Validate every row in batches, then mark the job completed or failed."""
        total = self.store.mutate(job_id, lambda job: len(job.rows))
        if total is None:
            logger.warning("job_missing_at_start", job_id=job_id)
            return

        try:
            for start in range(0, total, self.batch_size):
                if job_id not in self.store:
                    logger.warning("job_deleted_during_processing", job_id=job_id)
                    return
                indices = range(start, min(start + self.batch_size, total))
                outcomes = await asyncio.gather(
                    *(self._process_row(job_id, i) for i in indices),
                    return_exceptions=True,
                )
                for outcome in outcomes:
                    if isinstance(outcome, BaseException):
                        raise outcome
                logger.debug(
                    "batch_completed", job_id=job_id, completed=indices.stop, total=total
                )

            summary = self.store.mutate(job_id, self._complete)
            if summary is None:
                logger.warning("job_deleted_during_processing", job_id=job_id)
                return
            logger.info("job_completed", job_id=job_id, **summary)
        except Exception as e:
            logger.exception("job_failed", job_id=job_id, error=str(e))
            self.store.mutate(job_id, self._fail)

    async def _process_row(self, job_id: str, index: int) -> None:
        email = self.store.mutate(job_id, lambda job: job.rows[index].email)
        if email is None:
            return
        if not email:
            self.store.mutate(
                job_id,
                lambda job: job.record_result(
                    index,
                    RowStatus.ERROR,
                    RowResult(is_valid=False, error=NO_EMAIL_ERROR),
                ),
            )
            return

        def mark_validating(job: Job) -> bool:
            job.rows[index].validation_status = RowStatus.VALIDATING
            job.updated_at = utc_now()
            return True

        if self.store.mutate(job_id, mark_validating) is None:
            return

        result = await self.validator.validate_email(email)
        row_result = RowResult(
            is_valid=result.is_valid,
            validated_by=result.validated_by,
            error=result.error,
            details=result.details,
        )
        status = row_status_for(result)
        self.store.mutate(
            job_id, lambda job: job.record_result(index, status, row_result)
        )

    @staticmethod
    def _complete(job: Job) -> dict[str, int]:
        job.status = JobStatus.COMPLETED
        job.updated_at = utc_now()
        return {
            "processed": job.processed_rows,
            "valid": job.valid_rows,
            "invalid": job.invalid_rows,
            "errors": job.error_rows,
        }

    @staticmethod
    def _fail(job: Job) -> None:
        job.status = JobStatus.FAILED
        job.updated_at = utc_now()
