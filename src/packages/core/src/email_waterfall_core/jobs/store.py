"""In-memory job store with time-based eviction."""
import asyncio
import threading
from datetime import datetime, timedelta
from typing import Callable, TypeVar

import structlog

from email_waterfall_core.jobs.models import Job
from email_waterfall_core.util import utc_now

logger = structlog.get_logger()

T = TypeVar("T")

DEFAULT_MAX_AGE = timedelta(hours=1)
DEFAULT_EVICTION_INTERVAL = timedelta(minutes=30)


class JobStore:
    """Keyed storage of jobs shared by the orchestrator and request handlers.

    All access goes through one lock. Handlers run in FastAPI's threadpool
    while orchestration runs on the event loop, so the lock has to be a
    thread lock. Nothing awaits while holding it.
    """

    def __init__(self, clock: Callable[[], datetime] = utc_now):
        self._clock = clock
        self._jobs: dict[str, Job] = {}
        self._lock = threading.Lock()

    def put(self, job: Job) -> None:
        """Insert or overwrite a job."""
        with self._lock:
            self._jobs[job.job_id] = job

    def get(self, job_id: str) -> Job | None:
        """Get the live job object, or None."""
        with self._lock:
            return self._jobs.get(job_id)

    def snapshot(self, job_id: str) -> Job | None:
        """Get a deep copy of a job taken under the lock."""
        with self._lock:
            job = self._jobs.get(job_id)
            if job is None:
                return None
            return job.model_copy(deep=True)

    def mutate(self, job_id: str, fn: Callable[[Job], T]) -> T | None:
        """Apply fn to the stored job under the lock.

        Returns fn's result, or None if the job is gone. fn must not block.
        """
        with self._lock:
            job = self._jobs.get(job_id)
            if job is None:
                return None
            return fn(job)

    def delete(self, job_id: str) -> bool:
        """Delete a job. Returns True if it existed."""
        with self._lock:
            return self._jobs.pop(job_id, None) is not None

    def __contains__(self, job_id: str) -> bool:
        with self._lock:
            return job_id in self._jobs

    def __len__(self) -> int:
        with self._lock:
            return len(self._jobs)

    def evict_older_than(self, max_age: timedelta = DEFAULT_MAX_AGE) -> int:
        """Remove jobs created before now - max_age. Returns the count removed."""
        cutoff = self._clock() - max_age
        with self._lock:
            expired = [
                job_id for job_id, job in self._jobs.items() if job.created_at < cutoff
            ]
            for job_id in expired:
                del self._jobs[job_id]
        if expired:
            logger.info("jobs_evicted", count=len(expired), cutoff=cutoff.isoformat())
        return len(expired)

    async def run_eviction(
        self,
        interval: timedelta = DEFAULT_EVICTION_INTERVAL,
        max_age: timedelta = DEFAULT_MAX_AGE,
    ) -> None:
        """Evict expired jobs every interval until cancelled."""
        logger.info(
            "eviction_loop_started",
            interval_seconds=interval.total_seconds(),
            max_age_seconds=max_age.total_seconds(),
        )
        while True:
            await asyncio.sleep(interval.total_seconds())
            try:
                self.evict_older_than(max_age)
            except Exception as e:
                logger.exception("eviction_failed", error=str(e))
