"""Domain errors raised by the validation pipeline."""


class ValidationError(Exception):
    """Base class for rejected requests."""


class JobNotFoundError(ValidationError):
    """No job is stored under the requested id."""

    def __init__(self, job_id: str):
        super().__init__(f"No job found with ID: {job_id}")
        self.job_id = job_id


class EmailMappingRequiredError(ValidationError):
    """Column mappings did not include an email target."""

    def __init__(self):
        super().__init__("You must map at least one column to the email field")


class JobConflictError(ValidationError):
    """The job is not in a state that allows the requested transition."""

    def __init__(self, job_id: str, status: str):
        super().__init__(f"Job {job_id} cannot be started (status: {status})")
        self.job_id = job_id
        self.status = status


class UploadError(ValidationError):
    """An uploaded file could not be turned into a job."""
