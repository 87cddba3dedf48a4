"""ID generation utilities."""
import uuid


def generate_id() -> str:
    """Generate a unique job ID."""
    return str(uuid.uuid4())


def make_row_id(job_id: str, index: int) -> str:
    """Row IDs are scoped to their job and keep the source row order."""
    return f"{job_id}-{index}"
