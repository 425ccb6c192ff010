"""Job read use cases."""

from typing import List
from uuid import UUID

from fixitnow.application.interfaces.repositories import JobRepositoryInterface
from fixitnow.domain.entities.job import Job
from fixitnow.domain.exceptions.not_found_error import NotFoundError
from fixitnow.domain.value_objects.status_history import StatusHistoryEntry


async def load_job(job_repo: JobRepositoryInterface, job_id: UUID) -> Job:
    """Fetch a job or raise NotFoundError."""
    job = await job_repo.get_by_id(job_id)
    if not job:
        raise NotFoundError("Job", job_id)
    return job


class GetJobUseCase:
    """Use case for reading a single job."""

    def __init__(self, job_repo: JobRepositoryInterface):
        self.job_repo = job_repo

    async def execute(self, job_id: UUID) -> Job:
        return await load_job(self.job_repo, job_id)


class GetStatusHistoryUseCase:
    """Use case for reading the status audit trail of a job, oldest first."""

    def __init__(self, job_repo: JobRepositoryInterface):
        self.job_repo = job_repo

    async def execute(self, job_id: UUID) -> List[StatusHistoryEntry]:
        job = await load_job(self.job_repo, job_id)
        return list(job.status_history)
