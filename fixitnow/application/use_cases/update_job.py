"""Update job details use case."""

from dataclasses import dataclass, field, replace
from typing import Any, Dict
from uuid import UUID

from fixitnow.application.interfaces.repositories import JobRepositoryInterface
from fixitnow.application.services.retry_handler import OptimisticRetryHandler
from fixitnow.config.logging import get_logger
from fixitnow.domain.entities.job import Job
from fixitnow.domain.exceptions.not_found_error import NotFoundError
from fixitnow.domain.exceptions.state_error import (
    ForbiddenActionError,
    IllegalStateError,
)
from fixitnow.domain.exceptions.validation_error import ValidationError
from fixitnow.domain.value_objects.actor import ActorKind, ActorRef
from fixitnow.domain.value_objects.job_status import JobStatus

logger = get_logger(__name__)

UPDATABLE_FIELDS = frozenset(
    {
        "title",
        "description",
        "category",
        "priority",
        "scheduled_date",
        "scheduled_time",
        "estimated_duration",
        "budget",
        "fixed_rate",
        "location",
        "location_point",
    }
)


@dataclass
class UpdateJobDetailsRequest:
    """Request for changing the descriptive fields of a job."""

    job_id: UUID
    actor: ActorRef
    changes: Dict[str, Any] = field(default_factory=dict)


class UpdateJobDetailsUseCase:
    """Use case for a customer editing a job that nobody has accepted yet."""

    def __init__(
        self,
        job_repo: JobRepositoryInterface,
        retry_handler: OptimisticRetryHandler,
    ):
        self.job_repo = job_repo
        self.retry_handler = retry_handler

    async def execute(self, request: UpdateJobDetailsRequest) -> Job:
        unknown = set(request.changes) - UPDATABLE_FIELDS
        if unknown:
            raise ValidationError(
                f"Fields cannot be updated: {', '.join(sorted(unknown))}"
            )
        if not request.changes:
            raise ValidationError("No changes provided")

        async def operation() -> Job:
            job = await self.job_repo.get_by_id(request.job_id)
            if not job:
                raise NotFoundError("Job", request.job_id)
            if not job.is_customer(request.actor) and request.actor.kind != ActorKind.ADMIN:
                raise ForbiddenActionError("Only the customer can update this job")
            if job.status != JobStatus.PENDING:
                raise IllegalStateError(
                    "Only pending jobs can be updated", current_state=job.status.value
                )

            # Builds a throwaway copy so the entity rules vet the new values
            replace(job, **request.changes)

            return await self.job_repo.apply_update(
                job.id, request.changes, expected_version=job.version
            )

        updated_job = await self.retry_handler.run(operation, operation_key="job_update")

        logger.info(
            "Job details updated",
            job_id=str(updated_job.id),
            fields=sorted(request.changes),
        )
        return updated_job
