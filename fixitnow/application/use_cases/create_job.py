"""Create job use case."""

from dataclasses import dataclass
from datetime import datetime
from typing import Any, Dict, Optional
from uuid import UUID

from fixitnow.application.interfaces.repositories import JobRepositoryInterface
from fixitnow.config.logging import get_logger
from fixitnow.domain.entities.job import Job
from fixitnow.domain.value_objects.location import JobLocation
from fixitnow.domain.value_objects.pricing import Budget
from fixitnow.infrastructure.database.repositories.transaction_repository import (
    TransactionService,
)
from fixitnow.infrastructure.monitoring.metrics import record_job_creation

logger = get_logger(__name__)


@dataclass
class CreateJobRequest:
    """Request for creating a job."""

    user_id: UUID
    category: str
    location: JobLocation
    scheduled_date: datetime
    scheduled_time: str
    title: Optional[str] = None
    description: Optional[str] = None
    priority: str = "medium"
    estimated_duration: float = 2
    budget: Optional[Budget] = None
    fixed_rate: Optional[float] = None
    location_point: Optional[Dict[str, Any]] = None
    payment_method: Optional[str] = None


class CreateJobUseCase:
    """Use case for a customer posting a new job."""

    def __init__(
        self,
        job_repo: JobRepositoryInterface,
        transaction_service: TransactionService,
    ):
        self.job_repo = job_repo
        self.transaction_service = transaction_service

    async def execute(self, request: CreateJobRequest) -> Job:
        """Validate the draft and persist it as a new pending job."""
        job = Job(
            user_id=request.user_id,
            category=request.category,
            location=request.location,
            scheduled_date=request.scheduled_date,
            scheduled_time=request.scheduled_time,
            title=request.title,
            description=request.description,
            priority=request.priority,
            estimated_duration=request.estimated_duration,
            budget=request.budget,
            fixed_rate=request.fixed_rate,
            location_point=request.location_point,
            payment_method=request.payment_method,
        )

        created_job = await self.transaction_service.execute_in_transaction(
            lambda: self.job_repo.create(job), name="job_create"
        )

        record_job_creation(created_job.category.value)
        logger.info(
            "Job created",
            job_id=str(created_job.id),
            user_id=str(created_job.user_id),
            category=created_job.category.value,
            has_location_point=created_job.location_point is not None,
        )
        return created_job
