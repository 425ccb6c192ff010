"""Use cases for the interactions between customer and professional on a job."""

from dataclasses import dataclass
from typing import Optional
from uuid import UUID

from fixitnow.application.interfaces.repositories import JobRepositoryInterface
from fixitnow.application.services import job_notifications
from fixitnow.application.services.notification_dispatcher import (
    NotificationDispatcher,
)
from fixitnow.application.services.retry_handler import OptimisticRetryHandler
from fixitnow.application.use_cases.job_queries import load_job
from fixitnow.config.logging import get_logger
from fixitnow.domain.entities.job import Job
from fixitnow.domain.exceptions.state_error import ForbiddenActionError
from fixitnow.domain.value_objects.actor import ActorKind, ActorRef
from fixitnow.domain.value_objects.message import JobMessage

logger = get_logger(__name__)


@dataclass
class SendMessageRequest:
    job_id: UUID
    actor: ActorRef
    message: str


@dataclass
class RateJobRequest:
    job_id: UUID
    actor: ActorRef
    rating: int
    review: Optional[str] = None


class DeclineJobUseCase:
    """Use case for a professional passing on a pending job."""

    def __init__(
        self,
        job_repo: JobRepositoryInterface,
        retry_handler: OptimisticRetryHandler,
    ):
        self.job_repo = job_repo
        self.retry_handler = retry_handler

    async def execute(self, job_id: UUID, actor: ActorRef) -> Job:
        if actor.kind != ActorKind.PROFESSIONAL:
            raise ForbiddenActionError("Only professionals can decline jobs")

        async def operation() -> Job:
            job = await load_job(self.job_repo, job_id)
            if job.decline(actor.id):
                job = await self.job_repo.save(job)
            return job

        job = await self.retry_handler.run(operation, operation_key="job_decline")
        logger.info("Job declined", job_id=str(job_id), professional_id=str(actor.id))
        return job


class SendJobMessageUseCase:
    """Use case for appending a chat message to a job."""

    def __init__(
        self,
        job_repo: JobRepositoryInterface,
        retry_handler: OptimisticRetryHandler,
        dispatcher: NotificationDispatcher,
    ):
        self.job_repo = job_repo
        self.retry_handler = retry_handler
        self.dispatcher = dispatcher

    async def execute(self, request: SendMessageRequest) -> JobMessage:
        async def operation():
            job = await load_job(self.job_repo, request.job_id)
            message = job.add_message(request.actor, request.message)
            return await self.job_repo.save(job), message

        job, message = await self.retry_handler.run(operation, operation_key="job_message")
        await self.dispatcher.dispatch_all(job_notifications.for_message(job, message))
        return message


class RateJobUseCase:
    """Use case for the customer rating a completed job."""

    def __init__(
        self,
        job_repo: JobRepositoryInterface,
        retry_handler: OptimisticRetryHandler,
        dispatcher: NotificationDispatcher,
    ):
        self.job_repo = job_repo
        self.retry_handler = retry_handler
        self.dispatcher = dispatcher

    async def execute(self, request: RateJobRequest) -> Job:
        async def operation() -> Job:
            job = await load_job(self.job_repo, request.job_id)
            job.rate(request.actor, request.rating, request.review)
            return await self.job_repo.save(job)

        job = await self.retry_handler.run(operation, operation_key="job_rating")

        logger.info("Job rated", job_id=str(job.id), rating=job.rating)
        await self.dispatcher.dispatch_all(job_notifications.for_review(job))
        return job
