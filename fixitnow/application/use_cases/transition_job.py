"""Job status transition use cases."""

from dataclasses import dataclass
from typing import Optional, Union
from uuid import UUID

from fixitnow.application.interfaces.repositories import JobRepositoryInterface
from fixitnow.application.services import job_notifications
from fixitnow.application.services.job_lifecycle import JobLifecycleService
from fixitnow.application.services.notification_dispatcher import (
    NotificationDispatcher,
)
from fixitnow.application.services.retry_handler import OptimisticRetryHandler
from fixitnow.application.use_cases.job_queries import load_job
from fixitnow.config.logging import get_logger
from fixitnow.domain.entities.job import Job
from fixitnow.domain.exceptions.validation_error import ValidationError
from fixitnow.domain.value_objects.actor import ActorRef
from fixitnow.domain.value_objects.job_status import JobStatus
from fixitnow.domain.value_objects.payment_status import PaymentMethod
from fixitnow.infrastructure.monitoring.metrics import (
    record_invoice_generated,
    record_job_transition,
)

logger = get_logger(__name__)


@dataclass
class TransitionJobRequest:
    """Request for moving a job to another status."""

    job_id: UUID
    new_status: Union[str, JobStatus]
    actor: ActorRef
    notes: Optional[str] = None


@dataclass
class CompleteJobRequest:
    """Request for completing a job with its final settlement terms."""

    job_id: UUID
    actor: ActorRef
    final_price: Optional[float] = None
    payment_method: Union[str, PaymentMethod] = PaymentMethod.ONLINE
    tip_amount: Optional[float] = None
    notes: Optional[str] = None


class TransitionJobUseCase:
    """
    Use case for every status change of a job.

    Accepting, starting and cancelling are plain transitions; completion
    additionally settles the price and attaches the invoice. The change and
    its history entry are saved in one version-checked write, and the
    parties are notified once the write is committed.
    """

    def __init__(
        self,
        job_repo: JobRepositoryInterface,
        lifecycle: JobLifecycleService,
        retry_handler: OptimisticRetryHandler,
        dispatcher: NotificationDispatcher,
    ):
        self.job_repo = job_repo
        self.lifecycle = lifecycle
        self.retry_handler = retry_handler
        self.dispatcher = dispatcher

    async def execute(self, request: TransitionJobRequest) -> Job:
        async def operation() -> Job:
            job = await load_job(self.job_repo, request.job_id)
            self.lifecycle.transition(job, request.new_status, request.actor, request.notes)
            return await self.job_repo.save(job)

        return await self._run(operation, request.actor)

    async def complete(self, request: CompleteJobRequest) -> Job:
        """Apply the agreed price, tip and payment method, then complete the job."""
        try:
            payment_method = PaymentMethod(request.payment_method)
        except ValueError:
            raise ValidationError(
                f"Invalid payment method '{request.payment_method}'"
            ) from None
        if request.final_price is not None and request.final_price < 0:
            raise ValidationError("Invalid final price")
        if request.tip_amount is not None and request.tip_amount < 0:
            raise ValidationError("Tip amount cannot be negative")

        async def operation() -> Job:
            job = await load_job(self.job_repo, request.job_id)
            self.lifecycle.authorize(job, JobStatus.COMPLETED, request.actor)

            if request.final_price is not None:
                if job.budget and not job.budget.contains(request.final_price):
                    raise ValidationError("Final price must be within the budget range")
                job.final_price = request.final_price
            if request.tip_amount is not None:
                job.tip_amount = request.tip_amount
            job.payment_method = payment_method

            self.lifecycle.transition(
                job, JobStatus.COMPLETED, request.actor, request.notes
            )
            return await self.job_repo.save(job)

        return await self._run(operation, request.actor)

    async def _run(self, operation, actor: ActorRef) -> Job:
        job = await self.retry_handler.run(operation, operation_key="job_transition")

        record_job_transition(job.status.value)
        if job.status == JobStatus.COMPLETED:
            record_invoice_generated()

        logger.info(
            "Job transition committed",
            job_id=str(job.id),
            status=job.status.value,
            version=job.version,
        )

        await self.dispatcher.dispatch_all(
            job_notifications.for_status_change(job, actor)
        )
        return job
