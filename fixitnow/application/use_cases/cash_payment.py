"""Cash payment reconciliation use cases."""

from dataclasses import dataclass
from typing import Callable, List, Optional
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
from fixitnow.domain.events.party_notification import PartyNotification
from fixitnow.domain.value_objects.actor import ActorRef
from fixitnow.domain.value_objects.payment_status import PaymentStatus
from fixitnow.infrastructure.monitoring.metrics import record_cash_payment_event

logger = get_logger(__name__)


@dataclass
class MarkCashReceivedRequest:
    job_id: UUID
    actor: ActorRef
    amount: Optional[float] = None


@dataclass
class ConfirmCashPaymentRequest:
    job_id: UUID
    actor: ActorRef
    verification_code: Optional[str] = None


@dataclass
class RaiseCashDisputeRequest:
    job_id: UUID
    actor: ActorRef
    reason: str


@dataclass
class AddReceiptPhotoRequest:
    job_id: UUID
    actor: ActorRef
    url: str


class _CashPaymentUseCase:
    """
    Shared read-modify-write cycle of the cash confirmation steps.

    Each step reloads the job on every attempt, so a flag set by the other
    party in the meantime is never overwritten.
    """

    event: str = "cash_update"
    may_verify: bool = False

    def __init__(
        self,
        job_repo: JobRepositoryInterface,
        retry_handler: OptimisticRetryHandler,
        dispatcher: NotificationDispatcher,
    ):
        self.job_repo = job_repo
        self.retry_handler = retry_handler
        self.dispatcher = dispatcher

    def follow_up(self, job: Job, actor: ActorRef) -> List[PartyNotification]:
        """Notifications for a step that did not complete the verification."""
        return []

    async def _apply(
        self, job_id: UUID, actor: ActorRef, mutate: Callable[[Job], None]
    ) -> Job:
        async def operation() -> Job:
            job = await load_job(self.job_repo, job_id)
            mutate(job)
            return await self.job_repo.save(job)

        job = await self.retry_handler.run(operation, operation_key=f"cash_{self.event}")

        record_cash_payment_event(self.event)
        logger.info(
            "Cash payment updated",
            job_id=str(job.id),
            cash_event=self.event,
            payment_status=job.payment_status.value,
        )

        if job.payment_status == PaymentStatus.CASH_VERIFIED and self.may_verify:
            record_cash_payment_event("verified")
            await self.dispatcher.dispatch_all(job_notifications.for_payment_received(job))
        else:
            await self.dispatcher.dispatch_all(self.follow_up(job, actor))
        return job


class MarkCashReceivedUseCase(_CashPaymentUseCase):
    """Use case for the professional acknowledging the cash was handed over."""

    event = "received"
    may_verify = True

    async def execute(self, request: MarkCashReceivedRequest) -> Job:
        return await self._apply(
            request.job_id,
            request.actor,
            lambda job: job.mark_cash_received(request.actor, request.amount),
        )

    def follow_up(self, job: Job, actor: ActorRef) -> List[PartyNotification]:
        return job_notifications.for_cash_confirmation_required(job)


class ConfirmCashPaymentUseCase(_CashPaymentUseCase):
    """Use case for the customer confirming they paid in cash."""

    event = "confirmed"
    may_verify = True

    async def execute(self, request: ConfirmCashPaymentRequest) -> Job:
        return await self._apply(
            request.job_id,
            request.actor,
            lambda job: job.confirm_cash_payment(request.actor, request.verification_code),
        )


class RaiseCashDisputeUseCase(_CashPaymentUseCase):
    """Use case for either party disputing the cash payment."""

    event = "disputed"

    async def execute(self, request: RaiseCashDisputeRequest) -> Job:
        return await self._apply(
            request.job_id,
            request.actor,
            lambda job: job.raise_cash_dispute(request.actor, request.reason),
        )

    def follow_up(self, job: Job, actor: ActorRef) -> List[PartyNotification]:
        return job_notifications.for_cash_dispute(job, actor)


class AddReceiptPhotoUseCase(_CashPaymentUseCase):
    """Use case for attaching a receipt photo to the cash payment."""

    event = "receipt_added"

    async def execute(self, request: AddReceiptPhotoRequest) -> Job:
        return await self._apply(
            request.job_id,
            request.actor,
            lambda job: job.add_receipt_photo(request.actor, request.url),
        )
