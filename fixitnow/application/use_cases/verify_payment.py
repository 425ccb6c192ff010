"""Online payment verification use case."""

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
from fixitnow.domain.exceptions.validation_error import ValidationError
from fixitnow.domain.value_objects.actor import ActorKind, ActorRef
from fixitnow.infrastructure.monitoring.metrics import record_online_payment

logger = get_logger(__name__)


@dataclass
class VerifyOnlinePaymentRequest:
    """
    Verified payment signal handed over by the gateway client.

    ``signature_valid`` is trusted as is; checking the gateway signature
    is the client's job.
    """

    job_id: UUID
    gateway_order_id: str
    gateway_payment_id: str
    signature_valid: bool
    gateway_signature: Optional[str] = None
    provider: str = "razorpay"
    actor: Optional[ActorRef] = None


class VerifyOnlinePaymentUseCase:
    """Use case for recording a gateway-confirmed online payment."""

    def __init__(
        self,
        job_repo: JobRepositoryInterface,
        retry_handler: OptimisticRetryHandler,
        dispatcher: NotificationDispatcher,
    ):
        self.job_repo = job_repo
        self.retry_handler = retry_handler
        self.dispatcher = dispatcher

    async def execute(self, request: VerifyOnlinePaymentRequest) -> Job:
        if not request.signature_valid:
            record_online_payment("invalid_signature")
            logger.warning(
                "Payment signature rejected",
                job_id=str(request.job_id),
                gateway_order_id=request.gateway_order_id,
            )
            raise ValidationError("Payment verification failed: invalid signature")
        if not request.gateway_order_id or not request.gateway_payment_id:
            raise ValidationError("Gateway order id and payment id are required")

        async def operation() -> Job:
            job = await load_job(self.job_repo, request.job_id)
            actor = request.actor
            if actor and actor.kind != ActorKind.ADMIN and not job.is_customer(actor):
                raise ForbiddenActionError("Only the customer can pay for this job")

            job.record_online_payment(
                order_id=request.gateway_order_id,
                payment_id=request.gateway_payment_id,
                signature=request.gateway_signature,
                provider=request.provider,
            )
            return await self.job_repo.save(job)

        job = await self.retry_handler.run(operation, operation_key="verify_payment")

        record_online_payment("paid")
        logger.info(
            "Online payment verified",
            job_id=str(job.id),
            gateway_payment_id=request.gateway_payment_id,
        )

        await self.dispatcher.dispatch_all(job_notifications.for_payment_received(job))
        return job
