"""
Job lifecycle service enforcing who may move a job and what completion implies.
"""

from typing import Optional, Union

from fixitnow.application.services.commission_calculator import CommissionCalculator
from fixitnow.application.services.invoice_generator import InvoiceGenerator
from fixitnow.config.logging import get_logger
from fixitnow.domain.entities.job import Job, parse_status
from fixitnow.domain.exceptions.state_error import (
    ForbiddenActionError,
    IllegalStateError,
)
from fixitnow.domain.value_objects.actor import ActorKind, ActorRef
from fixitnow.domain.value_objects.job_status import JobStatus
from fixitnow.domain.value_objects.payment_status import PaymentMethod, PaymentStatus
from fixitnow.domain.value_objects.pricing import round_money
from fixitnow.domain.value_objects.status_history import StatusHistoryEntry

logger = get_logger(__name__)


class JobLifecycleService:
    """Applies status transitions and their side effects to a loaded job."""

    def __init__(
        self,
        commission_calculator: Optional[CommissionCalculator] = None,
        invoice_generator: Optional[InvoiceGenerator] = None,
    ):
        self.commission_calculator = commission_calculator or CommissionCalculator()
        self.invoice_generator = invoice_generator or InvoiceGenerator()

    def authorize(self, job: Job, target: JobStatus, actor: ActorRef) -> None:
        """Reject actors that are not allowed to move ``job`` to ``target``."""
        if actor.kind == ActorKind.ADMIN:
            return

        if target == JobStatus.ACCEPTED:
            if actor.kind != ActorKind.PROFESSIONAL:
                raise ForbiddenActionError("Only professionals can accept jobs")
        elif target in (JobStatus.IN_PROGRESS, JobStatus.COMPLETED):
            if not job.is_assigned_professional(actor):
                raise ForbiddenActionError(
                    "Only the assigned professional can update this job"
                )
        elif target == JobStatus.CANCELLED:
            if not job.is_party(actor):
                raise ForbiddenActionError(
                    "Only the customer or the assigned professional can cancel this job"
                )

    def transition(
        self,
        job: Job,
        new_status: Union[str, JobStatus],
        actor: ActorRef,
        notes: Optional[str] = None,
    ) -> StatusHistoryEntry:
        """
        Move ``job`` to ``new_status`` on behalf of ``actor``.

        Completing a job settles its price: the settlement amount becomes
        the final price, the commission is computed and the invoice is
        attached before the job is persisted.

        Raises:
            InvalidStatusError: If ``new_status`` is not a known status
            ForbiddenActionError: If ``actor`` may not perform the change
            IllegalStateError: If the change is not a valid forward step
        """
        target = parse_status(new_status)
        self.authorize(job, target, actor)

        if not job.status.can_transition_to(target):
            raise IllegalStateError(
                f"Cannot change job status from '{job.status.value}' to '{target.value}'",
                current_state=job.status.value,
            )

        if target == JobStatus.ACCEPTED and actor.kind == ActorKind.PROFESSIONAL:
            if job.professional_id is None:
                job.assign_professional(actor.id)
            elif job.professional_id != actor.id:
                raise IllegalStateError("Job is already assigned to another professional")

        entry = job.transition_to(target, actor, notes)

        if target == JobStatus.COMPLETED:
            self.settle(job)

        logger.info(
            "Job status changed",
            job_id=str(job.id),
            status=target.value,
            actor_kind=actor.kind.value,
            actor_id=str(actor.id),
        )
        return entry

    def settle(self, job: Job) -> None:
        """Fix the final price, commission, invoice and payment status of a completed job."""
        amount = round_money(job.resolve_settlement_amount())
        job.final_price = amount
        if job.payment_method is None:
            job.payment_method = PaymentMethod.ONLINE

        job.commission = self.commission_calculator.calculate(amount, job.payment_method)
        self.invoice_generator.ensure_invoice(job)

        if job.payment_method == PaymentMethod.CASH:
            job.start_cash_settlement(amount)
        else:
            job.payment_status = PaymentStatus.PENDING
