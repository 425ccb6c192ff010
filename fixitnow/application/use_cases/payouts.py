"""Payout use cases."""

from dataclasses import dataclass
from typing import List, Optional
from uuid import UUID

from fixitnow.application.interfaces.repositories import (
    JobRepositoryInterface,
    PayoutRepositoryInterface,
)
from fixitnow.application.services import job_notifications
from fixitnow.application.services.notification_dispatcher import (
    NotificationDispatcher,
)
from fixitnow.config.logging import get_logger
from fixitnow.config.settings import settings
from fixitnow.domain.entities.payout import Payout
from fixitnow.domain.exceptions.not_found_error import NotFoundError
from fixitnow.domain.exceptions.state_error import (
    ForbiddenActionError,
    IllegalStateError,
)
from fixitnow.domain.exceptions.validation_error import ValidationError
from fixitnow.domain.value_objects.actor import ActorKind, ActorRef
from fixitnow.domain.value_objects.bank_account import BankAccount
from fixitnow.domain.value_objects.payment_status import PayoutStatus
from fixitnow.domain.value_objects.pricing import round_money
from fixitnow.infrastructure.database.repositories.transaction_repository import (
    TransactionService,
)
from fixitnow.infrastructure.monitoring.metrics import record_payout_event

logger = get_logger(__name__)


@dataclass
class PayoutBalance:
    """Earnings available for withdrawal."""

    total_earnings: float
    reserved: float
    available: float
    minimum_payout: float
    has_outstanding_payout: bool

    @property
    def can_request_payout(self) -> bool:
        return (
            not self.has_outstanding_payout and self.available >= self.minimum_payout
        )


@dataclass
class RequestPayoutRequest:
    professional_id: UUID
    amount: float
    bank_account: BankAccount
    notes: Optional[str] = None
    processing_fee: float = 0


@dataclass
class UpdatePayoutStatusRequest:
    payout_id: UUID
    actor: ActorRef
    status: str
    failure_reason: Optional[str] = None
    transaction_id: Optional[str] = None


class GetPayoutBalanceUseCase:
    """Use case computing what a professional can still withdraw."""

    def __init__(
        self,
        job_repo: JobRepositoryInterface,
        payout_repo: PayoutRepositoryInterface,
        minimum_payout: Optional[float] = None,
    ):
        self.job_repo = job_repo
        self.payout_repo = payout_repo
        self.minimum_payout = (
            settings.MIN_PAYOUT_AMOUNT if minimum_payout is None else minimum_payout
        )

    async def execute(self, professional_id: UUID) -> PayoutBalance:
        total_earnings = round_money(
            await self.job_repo.get_settled_earnings(professional_id)
        )
        reserved = round_money(await self.payout_repo.get_reserved_amount(professional_id))
        outstanding = await self.payout_repo.has_outstanding(professional_id)

        return PayoutBalance(
            total_earnings=total_earnings,
            reserved=reserved,
            available=round_money(max(total_earnings - reserved, 0)),
            minimum_payout=self.minimum_payout,
            has_outstanding_payout=outstanding,
        )


class RequestPayoutUseCase:
    """Use case for a professional withdrawing settled earnings."""

    def __init__(
        self,
        payout_repo: PayoutRepositoryInterface,
        balance_use_case: GetPayoutBalanceUseCase,
        transaction_service: TransactionService,
    ):
        self.payout_repo = payout_repo
        self.balance_use_case = balance_use_case
        self.transaction_service = transaction_service

    async def execute(self, request: RequestPayoutRequest) -> Payout:
        balance = await self.balance_use_case.execute(request.professional_id)

        if request.amount is None or request.amount < balance.minimum_payout:
            raise ValidationError(
                f"Minimum payout amount is {balance.minimum_payout:.2f}"
            )
        if balance.has_outstanding_payout:
            raise IllegalStateError("A payout request is already pending")
        if request.amount > balance.available:
            raise ValidationError(
                f"Insufficient balance: available {balance.available:.2f}"
            )

        payout = Payout(
            professional_id=request.professional_id,
            amount=round_money(request.amount),
            bank_account=request.bank_account,
            processing_fee=request.processing_fee,
            notes=request.notes,
            currency=settings.DEFAULT_CURRENCY,
        )

        created = await self.transaction_service.execute_in_transaction(
            lambda: self.payout_repo.create(payout), name="payout_request"
        )

        record_payout_event(created.status.value)
        logger.info(
            "Payout requested",
            payout_id=str(created.id),
            professional_id=str(created.professional_id),
            amount=created.amount,
            net_amount=created.net_amount,
        )
        return created


class UpdatePayoutStatusUseCase:
    """Use case for an admin moving a payout through processing."""

    def __init__(
        self,
        payout_repo: PayoutRepositoryInterface,
        transaction_service: TransactionService,
        dispatcher: NotificationDispatcher,
    ):
        self.payout_repo = payout_repo
        self.transaction_service = transaction_service
        self.dispatcher = dispatcher

    async def execute(self, request: UpdatePayoutStatusRequest) -> Payout:
        if request.actor.kind != ActorKind.ADMIN:
            raise ForbiddenActionError("Only admins can update payout status")

        async def operation() -> Payout:
            payout = await self.payout_repo.get_by_id(request.payout_id)
            if not payout:
                raise NotFoundError("Payout", request.payout_id)
            payout.update_status(
                request.status,
                failure_reason=request.failure_reason,
                transaction_id=request.transaction_id,
            )
            return await self.payout_repo.update(payout)

        payout = await self.transaction_service.execute_in_transaction(
            operation, name="payout_status_update"
        )

        record_payout_event(payout.status.value)
        await self.dispatcher.dispatch_all(job_notifications.for_payout(payout))
        return payout


class ListPayoutsUseCase:
    """Use case listing a professional's payouts, newest first."""

    def __init__(self, payout_repo: PayoutRepositoryInterface):
        self.payout_repo = payout_repo

    async def execute(
        self,
        professional_id: UUID,
        status: Optional[str] = None,
        limit: int = 20,
        offset: int = 0,
    ) -> List[Payout]:
        status_filter = None
        if status:
            try:
                status_filter = PayoutStatus(status)
            except ValueError:
                raise ValidationError(f"Invalid payout status '{status}'") from None

        return await self.payout_repo.find_by_professional(
            professional_id, status=status_filter, limit=limit, offset=offset
        )
