"""
Payout endpoints for professionals withdrawing their earnings.
"""

from dataclasses import asdict
from typing import Optional
from uuid import UUID

from fastapi import APIRouter, Query, status

from fixitnow.api.dependencies import (
    ActorDep,
    JobRepositoryDep,
    NotificationDispatcherDep,
    PayoutRepositoryDep,
    TransactionServiceDep,
)
from fixitnow.api.schemas.common import DataResponse
from fixitnow.api.schemas.payment import (
    PayoutCreateRequest,
    PayoutStatusUpdateRequest,
    serialize_payout,
)
from fixitnow.application.use_cases.payouts import (
    GetPayoutBalanceUseCase,
    ListPayoutsUseCase,
    RequestPayoutRequest,
    RequestPayoutUseCase,
    UpdatePayoutStatusRequest,
    UpdatePayoutStatusUseCase,
)
from fixitnow.config.logging import get_logger
from fixitnow.domain.exceptions.state_error import ForbiddenActionError
from fixitnow.domain.value_objects.actor import ActorKind, ActorRef

logger = get_logger(__name__)
router = APIRouter(prefix="/payouts", tags=["payouts"])


def _require_professional(actor: ActorRef) -> UUID:
    if actor.kind != ActorKind.PROFESSIONAL:
        raise ForbiddenActionError("Only professionals have payouts")
    return actor.id


@router.get("/balance", response_model=DataResponse)
async def get_payout_balance(
    actor: ActorDep,
    job_repository: JobRepositoryDep,
    payout_repository: PayoutRepositoryDep,
):
    """Settled earnings, reserved amount and what is left to withdraw."""
    professional_id = _require_professional(actor)
    balance = await GetPayoutBalanceUseCase(job_repository, payout_repository).execute(
        professional_id
    )
    data = asdict(balance)
    data["can_request_payout"] = balance.can_request_payout
    return DataResponse(data=data)


@router.post("", response_model=DataResponse, status_code=status.HTTP_201_CREATED)
async def request_payout(
    payout_data: PayoutCreateRequest,
    actor: ActorDep,
    job_repository: JobRepositoryDep,
    payout_repository: PayoutRepositoryDep,
    transaction_service: TransactionServiceDep,
):
    professional_id = _require_professional(actor)
    use_case = RequestPayoutUseCase(
        payout_repo=payout_repository,
        balance_use_case=GetPayoutBalanceUseCase(job_repository, payout_repository),
        transaction_service=transaction_service,
    )
    payout = await use_case.execute(
        RequestPayoutRequest(
            professional_id=professional_id,
            amount=payout_data.amount,
            bank_account=payout_data.bank_account.to_domain(),
            notes=payout_data.notes,
        )
    )
    return DataResponse(
        message="Payout request submitted successfully", data=serialize_payout(payout)
    )


@router.get("", response_model=DataResponse)
async def list_payouts(
    actor: ActorDep,
    payout_repository: PayoutRepositoryDep,
    status_filter: Optional[str] = Query(None, alias="status"),
    limit: int = Query(20, ge=1, le=100),
    offset: int = Query(0, ge=0),
):
    professional_id = _require_professional(actor)
    payouts = await ListPayoutsUseCase(payout_repository).execute(
        professional_id, status=status_filter, limit=limit, offset=offset
    )
    return DataResponse(data=[serialize_payout(payout) for payout in payouts])


@router.patch("/{payout_id}/status", response_model=DataResponse)
async def update_payout_status(
    payout_id: UUID,
    status_data: PayoutStatusUpdateRequest,
    actor: ActorDep,
    payout_repository: PayoutRepositoryDep,
    transaction_service: TransactionServiceDep,
    dispatcher: NotificationDispatcherDep,
):
    """Admin moves a payout through processing."""
    use_case = UpdatePayoutStatusUseCase(
        payout_repo=payout_repository,
        transaction_service=transaction_service,
        dispatcher=dispatcher,
    )
    payout = await use_case.execute(
        UpdatePayoutStatusRequest(
            payout_id=payout_id,
            actor=actor,
            status=status_data.status,
            failure_reason=status_data.failure_reason,
            transaction_id=status_data.transaction_id,
        )
    )
    return DataResponse(
        message=f"Payout status updated to {payout.status.value}",
        data=serialize_payout(payout),
    )
