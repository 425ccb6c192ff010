"""
Payment endpoints: cash settlement confirmations and online payment verification.
"""

from typing import Optional
from uuid import UUID

from fastapi import APIRouter

from fixitnow.api.dependencies import (
    ActorDep,
    JobRepositoryDep,
    NotificationDispatcherDep,
    RetryHandlerDep,
)
from fixitnow.api.schemas.common import DataResponse
from fixitnow.api.schemas.job import serialize_job
from fixitnow.api.schemas.payment import (
    CashConfirmRequest,
    CashDisputeRequest,
    CashReceivedRequest,
    ReceiptPhotoRequest,
    VerifyPaymentRequestSchema,
)
from fixitnow.application.use_cases.cash_payment import (
    AddReceiptPhotoRequest,
    AddReceiptPhotoUseCase,
    ConfirmCashPaymentRequest,
    ConfirmCashPaymentUseCase,
    MarkCashReceivedRequest,
    MarkCashReceivedUseCase,
    RaiseCashDisputeRequest,
    RaiseCashDisputeUseCase,
)
from fixitnow.application.use_cases.verify_payment import (
    VerifyOnlinePaymentRequest,
    VerifyOnlinePaymentUseCase,
)
from fixitnow.config.logging import get_logger
from fixitnow.domain.value_objects.payment_status import PaymentStatus

logger = get_logger(__name__)
router = APIRouter(prefix="/payments", tags=["payments"])


def _cash_message(job, default: str) -> str:
    if job.payment_status == PaymentStatus.CASH_VERIFIED:
        return "Cash payment verified by both parties"
    return default


@router.post("/jobs/{job_id}/cash/received", response_model=DataResponse)
async def mark_cash_received(
    job_id: UUID,
    cash_data: CashReceivedRequest,
    actor: ActorDep,
    job_repository: JobRepositoryDep,
    retry_handler: RetryHandlerDep,
    dispatcher: NotificationDispatcherDep,
):
    """Professional acknowledges the cash was handed over."""
    use_case = MarkCashReceivedUseCase(
        job_repo=job_repository, retry_handler=retry_handler, dispatcher=dispatcher
    )
    job = await use_case.execute(
        MarkCashReceivedRequest(
            job_id=job_id,
            actor=actor,
            amount=cash_data.amount,
        )
    )
    return DataResponse(
        message=_cash_message(job, "Cash receipt recorded"), data=serialize_job(job)
    )


@router.post("/jobs/{job_id}/cash/confirm", response_model=DataResponse)
async def confirm_cash_payment(
    job_id: UUID,
    actor: ActorDep,
    job_repository: JobRepositoryDep,
    retry_handler: RetryHandlerDep,
    dispatcher: NotificationDispatcherDep,
    confirmation: Optional[CashConfirmRequest] = None,
):
    """Customer confirms the cash was paid, optionally quoting the verification code."""
    use_case = ConfirmCashPaymentUseCase(
        job_repo=job_repository, retry_handler=retry_handler, dispatcher=dispatcher
    )
    job = await use_case.execute(
        ConfirmCashPaymentRequest(
            job_id=job_id,
            actor=actor,
            verification_code=confirmation.verification_code if confirmation else None,
        )
    )
    return DataResponse(
        message=_cash_message(job, "Cash payment confirmed"), data=serialize_job(job)
    )


@router.post("/jobs/{job_id}/cash/dispute", response_model=DataResponse)
async def raise_cash_dispute(
    job_id: UUID,
    dispute: CashDisputeRequest,
    actor: ActorDep,
    job_repository: JobRepositoryDep,
    retry_handler: RetryHandlerDep,
    dispatcher: NotificationDispatcherDep,
):
    use_case = RaiseCashDisputeUseCase(
        job_repo=job_repository, retry_handler=retry_handler, dispatcher=dispatcher
    )
    job = await use_case.execute(
        RaiseCashDisputeRequest(job_id=job_id, actor=actor, reason=dispute.reason)
    )
    return DataResponse(message="Cash payment dispute raised", data=serialize_job(job))


@router.post("/jobs/{job_id}/cash/receipts", response_model=DataResponse)
async def add_receipt_photo(
    job_id: UUID,
    receipt: ReceiptPhotoRequest,
    actor: ActorDep,
    job_repository: JobRepositoryDep,
    retry_handler: RetryHandlerDep,
    dispatcher: NotificationDispatcherDep,
):
    use_case = AddReceiptPhotoUseCase(
        job_repo=job_repository, retry_handler=retry_handler, dispatcher=dispatcher
    )
    job = await use_case.execute(
        AddReceiptPhotoRequest(job_id=job_id, actor=actor, url=receipt.url)
    )
    return DataResponse(message="Receipt photo added", data=serialize_job(job))


@router.post("/verify", response_model=DataResponse)
async def verify_payment(
    payment_data: VerifyPaymentRequestSchema,
    actor: ActorDep,
    job_repository: JobRepositoryDep,
    retry_handler: RetryHandlerDep,
    dispatcher: NotificationDispatcherDep,
):
    """Record an online payment whose gateway signature was already checked."""
    use_case = VerifyOnlinePaymentUseCase(
        job_repo=job_repository, retry_handler=retry_handler, dispatcher=dispatcher
    )
    job = await use_case.execute(
        VerifyOnlinePaymentRequest(
            job_id=payment_data.job_id,
            gateway_order_id=payment_data.gateway_order_id,
            gateway_payment_id=payment_data.gateway_payment_id,
            gateway_signature=payment_data.gateway_signature,
            signature_valid=payment_data.signature_valid,
            actor=actor,
        )
    )
    return DataResponse(message="Payment verified successfully", data=serialize_job(job))
