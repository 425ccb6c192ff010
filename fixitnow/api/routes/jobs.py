"""Job lifecycle API endpoints."""

from typing import Optional
from uuid import UUID

from fastapi import APIRouter, status

from fixitnow.api.dependencies import (
    ActorDep,
    InvoiceGeneratorDep,
    JobLifecycleDep,
    JobRepositoryDep,
    NotificationDispatcherDep,
    RetryHandlerDep,
    TransactionServiceDep,
)
from fixitnow.api.schemas.common import DataResponse
from fixitnow.api.schemas.job import (
    CompleteJobRequestSchema,
    JobCreateRequest,
    JobUpdateRequest,
    MessageRequest,
    NotesRequest,
    RateJobRequestSchema,
    StatusUpdateRequest,
    serialize_job,
)
from fixitnow.application.use_cases.create_job import CreateJobRequest, CreateJobUseCase
from fixitnow.application.use_cases.generate_invoice import GenerateInvoiceUseCase
from fixitnow.application.use_cases.job_interactions import (
    DeclineJobUseCase,
    RateJobRequest,
    RateJobUseCase,
    SendJobMessageUseCase,
    SendMessageRequest,
)
from fixitnow.application.use_cases.job_queries import (
    GetJobUseCase,
    GetStatusHistoryUseCase,
)
from fixitnow.application.use_cases.transition_job import (
    CompleteJobRequest,
    TransitionJobRequest,
    TransitionJobUseCase,
)
from fixitnow.application.use_cases.update_job import (
    UpdateJobDetailsRequest,
    UpdateJobDetailsUseCase,
)
from fixitnow.config.logging import get_logger
from fixitnow.domain.exceptions.state_error import ForbiddenActionError
from fixitnow.domain.value_objects.actor import ActorKind
from fixitnow.domain.value_objects.job_status import JobStatus

logger = get_logger(__name__)
router = APIRouter(prefix="/jobs", tags=["jobs"])


def _transition_use_case(
    job_repository, lifecycle, retry_handler, dispatcher
) -> TransitionJobUseCase:
    return TransitionJobUseCase(
        job_repo=job_repository,
        lifecycle=lifecycle,
        retry_handler=retry_handler,
        dispatcher=dispatcher,
    )


@router.post("", response_model=DataResponse, status_code=status.HTTP_201_CREATED)
async def create_job(
    job_data: JobCreateRequest,
    actor: ActorDep,
    job_repository: JobRepositoryDep,
    transaction_service: TransactionServiceDep,
):
    """Post a new job on behalf of a customer."""
    if actor.kind != ActorKind.ADMIN and (
        actor.kind != ActorKind.USER or actor.id != job_data.user_id
    ):
        raise ForbiddenActionError("Jobs can only be created by the customer")

    use_case = CreateJobUseCase(
        job_repo=job_repository, transaction_service=transaction_service
    )
    job = await use_case.execute(
        CreateJobRequest(
            user_id=job_data.user_id,
            category=job_data.category,
            location=job_data.location.to_domain(),
            scheduled_date=job_data.scheduled_date,
            scheduled_time=job_data.scheduled_time,
            title=job_data.title,
            description=job_data.description,
            priority=job_data.priority,
            estimated_duration=job_data.estimated_duration,
            budget=job_data.budget.to_domain() if job_data.budget else None,
            fixed_rate=job_data.fixed_rate,
            location_point=job_data.location_point,
            payment_method=job_data.payment_method,
        )
    )
    return DataResponse(message="Job created successfully", data=serialize_job(job))


@router.get("/{job_id}", response_model=DataResponse)
async def get_job(job_id: UUID, actor: ActorDep, job_repository: JobRepositoryDep):
    job = await GetJobUseCase(job_repository).execute(job_id)
    return DataResponse(data=serialize_job(job))


@router.patch("/{job_id}", response_model=DataResponse)
async def update_job(
    job_id: UUID,
    job_data: JobUpdateRequest,
    actor: ActorDep,
    job_repository: JobRepositoryDep,
    retry_handler: RetryHandlerDep,
):
    """Edit a job that is still pending."""
    use_case = UpdateJobDetailsUseCase(job_repo=job_repository, retry_handler=retry_handler)
    job = await use_case.execute(
        UpdateJobDetailsRequest(job_id=job_id, actor=actor, changes=job_data.to_changes())
    )
    return DataResponse(message="Job updated successfully", data=serialize_job(job))


@router.get("/{job_id}/status-history", response_model=DataResponse)
async def get_status_history(
    job_id: UUID, actor: ActorDep, job_repository: JobRepositoryDep
):
    history = await GetStatusHistoryUseCase(job_repository).execute(job_id)
    return DataResponse(data=[entry.to_dict() for entry in history])


@router.patch("/{job_id}/status", response_model=DataResponse)
async def update_job_status(
    job_id: UUID,
    status_data: StatusUpdateRequest,
    actor: ActorDep,
    job_repository: JobRepositoryDep,
    lifecycle: JobLifecycleDep,
    retry_handler: RetryHandlerDep,
    dispatcher: NotificationDispatcherDep,
):
    """Move a job to any status its current state allows."""
    use_case = _transition_use_case(job_repository, lifecycle, retry_handler, dispatcher)
    job = await use_case.execute(
        TransitionJobRequest(
            job_id=job_id,
            new_status=status_data.status,
            actor=actor,
            notes=status_data.notes,
        )
    )
    return DataResponse(
        message=f"Job status updated to {job.status.value}", data=serialize_job(job)
    )


@router.post("/{job_id}/accept", response_model=DataResponse)
async def accept_job(
    job_id: UUID,
    actor: ActorDep,
    job_repository: JobRepositoryDep,
    lifecycle: JobLifecycleDep,
    retry_handler: RetryHandlerDep,
    dispatcher: NotificationDispatcherDep,
):
    use_case = _transition_use_case(job_repository, lifecycle, retry_handler, dispatcher)
    job = await use_case.execute(
        TransitionJobRequest(
            job_id=job_id, new_status=JobStatus.ACCEPTED, actor=actor, notes="Job accepted"
        )
    )
    return DataResponse(message="Job accepted successfully", data=serialize_job(job))


@router.post("/{job_id}/decline", response_model=DataResponse)
async def decline_job(
    job_id: UUID,
    actor: ActorDep,
    job_repository: JobRepositoryDep,
    retry_handler: RetryHandlerDep,
):
    use_case = DeclineJobUseCase(job_repo=job_repository, retry_handler=retry_handler)
    job = await use_case.execute(job_id, actor)
    return DataResponse(message="Job declined", data=serialize_job(job))


@router.post("/{job_id}/start", response_model=DataResponse)
async def start_job(
    job_id: UUID,
    actor: ActorDep,
    job_repository: JobRepositoryDep,
    lifecycle: JobLifecycleDep,
    retry_handler: RetryHandlerDep,
    dispatcher: NotificationDispatcherDep,
    body: Optional[NotesRequest] = None,
):
    use_case = _transition_use_case(job_repository, lifecycle, retry_handler, dispatcher)
    job = await use_case.execute(
        TransitionJobRequest(
            job_id=job_id,
            new_status=JobStatus.IN_PROGRESS,
            actor=actor,
            notes=body.notes if body else None,
        )
    )
    return DataResponse(message="Job started", data=serialize_job(job))


@router.post("/{job_id}/complete", response_model=DataResponse)
async def complete_job(
    job_id: UUID,
    completion: CompleteJobRequestSchema,
    actor: ActorDep,
    job_repository: JobRepositoryDep,
    lifecycle: JobLifecycleDep,
    retry_handler: RetryHandlerDep,
    dispatcher: NotificationDispatcherDep,
):
    """Complete a job, settling its price and generating the invoice."""
    use_case = _transition_use_case(job_repository, lifecycle, retry_handler, dispatcher)
    job = await use_case.complete(
        CompleteJobRequest(
            job_id=job_id,
            actor=actor,
            final_price=completion.final_price,
            payment_method=completion.payment_method,
            tip_amount=completion.tip_amount,
            notes=completion.notes,
        )
    )
    earnings = job.commission.provider_earnings if job.commission else 0
    return DataResponse(
        message=f"Job completed successfully! Provider earnings: {earnings:.2f}",
        data=serialize_job(job),
    )


@router.post("/{job_id}/cancel", response_model=DataResponse)
async def cancel_job(
    job_id: UUID,
    actor: ActorDep,
    job_repository: JobRepositoryDep,
    lifecycle: JobLifecycleDep,
    retry_handler: RetryHandlerDep,
    dispatcher: NotificationDispatcherDep,
    body: Optional[NotesRequest] = None,
):
    use_case = _transition_use_case(job_repository, lifecycle, retry_handler, dispatcher)
    job = await use_case.execute(
        TransitionJobRequest(
            job_id=job_id,
            new_status=JobStatus.CANCELLED,
            actor=actor,
            notes=body.notes if body else None,
        )
    )
    return DataResponse(message="Job cancelled", data=serialize_job(job))


@router.post(
    "/{job_id}/messages",
    response_model=DataResponse,
    status_code=status.HTTP_201_CREATED,
)
async def send_message(
    job_id: UUID,
    message_data: MessageRequest,
    actor: ActorDep,
    job_repository: JobRepositoryDep,
    retry_handler: RetryHandlerDep,
    dispatcher: NotificationDispatcherDep,
):
    use_case = SendJobMessageUseCase(
        job_repo=job_repository, retry_handler=retry_handler, dispatcher=dispatcher
    )
    message = await use_case.execute(
        SendMessageRequest(job_id=job_id, actor=actor, message=message_data.message)
    )
    return DataResponse(message="Message sent", data=message.to_dict())


@router.post("/{job_id}/rate", response_model=DataResponse)
async def rate_job(
    job_id: UUID,
    rating_data: RateJobRequestSchema,
    actor: ActorDep,
    job_repository: JobRepositoryDep,
    retry_handler: RetryHandlerDep,
    dispatcher: NotificationDispatcherDep,
):
    use_case = RateJobUseCase(
        job_repo=job_repository, retry_handler=retry_handler, dispatcher=dispatcher
    )
    job = await use_case.execute(
        RateJobRequest(
            job_id=job_id,
            actor=actor,
            rating=rating_data.rating,
            review=rating_data.review,
        )
    )
    return DataResponse(message="Job rated successfully", data=serialize_job(job))


@router.post("/{job_id}/generate-invoice", response_model=DataResponse)
async def generate_invoice(
    job_id: UUID,
    actor: ActorDep,
    job_repository: JobRepositoryDep,
    invoice_generator: InvoiceGeneratorDep,
    retry_handler: RetryHandlerDep,
):
    """Return the job's invoice, generating it on first call."""
    use_case = GenerateInvoiceUseCase(
        job_repo=job_repository,
        invoice_generator=invoice_generator,
        retry_handler=retry_handler,
    )
    invoice = await use_case.execute(job_id)
    return DataResponse(message="Invoice generated", data=invoice.to_dict())
