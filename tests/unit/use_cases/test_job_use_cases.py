"""
Unit tests for the job creation, update and transition use cases.
"""

from datetime import datetime, timedelta, timezone
from uuid import uuid4

import pytest

from fixitnow.application.services.commission_calculator import CommissionCalculator
from fixitnow.application.services.invoice_generator import InvoiceGenerator
from fixitnow.application.services.job_lifecycle import JobLifecycleService
from fixitnow.application.use_cases.create_job import CreateJobRequest, CreateJobUseCase
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
from fixitnow.domain.events.party_notification import NotificationType
from fixitnow.domain.exceptions.not_found_error import NotFoundError
from fixitnow.domain.exceptions.state_error import (
    ConcurrencyConflictError,
    ForbiddenActionError,
    IllegalStateError,
)
from fixitnow.domain.exceptions.validation_error import (
    InvalidStatusError,
    ValidationError,
)
from fixitnow.domain.value_objects.job_status import JobStatus
from fixitnow.domain.value_objects.payment_status import PaymentStatus
from fixitnow.domain.value_objects.pricing import Budget


@pytest.fixture
def transition_use_case(in_memory_job_repository, retry_handler, dispatcher):
    lifecycle = JobLifecycleService(
        commission_calculator=CommissionCalculator(commission_rate=0.10),
        invoice_generator=InvoiceGenerator(tax_rate=0.18, due_days=7),
    )
    return TransitionJobUseCase(
        job_repo=in_memory_job_repository,
        lifecycle=lifecycle,
        retry_handler=retry_handler,
        dispatcher=dispatcher,
    )


async def _store(repo, job):
    return await repo.create(job)


class TestCreateJobUseCase:
    """Test cases for CreateJobUseCase."""

    @pytest.mark.asyncio
    async def test_creates_pending_job(
        self, mock_job_repository, mock_transaction_service, user_id, sample_location
    ):
        use_case = CreateJobUseCase(mock_job_repository, mock_transaction_service)

        job = await use_case.execute(
            CreateJobRequest(
                user_id=user_id,
                category="Electrical",
                location=sample_location,
                scheduled_date=datetime.now(timezone.utc) + timedelta(days=2),
                scheduled_time="14:00",
                budget=Budget(min=300, max=600),
                location_point={"type": "Point", "coordinates": [77.6, 12.9]},
            )
        )

        assert job.category.value == "Electrical"
        mock_job_repository.create.assert_awaited_once()
        mock_transaction_service.execute_in_transaction.assert_awaited_once()
        assert job.location_point.coordinates == (77.6, 12.9)

    @pytest.mark.asyncio
    async def test_invalid_input_never_reaches_repository(
        self, mock_job_repository, mock_transaction_service, user_id, sample_location
    ):
        use_case = CreateJobUseCase(mock_job_repository, mock_transaction_service)

        with pytest.raises(ValidationError):
            await use_case.execute(
                CreateJobRequest(
                    user_id=user_id,
                    category="Plumbing",
                    location=sample_location,
                    scheduled_date=datetime.now(timezone.utc),
                    scheduled_time="",
                )
            )
        mock_job_repository.create.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_malformed_point_is_not_stored(
        self, in_memory_job_repository, mock_transaction_service, user_id, sample_location
    ):
        use_case = CreateJobUseCase(in_memory_job_repository, mock_transaction_service)

        job = await use_case.execute(
            CreateJobRequest(
                user_id=user_id,
                category="Plumbing",
                location=sample_location,
                scheduled_date=datetime.now(timezone.utc),
                scheduled_time="09:00",
                location_point={"type": "Point", "coordinates": []},
            )
        )

        assert in_memory_job_repository.jobs[job.id].location_point is None


class TestQueries:
    @pytest.mark.asyncio
    async def test_missing_job(self, in_memory_job_repository):
        with pytest.raises(NotFoundError):
            await GetJobUseCase(in_memory_job_repository).execute(uuid4())

    @pytest.mark.asyncio
    async def test_status_history(self, in_memory_job_repository, make_job):
        job = await _store(in_memory_job_repository, make_job())

        history = await GetStatusHistoryUseCase(in_memory_job_repository).execute(job.id)

        assert [entry.status for entry in history] == [JobStatus.PENDING]


class TestUpdateJobDetailsUseCase:
    """Test cases for UpdateJobDetailsUseCase."""

    @pytest.mark.asyncio
    async def test_updates_pending_job(
        self, in_memory_job_repository, retry_handler, make_job, customer
    ):
        job = await _store(in_memory_job_repository, make_job())
        use_case = UpdateJobDetailsUseCase(in_memory_job_repository, retry_handler)

        updated = await use_case.execute(
            UpdateJobDetailsRequest(
                job_id=job.id, actor=customer, changes={"title": "Replace tap"}
            )
        )

        assert updated.title == "Replace tap"
        assert updated.version == job.version + 1

    @pytest.mark.asyncio
    async def test_malformed_point_unsets_stored_point(
        self, in_memory_job_repository, retry_handler, make_job, customer
    ):
        job = await _store(
            in_memory_job_repository,
            make_job(location_point={"type": "Point", "coordinates": [77.6, 12.9]}),
        )
        use_case = UpdateJobDetailsUseCase(in_memory_job_repository, retry_handler)

        updated = await use_case.execute(
            UpdateJobDetailsRequest(
                job_id=job.id,
                actor=customer,
                changes={"location_point": {"type": "Point", "coordinates": []}},
            )
        )

        assert updated.location_point is None

    @pytest.mark.asyncio
    async def test_only_pending_jobs(
        self, in_memory_job_repository, retry_handler, make_job, customer
    ):
        job = make_job()
        job.transition_to(JobStatus.CANCELLED, customer)
        in_memory_job_repository.jobs[job.id] = job
        use_case = UpdateJobDetailsUseCase(in_memory_job_repository, retry_handler)

        with pytest.raises(IllegalStateError):
            await use_case.execute(
                UpdateJobDetailsRequest(job_id=job.id, actor=customer, changes={"title": "x"})
            )

    @pytest.mark.asyncio
    async def test_only_customer(
        self, in_memory_job_repository, retry_handler, make_job, professional
    ):
        job = await _store(in_memory_job_repository, make_job())
        use_case = UpdateJobDetailsUseCase(in_memory_job_repository, retry_handler)

        with pytest.raises(ForbiddenActionError):
            await use_case.execute(
                UpdateJobDetailsRequest(job_id=job.id, actor=professional, changes={"title": "x"})
            )

    @pytest.mark.asyncio
    async def test_lifecycle_fields_cannot_be_patched(
        self, in_memory_job_repository, retry_handler, make_job, customer
    ):
        job = await _store(in_memory_job_repository, make_job())
        use_case = UpdateJobDetailsUseCase(in_memory_job_repository, retry_handler)

        with pytest.raises(ValidationError):
            await use_case.execute(
                UpdateJobDetailsRequest(
                    job_id=job.id, actor=customer, changes={"status": "completed"}
                )
            )

    @pytest.mark.asyncio
    async def test_invalid_values_rejected(
        self, in_memory_job_repository, retry_handler, make_job, customer
    ):
        job = await _store(in_memory_job_repository, make_job())
        use_case = UpdateJobDetailsUseCase(in_memory_job_repository, retry_handler)

        with pytest.raises(ValidationError):
            await use_case.execute(
                UpdateJobDetailsRequest(
                    job_id=job.id, actor=customer, changes={"title": "x" * 101}
                )
            )
        assert in_memory_job_repository.jobs[job.id].version == 0

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "field_name",
        ["estimated_duration", "category", "priority", "scheduled_date", "scheduled_time", "location"],
    )
    async def test_required_fields_cannot_be_nulled(
        self, in_memory_job_repository, retry_handler, make_job, customer, field_name
    ):
        job = await _store(in_memory_job_repository, make_job())
        use_case = UpdateJobDetailsUseCase(in_memory_job_repository, retry_handler)

        with pytest.raises(ValidationError):
            await use_case.execute(
                UpdateJobDetailsRequest(
                    job_id=job.id, actor=customer, changes={field_name: None}
                )
            )
        assert in_memory_job_repository.jobs[job.id].version == 0
        assert in_memory_job_repository.jobs[job.id].estimated_duration == 2


class TestTransitionJobUseCase:
    """Test cases for TransitionJobUseCase."""

    @pytest.mark.asyncio
    async def test_full_online_lifecycle(
        self,
        transition_use_case,
        in_memory_job_repository,
        mock_notifier,
        make_job,
        customer,
        professional,
    ):
        job = await _store(in_memory_job_repository, make_job(fixed_rate=1000))

        await transition_use_case.execute(
            TransitionJobRequest(job_id=job.id, new_status="accepted", actor=professional)
        )
        await transition_use_case.execute(
            TransitionJobRequest(job_id=job.id, new_status="in_progress", actor=professional)
        )
        completed = await transition_use_case.complete(
            CompleteJobRequest(job_id=job.id, actor=professional, tip_amount=50)
        )

        assert completed.status == JobStatus.COMPLETED
        assert [entry.status.value for entry in completed.status_history] == [
            "pending",
            "accepted",
            "in_progress",
            "completed",
        ]
        changed_at = [entry.changed_at for entry in completed.status_history]
        assert changed_at == sorted(changed_at)
        assert completed.final_price == 1000
        assert completed.commission.provider_earnings == 900
        assert completed.invoice.subtotal == 1050
        assert completed.payment_status == PaymentStatus.PENDING
        assert completed.version == 3

        sent_types = [call.args[0].type for call in mock_notifier.notify.await_args_list]
        assert NotificationType.JOB_ACCEPTED in sent_types
        assert NotificationType.JOB_COMPLETED in sent_types
        assert NotificationType.PAYMENT_DUE in sent_types

    @pytest.mark.asyncio
    async def test_complete_cash_job_within_budget(
        self, transition_use_case, in_memory_job_repository, make_job, professional
    ):
        job = make_job(budget=Budget(min=500, max=1000), professional_id=professional.id)
        job.transition_to(JobStatus.ACCEPTED, professional)
        in_memory_job_repository.jobs[job.id] = job

        completed = await transition_use_case.complete(
            CompleteJobRequest(
                job_id=job.id, actor=professional, final_price=800, payment_method="cash"
            )
        )

        assert completed.final_price == 800
        assert completed.payment_status == PaymentStatus.CASH_PENDING
        assert completed.cash_payment_details.amount == 800

    @pytest.mark.asyncio
    async def test_final_price_outside_budget(
        self, transition_use_case, in_memory_job_repository, make_job, professional
    ):
        job = make_job(budget=Budget(min=500, max=1000), professional_id=professional.id)
        job.transition_to(JobStatus.ACCEPTED, professional)
        in_memory_job_repository.jobs[job.id] = job

        with pytest.raises(ValidationError):
            await transition_use_case.complete(
                CompleteJobRequest(job_id=job.id, actor=professional, final_price=1500)
            )
        assert in_memory_job_repository.jobs[job.id].status == JobStatus.ACCEPTED

    @pytest.mark.asyncio
    async def test_invalid_payment_method(self, transition_use_case, professional):
        with pytest.raises(ValidationError):
            await transition_use_case.complete(
                CompleteJobRequest(job_id=uuid4(), actor=professional, payment_method="cheque")
            )

    @pytest.mark.asyncio
    async def test_unknown_status(
        self, transition_use_case, in_memory_job_repository, make_job, admin
    ):
        job = await _store(in_memory_job_repository, make_job())
        with pytest.raises(InvalidStatusError):
            await transition_use_case.execute(
                TransitionJobRequest(job_id=job.id, new_status="paused", actor=admin)
            )

    @pytest.mark.asyncio
    async def test_cancel_pending_job(
        self, transition_use_case, in_memory_job_repository, make_job, customer
    ):
        job = await _store(in_memory_job_repository, make_job())

        cancelled = await transition_use_case.execute(
            TransitionJobRequest(
                job_id=job.id, new_status="cancelled", actor=customer, notes="Not needed"
            )
        )

        assert cancelled.status == JobStatus.CANCELLED
        assert cancelled.cancelled_at is not None
        assert cancelled.status_history[-1].notes == "Not needed"

    @pytest.mark.asyncio
    async def test_notification_failure_does_not_fail_transition(
        self,
        transition_use_case,
        in_memory_job_repository,
        mock_notifier,
        make_job,
        professional,
    ):
        mock_notifier.notify.side_effect = RuntimeError("notification store down")
        job = await _store(in_memory_job_repository, make_job())

        accepted = await transition_use_case.execute(
            TransitionJobRequest(job_id=job.id, new_status="accepted", actor=professional)
        )

        assert accepted.status == JobStatus.ACCEPTED
        assert in_memory_job_repository.jobs[job.id].status == JobStatus.ACCEPTED

    @pytest.mark.asyncio
    async def test_concurrent_accept_has_single_winner(
        self, transition_use_case, in_memory_job_repository, make_job
    ):
        """Two professionals race to accept; the loser sees the job already taken."""
        from fixitnow.domain.value_objects.actor import ActorRef

        job = await _store(in_memory_job_repository, make_job())
        first = ActorRef.professional(uuid4())
        second = ActorRef.professional(uuid4())

        original_save = in_memory_job_repository.save
        raced = False

        async def save_after_competitor(entity):
            nonlocal raced
            if not raced:
                raced = True
                competitor = await in_memory_job_repository.get_by_id(entity.id)
                competitor.assign_professional(second.id)
                competitor.transition_to(JobStatus.ACCEPTED, second)
                await original_save(competitor)
            return await original_save(entity)

        in_memory_job_repository.save = save_after_competitor

        with pytest.raises(IllegalStateError):
            await transition_use_case.execute(
                TransitionJobRequest(job_id=job.id, new_status="accepted", actor=first)
            )

        stored = in_memory_job_repository.jobs[job.id]
        assert stored.professional_id == second.id
        assert [entry.status for entry in stored.status_history].count(JobStatus.ACCEPTED) == 1

    @pytest.mark.asyncio
    async def test_conflict_retries_are_bounded(
        self, transition_use_case, in_memory_job_repository, make_job, professional
    ):
        job = await _store(in_memory_job_repository, make_job())

        async def always_conflict(entity):
            raise ConcurrencyConflictError("Job", str(entity.id), entity.version)

        in_memory_job_repository.save = always_conflict

        with pytest.raises(ConcurrencyConflictError):
            await transition_use_case.execute(
                TransitionJobRequest(job_id=job.id, new_status="accepted", actor=professional)
            )
