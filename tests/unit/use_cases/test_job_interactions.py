"""
Unit tests for decline, messaging and rating use cases.
"""

import pytest

from fixitnow.application.use_cases.job_interactions import (
    DeclineJobUseCase,
    RateJobRequest,
    RateJobUseCase,
    SendJobMessageUseCase,
    SendMessageRequest,
)
from fixitnow.domain.events.party_notification import NotificationType
from fixitnow.domain.exceptions.state_error import (
    ForbiddenActionError,
    IllegalStateError,
)
from fixitnow.domain.exceptions.validation_error import ValidationError
from fixitnow.domain.value_objects.job_status import JobStatus


@pytest.fixture
def accepted_job(in_memory_job_repository, make_job, professional):
    job = make_job(professional_id=professional.id)
    job.transition_to(JobStatus.ACCEPTED, professional)
    in_memory_job_repository.jobs[job.id] = job
    return job


class TestDeclineJobUseCase:
    @pytest.mark.asyncio
    async def test_decline_is_recorded_once(
        self, in_memory_job_repository, retry_handler, make_job, professional
    ):
        job = await in_memory_job_repository.create(make_job())
        use_case = DeclineJobUseCase(
            job_repo=in_memory_job_repository, retry_handler=retry_handler
        )

        await use_case.execute(job.id, professional)
        result = await use_case.execute(job.id, professional)

        assert result.declined_by == [professional.id]
        assert in_memory_job_repository.save_calls == 1

    @pytest.mark.asyncio
    async def test_customers_cannot_decline(
        self, in_memory_job_repository, retry_handler, make_job, customer
    ):
        job = await in_memory_job_repository.create(make_job())
        use_case = DeclineJobUseCase(
            job_repo=in_memory_job_repository, retry_handler=retry_handler
        )

        with pytest.raises(ForbiddenActionError):
            await use_case.execute(job.id, customer)


class TestSendJobMessageUseCase:
    @pytest.mark.asyncio
    async def test_customer_message_notifies_professional(
        self,
        accepted_job,
        in_memory_job_repository,
        retry_handler,
        dispatcher,
        mock_notifier,
        customer,
        professional,
    ):
        use_case = SendJobMessageUseCase(
            job_repo=in_memory_job_repository,
            retry_handler=retry_handler,
            dispatcher=dispatcher,
        )

        message = await use_case.execute(
            SendMessageRequest(job_id=accepted_job.id, actor=customer, message="  On my way?  ")
        )

        assert message.message == "On my way?"
        assert len(in_memory_job_repository.jobs[accepted_job.id].messages) == 1
        notification = mock_notifier.notify.await_args.args[0]
        assert notification.recipient_id == professional.id

    @pytest.mark.asyncio
    async def test_outsiders_cannot_write(
        self, accepted_job, in_memory_job_repository, retry_handler, dispatcher, admin
    ):
        use_case = SendJobMessageUseCase(
            job_repo=in_memory_job_repository,
            retry_handler=retry_handler,
            dispatcher=dispatcher,
        )

        with pytest.raises(ForbiddenActionError):
            await use_case.execute(
                SendMessageRequest(job_id=accepted_job.id, actor=admin, message="Hello")
            )


class TestRateJobUseCase:
    @pytest.fixture
    def use_case(self, in_memory_job_repository, retry_handler, dispatcher):
        return RateJobUseCase(
            job_repo=in_memory_job_repository,
            retry_handler=retry_handler,
            dispatcher=dispatcher,
        )

    @pytest.mark.asyncio
    async def test_rates_completed_job(
        self, use_case, accepted_job, mock_notifier, customer, professional
    ):
        accepted_job.transition_to(JobStatus.COMPLETED, professional)

        job = await use_case.execute(
            RateJobRequest(job_id=accepted_job.id, actor=customer, rating=5, review="Great")
        )

        assert job.rating == 5
        assert job.review == "Great"
        notification = mock_notifier.notify.await_args.args[0]
        assert notification.type == NotificationType.REVIEW_RECEIVED

    @pytest.mark.asyncio
    async def test_rating_before_completion(self, use_case, accepted_job, customer):
        with pytest.raises(IllegalStateError):
            await use_case.execute(
                RateJobRequest(job_id=accepted_job.id, actor=customer, rating=4)
            )

    @pytest.mark.asyncio
    async def test_rating_out_of_range(self, use_case, accepted_job, customer, professional):
        accepted_job.transition_to(JobStatus.COMPLETED, professional)

        with pytest.raises(ValidationError):
            await use_case.execute(
                RateJobRequest(job_id=accepted_job.id, actor=customer, rating=6)
            )
